from __future__ import annotations

from typing import Callable

from controller.events import CommandInvoked
from controller.events import ReplyPayload
from controller.routing_state import RoutingState
from status.metrics import RuntimeStats
from status.metrics import build_stats_embed

SET_CHANNEL_COMMAND = "set-chatgpt"
RESET_CHANNEL_COMMAND = "chatgpt-reset"
STATS_COMMAND = "botstats"

COMMAND_DESCRIPTIONS = {
    SET_CHANNEL_COMMAND: "Set the channel for ChatGPT responses",
    RESET_CHANNEL_COMMAND: "Reset the ChatGPT channel to default",
    STATS_COMMAND: "Display comprehensive bot statistics",
}


def set_channel(routing_state: RoutingState, *, channel_id: int, channel_mention: str | None = None) -> ReplyPayload:
    routing_state.set_active_channel(channel_id)
    mention = channel_mention or f"<#{int(channel_id)}>"
    return ReplyPayload(content=f"ChatGPT channel has been set to {mention}", ephemeral=True)


def reset_channel(routing_state: RoutingState) -> ReplyPayload:
    routing_state.reset_active_channel()
    return ReplyPayload(content="ChatGPT channel has been reset to default", ephemeral=True)


def report_stats(stats: RuntimeStats) -> ReplyPayload:
    return ReplyPayload(embed=build_stats_embed(stats), ephemeral=True)


def dispatch_command(
    event: CommandInvoked,
    *,
    routing_state: RoutingState,
    stats_provider: Callable[[], RuntimeStats],
) -> ReplyPayload:
    if event.name == SET_CHANNEL_COMMAND:
        channel_id = event.options.get("channel_id")
        if channel_id is None:
            raise ValueError(f"{SET_CHANNEL_COMMAND} requires a channel")
        return set_channel(
            routing_state,
            channel_id=int(channel_id),
            channel_mention=event.options.get("channel_mention"),
        )
    if event.name == RESET_CHANNEL_COMMAND:
        return reset_channel(routing_state)
    if event.name == STATS_COMMAND:
        return report_stats(stats_provider())
    raise ValueError(f"Unknown command: {event.name}")
