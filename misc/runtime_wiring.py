from __future__ import annotations

from misc.commands.command_deps import CommandDeps
from misc.commands.commands_chat import register as register_chat
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps
from misc.events_runtime import register_runtime_events
from status.metrics import collect_runtime_stats


def wire_bot_runtime(
    bot,
    *,
    routing_state,
    relay,
    stats_provider=None,
    sync_app_commands: bool = True,
) -> None:
    if stats_provider is None:
        def stats_provider():
            return collect_runtime_stats(bot)

    register_chat(
        bot,
        deps=CommandDeps(
            routing_state=routing_state,
            stats_provider=stats_provider,
        ),
    )

    register_runtime_events(
        bot,
        deps=RuntimeDeps(relay=relay),
        boot=RuntimeBootDeps(sync_app_commands=sync_app_commands),
    )
