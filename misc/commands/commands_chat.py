from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands
from controller.admin_commands import COMMAND_DESCRIPTIONS
from controller.admin_commands import RESET_CHANNEL_COMMAND
from controller.admin_commands import SET_CHANNEL_COMMAND
from controller.admin_commands import STATS_COMMAND
from controller.admin_commands import dispatch_command
from controller.events import CommandInvoked
from controller.events import ReplyPayload
from misc.commands.command_deps import CommandDeps


async def send_interaction_reply(interaction: discord.Interaction, payload: ReplyPayload) -> None:
    kwargs = {"ephemeral": payload.ephemeral}
    if payload.content is not None:
        kwargs["content"] = payload.content
    if payload.embed is not None:
        kwargs["embed"] = discord.Embed.from_dict(payload.embed)
    await interaction.response.send_message(**kwargs)


def _invoked(interaction: discord.Interaction, name: str, **options) -> CommandInvoked:
    return CommandInvoked(
        name=name,
        user_id=int(interaction.user.id),
        channel_id=(int(interaction.channel_id) if interaction.channel_id is not None else None),
        options=options,
    )


def register(
    bot: commands.Bot,
    *,
    deps: CommandDeps,
) -> None:
    async def run(interaction: discord.Interaction, event: CommandInvoked) -> None:
        payload = dispatch_command(
            event,
            routing_state=deps.routing_state,
            stats_provider=deps.stats_provider,
        )
        print(
            f"[Commands] /{event.name} by user={event.user_id} channel={event.channel_id} "
            f"active={deps.routing_state.active_channel_id}"
        )
        await send_interaction_reply(interaction, payload)

    @bot.tree.command(name=SET_CHANNEL_COMMAND, description=COMMAND_DESCRIPTIONS[SET_CHANNEL_COMMAND])
    @app_commands.describe(channel="The channel to set for ChatGPT")
    async def cmd_set_chatgpt(interaction: discord.Interaction, channel: discord.abc.GuildChannel):
        await run(
            interaction,
            _invoked(
                interaction,
                SET_CHANNEL_COMMAND,
                channel_id=int(channel.id),
                channel_mention=getattr(channel, "mention", None),
            ),
        )

    @bot.tree.command(name=RESET_CHANNEL_COMMAND, description=COMMAND_DESCRIPTIONS[RESET_CHANNEL_COMMAND])
    async def cmd_chatgpt_reset(interaction: discord.Interaction):
        await run(interaction, _invoked(interaction, RESET_CHANNEL_COMMAND))

    @bot.tree.command(name=STATS_COMMAND, description=COMMAND_DESCRIPTIONS[STATS_COMMAND])
    async def cmd_botstats(interaction: discord.Interaction):
        await run(interaction, _invoked(interaction, STATS_COMMAND))
