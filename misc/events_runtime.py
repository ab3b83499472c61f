from __future__ import annotations

import discord
from controller.events import ChatMessage
from controller.events import ReplyPayload
from controller.conversation_window import is_reserved_command
from discord.ext import commands
from misc.runtime_deps import RuntimeBootDeps
from misc.runtime_deps import RuntimeDeps


async def fetch_channel_history(channel, limit: int) -> list[ChatMessage]:
    # history() yields newest-first; the window wants oldest-first.
    rows = [ChatMessage.from_discord(msg) async for msg in channel.history(limit=int(limit))]
    rows.reverse()
    return rows


async def send_message_reply(message: discord.Message, payload: ReplyPayload, *, fallback_text: str) -> None:
    try:
        await message.reply(payload.content)
    except Exception as e:
        print(f"[Relay] reply failed: {e!r} message={message.id}")
        if payload.content == fallback_text:
            return
        try:
            await message.channel.send(fallback_text)
        except Exception as e2:
            print(f"[Relay] fallback send failed: {e2!r} channel={message.channel.id}")


def register_runtime_events(
    bot: commands.Bot,
    *,
    deps: RuntimeDeps,
    boot: RuntimeBootDeps,
) -> None:
    @bot.event
    async def on_ready():
        print(f"[Gateway] {bot.user} is online!")
        if not boot.sync_app_commands or getattr(bot, "_app_commands_synced", False):
            return
        try:
            print("[Commands] Started refreshing application (/) commands.")
            synced = await bot.tree.sync()
            bot._app_commands_synced = True
            print(f"[Commands] Successfully reloaded {len(synced)} application (/) commands.")
        except Exception as e:
            print(f"[Commands] sync failed: {e!r}")

    @bot.event
    async def on_message(message: discord.Message):
        event = ChatMessage.from_discord(message)

        if not deps.relay.accepts(event):
            if not event.author.is_bot and is_reserved_command(event.content, deps.relay.reserved_prefix):
                await bot.process_commands(message)
            return

        channel = message.channel
        bot_user_id = int(bot.user.id)

        async def fetch_history(limit: int) -> list[ChatMessage]:
            return await fetch_channel_history(channel, limit)

        try:
            await channel.typing()
        except Exception as e:
            print(f"[Relay] typing indicator failed: {e!r} channel={event.channel_id}")

        # Gate already passed above; routing changes from here on apply to
        # the next message, not this one.
        payload = await deps.relay.relay_accepted(
            event,
            bot_user_id=bot_user_id,
            fetch_history=fetch_history,
        )
        await send_message_reply(message, payload, fallback_text=deps.relay.error_reply)
