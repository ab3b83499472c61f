from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout
from types import SimpleNamespace

try:
    import discord
    from discord.ext import commands
except ModuleNotFoundError:
    discord = None
    commands = None

if commands is not None:
    from misc.commands.command_deps import CommandDeps
    from misc.commands.commands_chat import register as register_chat

from controller.routing_state import RoutingState
from status.metrics import RuntimeStats


class FakeResponse:
    def __init__(self):
        self.sent: list[dict] = []

    async def send_message(self, content=None, **kwargs):
        self.sent.append({"content": content, **kwargs})


def _interaction():
    return SimpleNamespace(
        user=SimpleNamespace(id=7),
        channel_id=55,
        response=FakeResponse(),
    )


def _stats() -> RuntimeStats:
    return RuntimeStats(
        uptime_seconds=61,
        runtime_version="v3.12.1",
        guild_count=1,
        member_count=3,
        channel_count=4,
        websocket_ping_ms=20,
        os_type="linux",
        arch="x86_64",
        cpu_count=2,
        host_total_memory=4096,
        host_free_memory=1024,
        process_rss=2048,
        process_vms=4096,
    )


@unittest.skipIf(commands is None, "discord.py not installed")
class ChatSlashCommandTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.state = RoutingState()
        self.bot = commands.Bot(command_prefix="!", intents=discord.Intents.none())
        register_chat(
            self.bot,
            deps=CommandDeps(routing_state=self.state, stats_provider=_stats),
        )

    def test_commands_registered_on_tree(self):
        names = {cmd.name for cmd in self.bot.tree.get_commands()}
        self.assertEqual(names, {"set-chatgpt", "chatgpt-reset", "botstats"})
        set_cmd = self.bot.tree.get_command("set-chatgpt")
        self.assertEqual([p.name for p in set_cmd.parameters], ["channel"])
        self.assertTrue(set_cmd.parameters[0].required)

    async def test_set_then_reset(self):
        set_cmd = self.bot.tree.get_command("set-chatgpt")
        interaction = _interaction()
        channel = SimpleNamespace(id=123, mention="<#123>")

        await set_cmd.callback(interaction, channel=channel)

        self.assertTrue(self.state.is_active(123))
        self.assertEqual(
            interaction.response.sent,
            [{"content": "ChatGPT channel has been set to <#123>", "ephemeral": True}],
        )

        reset_cmd = self.bot.tree.get_command("chatgpt-reset")
        interaction = _interaction()
        await reset_cmd.callback(interaction)

        self.assertFalse(self.state.is_active(123))
        self.assertEqual(
            interaction.response.sent,
            [{"content": "ChatGPT channel has been reset to default", "ephemeral": True}],
        )

    async def test_botstats_sends_ephemeral_embed(self):
        stats_cmd = self.bot.tree.get_command("botstats")
        interaction = _interaction()

        await stats_cmd.callback(interaction)

        self.assertEqual(len(interaction.response.sent), 1)
        sent = interaction.response.sent[0]
        self.assertTrue(sent["ephemeral"])
        self.assertIsNone(sent["content"])
        embed = sent["embed"]
        self.assertIsInstance(embed, discord.Embed)
        self.assertEqual(embed.title, "🤖 Bot Statistics")
        self.assertEqual(embed.colour.value, 0x0099FF)
        self.assertEqual(embed.footer.text, "Bot Statistics")
        self.assertEqual(len(embed.fields), 5)

    async def test_command_log_line_names_invoking_channel(self):
        reset_cmd = self.bot.tree.get_command("chatgpt-reset")
        self.state.set_active_channel(123)
        out = io.StringIO()

        with redirect_stdout(out):
            await reset_cmd.callback(_interaction())

        self.assertIn(
            "[Commands] /chatgpt-reset by user=7 channel=55 active=None",
            out.getvalue(),
        )


if __name__ == "__main__":
    unittest.main()
