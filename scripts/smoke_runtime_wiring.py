from __future__ import annotations

import importlib


class _DummyCompletionClient:
    async def complete(self, window):
        return "ok"


def _try_import_or_skip(module_name: str, pip_name: str | None = None) -> bool:
    try:
        importlib.import_module(module_name)
        return True
    except ModuleNotFoundError:
        install_name = pip_name or module_name
        print(
            f"Smoke wiring check skipped: missing dependency '{module_name}'. "
            f"Install requirements and retry (e.g. `pip install {install_name}` "
            f"or `pip install -e .`)."
        )
        return False


def _main() -> int:
    if not _try_import_or_skip("discord", "discord.py"):
        return 0

    import discord
    from discord.ext import commands
    from controller.chat_relay import ChatRelay
    from controller.routing_state import RoutingState
    from misc.runtime_wiring import wire_bot_runtime

    intents = discord.Intents.none()
    bot = commands.Bot(command_prefix="!", intents=intents)
    routing_state = RoutingState()

    wire_bot_runtime(
        bot,
        routing_state=routing_state,
        relay=ChatRelay(
            routing_state=routing_state,
            completion_client=_DummyCompletionClient(),
        ),
        stats_provider=lambda: None,
        sync_app_commands=False,
    )

    expected_commands = {
        "set-chatgpt",
        "chatgpt-reset",
        "botstats",
    }
    existing_commands = {cmd.name for cmd in bot.tree.get_commands()}
    missing = sorted(expected_commands - existing_commands)
    if missing:
        raise RuntimeError(f"Missing expected commands: {missing}")

    if {"on_ready", "on_message"} - set(vars(bot)):
        raise RuntimeError("Runtime events were not registered")

    print("Smoke wiring check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
