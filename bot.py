import os
import asyncio
import discord
from discord.ext import commands
from completion.client import CompletionClient
from config.defaults import DEFAULT_COMPLETION_URL
from config.defaults import DEFAULT_HISTORY_LIMIT
from config.defaults import DEFAULT_STATUS_HOST
from config.defaults import DEFAULT_STATUS_PORT
from config.defaults import RELAY_ERROR_REPLY
from config.defaults import RESERVED_COMMAND_PREFIX
from controller.chat_persona import load_chat_persona
from controller.chat_relay import ChatRelay
from controller.routing_state import RoutingState
from misc.runtime_wiring import wire_bot_runtime
from status.server import start_status_server

# =========================
# ENV
# =========================
# TOKEN is the legacy name; DISCORD_TOKEN wins when both are set.
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN") or os.getenv("TOKEN")

if not DISCORD_TOKEN:
    raise RuntimeError("Missing DISCORD_TOKEN env var")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        print(f"[CFG] invalid {name}={raw!r}; falling back to {default!r}")
        return default


STATUS_PORT = _env_int("PORT", DEFAULT_STATUS_PORT)
HISTORY_LIMIT = _env_int("RELAY_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)
if HISTORY_LIMIT < 1:
    print(f"[CFG] RELAY_HISTORY_LIMIT must be >= 1; falling back to {DEFAULT_HISTORY_LIMIT}")
    HISTORY_LIMIT = DEFAULT_HISTORY_LIMIT
COMPLETION_URL = os.getenv("RELAY_COMPLETION_URL", DEFAULT_COMPLETION_URL).strip() or DEFAULT_COMPLETION_URL

_RAW_PERSONA_PATH = os.getenv("RELAY_PERSONA_PATH")
PERSONA_PATH = os.getenv(
    "RELAY_PERSONA_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "chat_persona.yml"),
)
PERSONA, PERSONA_WARNING = load_chat_persona(PERSONA_PATH)
PERSONA_SOURCE = "env_override" if _RAW_PERSONA_PATH is not None else "file"
if PERSONA_WARNING:
    PERSONA_SOURCE = "fallback"

print(
    f"[CFG] status_port={STATUS_PORT} history_limit={HISTORY_LIMIT} "
    f"completion_url={COMPLETION_URL} model={PERSONA.model}"
)
print(f"[CFG] chat_persona={PERSONA.version} source={PERSONA_SOURCE} path={PERSONA_PATH}")
if PERSONA_WARNING:
    print(f"[CFG] {PERSONA_WARNING}")

# =========================
# RUNTIME STATE
# =========================
# Lives for the process lifetime only; a restart forgets the active channel.
routing_state = RoutingState()

completion_client = CompletionClient(url=COMPLETION_URL, model=PERSONA.model)

relay = ChatRelay(
    routing_state=routing_state,
    completion_client=completion_client,
    system_prompt=PERSONA.system_prompt,
    history_limit=HISTORY_LIMIT,
    reserved_prefix=RESERVED_COMMAND_PREFIX,
    error_reply=RELAY_ERROR_REPLY,
)

# =========================
# DISCORD BOT
# =========================
intents = discord.Intents.default()
intents.message_content = True

bot = commands.Bot(command_prefix=RESERVED_COMMAND_PREFIX, intents=intents)

wire_bot_runtime(
    bot,
    routing_state=routing_state,
    relay=relay,
)


async def main() -> None:
    async with bot:
        status_runner = await start_status_server(bot, host=DEFAULT_STATUS_HOST, port=STATUS_PORT)
        try:
            await bot.start(DISCORD_TOKEN)
        finally:
            await completion_client.close()
            await status_runner.cleanup()


if __name__ == "__main__":
    asyncio.run(main())
