from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable

from aiohttp import web

from config.defaults import DEFAULT_STATUS_HOST
from config.defaults import DEFAULT_STATUS_PORT
from status.metrics import process_memory_usage
from status.metrics import process_uptime_seconds
from status.metrics import runtime_version


def iso_timestamp(dt: datetime | None = None) -> str:
    dt = dt or datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StatusAPI:
    """Read-only liveness/metrics routes for uptime monitors."""

    def __init__(
        self,
        bot,
        *,
        uptime_func: Callable[[], float] = process_uptime_seconds,
        memory_func: Callable[[], dict] = process_memory_usage,
        clock: Callable[[], float] = time.time,
    ):
        self.bot = bot
        self.uptime_func = uptime_func
        self.memory_func = memory_func
        self.clock = clock

    def _guild_count(self) -> int:
        return len(getattr(self.bot, "guilds", None) or [])

    async def handle_root(self, request: web.Request) -> web.Response:
        """GET / - liveness"""
        return web.json_response({
            "status": "online",
            "uptime": self.uptime_func(),
            "timestamp": iso_timestamp(datetime.fromtimestamp(self.clock(), timezone.utc)),
            "bot_status": "Ready" if self.bot.user else "Not Ready",
            "guilds": self._guild_count(),
        })

    async def handle_ping(self, request: web.Request) -> web.Response:
        """GET /ping"""
        return web.json_response({
            "message": "pong",
            "timestamp": int(self.clock() * 1000),
        })

    async def handle_status(self, request: web.Request) -> web.Response:
        """GET /status - bot identity and process metrics"""
        user = self.bot.user
        return web.json_response({
            "bot_name": str(user) if user else "Not logged in",
            "bot_id": str(user.id) if user else None,
            "guilds_count": self._guild_count(),
            "uptime_seconds": self.uptime_func(),
            "memory_usage": self.memory_func(),
            # Field name kept for existing monitors; carries the Python version.
            "node_version": runtime_version(),
        })


def create_status_app(bot, **kwargs) -> web.Application:
    api = StatusAPI(bot, **kwargs)
    app = web.Application()
    app.router.add_get("/", api.handle_root)
    app.router.add_get("/ping", api.handle_ping)
    app.router.add_get("/status", api.handle_status)
    return app


async def start_status_server(
    bot,
    *,
    host: str = DEFAULT_STATUS_HOST,
    port: int = DEFAULT_STATUS_PORT,
) -> web.AppRunner:
    runner = web.AppRunner(create_status_app(bot))
    await runner.setup()
    site = web.TCPSite(runner, host, int(port))
    await site.start()
    print(f"[Status] Uptime server running on port {port}")
    return runner
