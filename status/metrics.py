from __future__ import annotations

import math
import os
import platform
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import psutil

STATS_EMBED_COLOR = 0x0099FF
_BYTE_UNITS = ("Bytes", "KB", "MB", "GB")


@dataclass(frozen=True, slots=True)
class RuntimeStats:
    uptime_seconds: float
    runtime_version: str
    guild_count: int
    member_count: int
    channel_count: int
    websocket_ping_ms: int
    os_type: str
    arch: str
    cpu_count: int
    host_total_memory: int
    host_free_memory: int
    process_rss: int
    process_vms: int

    @property
    def host_used_memory(self) -> int:
        return max(0, self.host_total_memory - self.host_free_memory)

    @property
    def host_memory_percent(self) -> int:
        if not self.host_total_memory:
            return 0
        return round(self.host_used_memory / self.host_total_memory * 100)


def process_uptime_seconds(now: float | None = None) -> float:
    now = time.time() if now is None else float(now)
    started = psutil.Process(os.getpid()).create_time()
    return max(0.0, now - started)


def process_memory_usage() -> dict[str, int]:
    info = psutil.Process(os.getpid()).memory_info()
    return {"rss": int(info.rss), "vms": int(info.vms)}


def runtime_version() -> str:
    return f"v{platform.python_version()}"


def format_bytes(num_bytes: int | float) -> str:
    num_bytes = float(num_bytes or 0)
    if num_bytes <= 0:
        return "0 Bytes"
    i = 0
    while num_bytes >= 1024 and i < len(_BYTE_UNITS) - 1:
        num_bytes /= 1024
        i += 1
    value = round(num_bytes, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {_BYTE_UNITS[i]}"


def format_uptime(seconds: float) -> str:
    total = int(max(0, seconds))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{days} days, {hours} hours, {minutes} minutes, {secs} seconds"


def collect_runtime_stats(bot) -> RuntimeStats:
    guilds = list(getattr(bot, "guilds", []) or [])
    member_count = sum(int(getattr(g, "member_count", 0) or 0) for g in guilds)
    # Guild channels, cached threads and DM/group channels: the whole channel cache.
    channel_count = sum(1 for _ in bot.get_all_channels())
    channel_count += sum(len(getattr(g, "threads", None) or []) for g in guilds)
    channel_count += len(getattr(bot, "private_channels", None) or [])
    latency = getattr(bot, "latency", 0.0) or 0.0
    if math.isnan(latency) or math.isinf(latency):
        latency = 0.0

    host = psutil.virtual_memory()
    proc = process_memory_usage()
    return RuntimeStats(
        uptime_seconds=process_uptime_seconds(),
        runtime_version=runtime_version(),
        guild_count=len(guilds),
        member_count=member_count,
        channel_count=channel_count,
        websocket_ping_ms=int(round(latency * 1000)),
        os_type=platform.system().lower(),
        arch=platform.machine(),
        cpu_count=os.cpu_count() or 0,
        host_total_memory=int(host.total),
        host_free_memory=int(host.available),
        process_rss=proc["rss"],
        process_vms=proc["vms"],
    )


def build_stats_embed(stats: RuntimeStats, *, now: datetime | None = None) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "title": "🤖 Bot Statistics",
        "color": STATS_EMBED_COLOR,
        "fields": [
            {
                "name": "⏱️ Uptime",
                "value": f"`{format_uptime(stats.uptime_seconds)}`",
                "inline": False,
            },
            {
                "name": "🔧 Python Version",
                "value": f"`{stats.runtime_version}`",
                "inline": True,
            },
            {
                "name": "📊 Discord Stats",
                "value": (
                    f"❒ Total guilds: {stats.guild_count}\n"
                    f"❒ Total users: {stats.member_count}\n"
                    f"❒ Total channels: {stats.channel_count}\n"
                    f"❒ Websocket Ping: {stats.websocket_ping_ms} ms"
                ),
                "inline": False,
            },
            {
                "name": "💻 System Info",
                "value": (
                    f"❯ **OS:** {stats.os_type} [{stats.arch}]\n"
                    f"❯ **Cores:** {stats.cpu_count}\n"
                    f"❯ **Total Memory:** {format_bytes(stats.host_total_memory)}\n"
                    f"❯ **Used Memory:** {format_bytes(stats.host_used_memory)}\n"
                    f"❯ **Available Memory:** {format_bytes(stats.host_free_memory)}\n"
                    f"❯ **Memory Usage:** {stats.host_memory_percent}%"
                ),
                "inline": False,
            },
            {
                "name": "🔧 Process Memory",
                "value": (
                    f"❯ **RSS:** {format_bytes(stats.process_rss)}\n"
                    f"❯ **VMS:** {format_bytes(stats.process_vms)}"
                ),
                "inline": False,
            },
        ],
        "timestamp": now.isoformat(),
        "footer": {"text": "Bot Statistics"},
    }
