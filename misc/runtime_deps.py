from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RuntimeDeps:
    # message path
    relay: Any


@dataclass(frozen=True)
class RuntimeBootDeps:
    sync_app_commands: bool = True
