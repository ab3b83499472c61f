from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Callable


@dataclass(frozen=True)
class CommandDeps:
    # Core/shared
    routing_state: Any = None

    # Read-only runtime metrics for botstats
    stats_provider: Callable[[], Any] | None = None
