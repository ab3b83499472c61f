from __future__ import annotations


class RoutingState:
    """Holds the single channel currently designated for relayed replies.

    Created unset when the process starts and mutated only by the set/reset
    commands. Nothing is persisted, so a restart clears it.
    """

    __slots__ = ("_active_channel_id",)

    def __init__(self, active_channel_id: int | None = None):
        self._active_channel_id = int(active_channel_id) if active_channel_id is not None else None

    @property
    def active_channel_id(self) -> int | None:
        return self._active_channel_id

    def set_active_channel(self, channel_id: int) -> None:
        self._active_channel_id = int(channel_id)

    def reset_active_channel(self) -> None:
        self._active_channel_id = None

    def is_active(self, channel_id: int | None) -> bool:
        if self._active_channel_id is None or channel_id is None:
            return False
        return int(channel_id) == self._active_channel_id

    def __repr__(self) -> str:
        return f"RoutingState(active_channel_id={self._active_channel_id!r})"
