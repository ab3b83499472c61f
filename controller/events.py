from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ChatAuthor:
    id: int
    name: str
    is_bot: bool = False


@dataclass(frozen=True, slots=True)
class ChatMessage:
    id: int
    channel_id: int
    author: ChatAuthor
    content: str

    @classmethod
    def from_discord(cls, message) -> "ChatMessage":
        author = message.author
        return cls(
            id=int(getattr(message, "id", 0) or 0),
            channel_id=int(message.channel.id),
            author=ChatAuthor(
                id=int(author.id),
                name=str(getattr(author, "name", "") or ""),
                is_bot=bool(getattr(author, "bot", False)),
            ),
            content=str(message.content or ""),
        )


@dataclass(frozen=True, slots=True)
class CommandInvoked:
    name: str
    user_id: int
    channel_id: int | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ReplyPayload:
    content: str | None = None
    embed: dict[str, Any] | None = None
    ephemeral: bool = False
