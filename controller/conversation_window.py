from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from config.defaults import DEFAULT_SYSTEM_PROMPT
from config.defaults import RESERVED_COMMAND_PREFIX
from controller.events import ChatAuthor
from controller.events import ChatMessage

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    role: str
    content: str
    # Speaker label for the turn. flatten_prompt sends only role and content.
    name: str | None = None


def normalize_speaker_name(name: str) -> str:
    # Whitespace collapse must run before the strip, otherwise the
    # underscores would never be produced.
    collapsed = re.sub(r"\s+", "_", name or "")
    return re.sub(r"[^\w\s]", "", collapsed)


def is_reserved_command(text: str, prefix: str = RESERVED_COMMAND_PREFIX) -> bool:
    return (text or "").startswith(prefix)


def build_conversation_window(
    history: Iterable[ChatMessage],
    *,
    bot_user_id: int,
    trigger_author: ChatAuthor,
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    reserved_prefix: str = RESERVED_COMMAND_PREFIX,
) -> list[ConversationTurn]:
    """Turn oldest-first channel history into a role-tagged prompt window.

    Only two speakers are kept: this bot (assistant) and the author of the
    triggering message (user). Other humans, other bots and reserved-prefix
    messages are dropped.
    """
    window = [ConversationTurn(role=ROLE_SYSTEM, content=system_prompt)]
    bot_user_id = int(bot_user_id)
    trigger_author_id = int(trigger_author.id)

    for msg in history:
        if is_reserved_command(msg.content, reserved_prefix):
            continue
        if msg.author.id != bot_user_id and msg.author.is_bot:
            continue

        # Two independent checks; a bot author never triggers a relay.
        if msg.author.id == bot_user_id:
            window.append(
                ConversationTurn(
                    role=ROLE_ASSISTANT,
                    content=msg.content,
                    name=normalize_speaker_name(msg.author.name),
                )
            )
        if msg.author.id == trigger_author_id:
            window.append(
                ConversationTurn(
                    role=ROLE_USER,
                    content=msg.content,
                    name=normalize_speaker_name(trigger_author.name),
                )
            )

    return window
