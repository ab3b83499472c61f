from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from config.defaults import DISCORD_MAX_MESSAGE_LEN
from config.defaults import UNEXPECTED_RESPONSE_REPLY

TRUNCATION_SUFFIX = "..."


@dataclass(frozen=True, slots=True)
class StringResult:
    text: str


@dataclass(frozen=True, slots=True)
class NestedChoiceResult:
    text: str


@dataclass(frozen=True, slots=True)
class MessageFieldResult:
    text: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    payload: Any = None

    @property
    def text(self) -> str:
        return UNEXPECTED_RESPONSE_REPLY


CompletionResult = Union[StringResult, NestedChoiceResult, MessageFieldResult, Unrecognized]


def _nested_choice_content(payload: dict) -> Any:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def classify_completion_payload(payload: Any) -> CompletionResult:
    """Map the service's loosely-typed body onto one of the known shapes."""
    if isinstance(payload, str):
        return StringResult(payload)
    if isinstance(payload, dict):
        content = _nested_choice_content(payload)
        if isinstance(content, str):
            return NestedChoiceResult(content)
        message = payload.get("message")
        if isinstance(message, str) and message:
            return MessageFieldResult(message)
    return Unrecognized(payload)


def truncate_for_discord(text: str, limit: int = DISCORD_MAX_MESSAGE_LEN) -> str:
    text = text or ""
    if len(text) <= limit:
        return text
    return text[: limit - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def normalize_completion_payload(payload: Any, limit: int = DISCORD_MAX_MESSAGE_LEN) -> str:
    result = classify_completion_payload(payload)
    match result:
        case StringResult(text=text) | NestedChoiceResult(text=text) | MessageFieldResult(text=text):
            reply = text
        case Unrecognized():
            print(f"[Completion] unexpected response shape: {type(result.payload).__name__}")
            reply = result.text
    return truncate_for_discord(reply, limit)
