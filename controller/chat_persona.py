from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from config.defaults import DEFAULT_COMPLETION_MODEL
from config.defaults import DEFAULT_SYSTEM_PROMPT


@dataclass(slots=True)
class ChatPersona:
    version: str = "chat_persona_v1"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    model: str = DEFAULT_COMPLETION_MODEL


def default_chat_persona() -> ChatPersona:
    return ChatPersona()


def _clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def load_chat_persona(path: str | Path | None) -> tuple[ChatPersona, str | None]:
    """
    Returns (persona, warning_message). warning_message is None on clean load.
    """
    defaults = default_chat_persona()
    if not path:
        return (defaults, "Chat persona path missing; using built-in defaults.")

    p = Path(path)
    if not p.exists():
        return (defaults, f"Chat persona file not found at {p}; using built-in defaults.")

    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except Exception as exc:
        return (defaults, f"Failed to read chat persona from {p}: {exc}; using built-in defaults.")

    if not isinstance(payload, dict):
        return (defaults, f"Invalid chat persona format in {p}; using built-in defaults.")

    persona = ChatPersona(
        version=_clean_text(payload.get("version")) or defaults.version,
        system_prompt=_clean_text(payload.get("system_prompt")) or defaults.system_prompt,
        model=_clean_text(payload.get("model")) or defaults.model,
    )
    return (persona, None)
