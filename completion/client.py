from __future__ import annotations

import asyncio
import json
from typing import Any, Iterable

import aiohttp

from completion.response import normalize_completion_payload
from config.defaults import DEFAULT_COMPLETION_MODEL
from config.defaults import DEFAULT_COMPLETION_URL
from config.defaults import DISCORD_MAX_MESSAGE_LEN
from controller.conversation_window import ConversationTurn

ROLE_LABELS = {
    "system": "System",
    "user": "User",
    "assistant": "Assistant",
}


class CompletionTransportError(RuntimeError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def flatten_prompt(window: Iterable[ConversationTurn]) -> str:
    lines = []
    for turn in window:
        label = ROLE_LABELS.get(turn.role)
        lines.append(f"{label}: {turn.content}" if label else turn.content)
    return "\n".join(lines)


def build_request_body(prompt: str, model: str = DEFAULT_COMPLETION_MODEL) -> dict:
    return {
        "messages": [{"role": "user", "content": prompt}],
        "model": model,
    }


def decode_body(raw: str) -> Any:
    # The service answers with plain text or JSON depending on the model.
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class CompletionClient:
    """One-shot POST client for the remote text-completion service.

    No retries and no timeout beyond aiohttp's defaults; failures surface as
    CompletionTransportError.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_COMPLETION_URL,
        model: str = DEFAULT_COMPLETION_MODEL,
        max_reply_chars: int = DISCORD_MAX_MESSAGE_LEN,
        session: aiohttp.ClientSession | None = None,
    ):
        self.url = url
        self.model = model
        self.max_reply_chars = int(max_reply_chars)
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def request_raw(self, prompt: str) -> Any:
        session = await self._get_session()
        body = build_request_body(prompt, self.model)
        try:
            async with session.post(
                self.url,
                json=body,
                headers={"Content-Type": "application/json"},
            ) as resp:
                raw = await resp.text()
                if resp.status < 200 or resp.status >= 300:
                    raise CompletionTransportError(
                        f"completion service returned HTTP {resp.status}",
                        status=resp.status,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            print(f"[Completion] API Error: {exc!r}")
            raise CompletionTransportError(f"completion request failed: {exc}") from exc
        except CompletionTransportError as exc:
            print(f"[Completion] API Error: {exc}")
            raise
        return decode_body(raw)

    async def complete(self, window: Iterable[ConversationTurn]) -> str:
        prompt = flatten_prompt(window)
        payload = await self.request_raw(prompt)
        return normalize_completion_payload(payload, self.max_reply_chars)
