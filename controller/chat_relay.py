from __future__ import annotations

from typing import Awaitable, Callable

from config.defaults import DEFAULT_HISTORY_LIMIT
from config.defaults import DEFAULT_SYSTEM_PROMPT
from config.defaults import RELAY_ERROR_REPLY
from config.defaults import RESERVED_COMMAND_PREFIX
from controller.conversation_window import build_conversation_window
from controller.conversation_window import is_reserved_command
from controller.events import ChatMessage
from controller.events import ReplyPayload
from controller.routing_state import RoutingState

FetchHistory = Callable[[int], Awaitable[list[ChatMessage]]]


def should_relay(
    message: ChatMessage,
    routing_state: RoutingState,
    reserved_prefix: str = RESERVED_COMMAND_PREFIX,
) -> bool:
    if message.author.is_bot:
        return False
    if not routing_state.is_active(message.channel_id):
        return False
    if is_reserved_command(message.content, reserved_prefix):
        return False
    return True


class ChatRelay:
    def __init__(
        self,
        *,
        routing_state: RoutingState,
        completion_client,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        reserved_prefix: str = RESERVED_COMMAND_PREFIX,
        error_reply: str = RELAY_ERROR_REPLY,
    ):
        self.routing_state = routing_state
        self.completion_client = completion_client
        self.system_prompt = system_prompt
        self.history_limit = max(1, int(history_limit))
        self.reserved_prefix = reserved_prefix
        self.error_reply = error_reply

    def accepts(self, message: ChatMessage) -> bool:
        return should_relay(message, self.routing_state, self.reserved_prefix)

    async def handle_message(
        self,
        message: ChatMessage,
        *,
        bot_user_id: int,
        fetch_history: FetchHistory,
    ) -> ReplyPayload | None:
        """
        Returns the reply to post, or None when the message is not for us.

        fetch_history(limit) must return the channel's latest messages
        oldest-first, the triggering message included.
        """
        if not self.accepts(message):
            return None
        return await self.relay_accepted(message, bot_user_id=bot_user_id, fetch_history=fetch_history)

    async def relay_accepted(
        self,
        message: ChatMessage,
        *,
        bot_user_id: int,
        fetch_history: FetchHistory,
    ) -> ReplyPayload:
        # No gate here: the caller already checked accepts() before its first
        # await, so a set/reset landing mid-flight only affects later messages.
        try:
            history = await fetch_history(self.history_limit)
            window = build_conversation_window(
                history,
                bot_user_id=bot_user_id,
                trigger_author=message.author,
                system_prompt=self.system_prompt,
                reserved_prefix=self.reserved_prefix,
            )
            text = await self.completion_client.complete(window)
        except Exception as e:
            print(f"[Relay] ERR: {e!r} channel={message.channel_id} message={message.id}")
            return ReplyPayload(content=self.error_reply)

        return ReplyPayload(content=text)
