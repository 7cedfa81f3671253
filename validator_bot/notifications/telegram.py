"""Telegram Bot API transport over httpx."""

from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from validator_bot.helpers.constants import (
    PARSE_MODE_HTML,
    POLL_HTTP_TIMEOUT,
    POLL_TIMEOUT,
    TELEGRAM_API_URL,
)
from validator_bot.helpers.http import post_json
from validator_bot.helpers.logging import get_logger
from validator_bot.notifications.telegram_models import ApiResponse, ChatMember, Update


logger = get_logger(__name__)

_updates_adapter = TypeAdapter(list[Update])


class MessageTransport(Protocol):
    """Delivers one formatted message to one chat."""

    async def send_message(
        self, chat_id: int, text: str, parse_mode: str = PARSE_MODE_HTML
    ) -> bool:
        """Return True if the message was accepted."""
        ...


class TelegramTransport:
    """Minimal Telegram Bot API client."""

    def __init__(
        self,
        bot_token: str,
        http_client: httpx.AsyncClient,
        api_url: str = TELEGRAM_API_URL,
    ) -> None:
        """Initialize the transport.

        Raises:
            ValueError: If bot_token is empty
        """
        if not bot_token:
            msg = "Telegram bot token cannot be empty"
            raise ValueError(msg)

        self.http_client = http_client
        self.base_url = f"{api_url.rstrip('/')}/bot{bot_token}"

    async def _call(
        self, method: str, payload: dict[str, Any], *, timeout: float | None = None
    ) -> ApiResponse | None:
        data = await post_json(
            self.http_client, f"{self.base_url}/{method}", payload, timeout=timeout
        )
        if not isinstance(data, dict):
            return None

        try:
            response = ApiResponse.model_validate(data)
        except ValidationError:
            logger.warning("Malformed %s response", method)
            return None

        if not response.ok:
            logger.warning("%s rejected: %s", method, response.description)
            return None
        return response

    async def send_message(
        self, chat_id: int, text: str, parse_mode: str = PARSE_MODE_HTML
    ) -> bool:
        """Send ``text`` to ``chat_id``."""
        response = await self._call(
            "sendMessage",
            {"chat_id": chat_id, "text": text, "parse_mode": parse_mode},
        )
        return response is not None

    async def reply(self, chat_id: int, text: str, *, force_reply: bool = False) -> bool:
        """Send plain text, optionally asking the client to show a reply box."""
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if force_reply:
            payload["reply_markup"] = {"force_reply": True}
        return await self._call("sendMessage", payload) is not None

    async def get_updates(
        self, offset: int | None = None, timeout: int = POLL_TIMEOUT
    ) -> list[Update] | None:
        """Long-poll for new updates.

        Args:
            offset: First update id to return (last seen + 1)
            timeout: Seconds the server may hold the request open

        Returns:
            New updates (empty when the poll timed out), or None on failure
        """
        payload: dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ["message", "chat_member"],
        }
        if offset is not None:
            payload["offset"] = offset

        response = await self._call(
            "getUpdates", payload, timeout=max(POLL_HTTP_TIMEOUT, timeout + 10.0)
        )
        if response is None:
            return None

        try:
            return _updates_adapter.validate_python(response.result)
        except ValidationError:
            logger.warning("Malformed getUpdates result")
            return None

    async def get_chat_member(self, chat_id: int, user_id: int) -> ChatMember | None:
        """Look up a user's membership in a chat."""
        response = await self._call(
            "getChatMember", {"chat_id": chat_id, "user_id": user_id}
        )
        if response is None:
            return None

        try:
            return ChatMember.model_validate(response.result)
        except ValidationError:
            logger.warning("Malformed getChatMember result")
            return None


__all__ = [
    "MessageTransport",
    "TelegramTransport",
]
