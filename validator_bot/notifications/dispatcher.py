"""Delivery of rendered messages to subscribers."""

from validator_bot.helpers.constants import PARSE_MODE_HTML
from validator_bot.helpers.logging import get_logger
from validator_bot.notifications.telegram import MessageTransport


logger = get_logger(__name__)


class NotificationDispatcher:
    """Pass-through to the transport that never raises and never retries."""

    def __init__(self, transport: MessageTransport) -> None:
        self.transport = transport

    async def send(self, subscriber_id: int, message: str) -> bool:
        """Send ``message`` to ``subscriber_id``.

        Returns:
            bool: Whether the transport accepted the message
        """
        try:
            delivered = await self.transport.send_message(
                subscriber_id, message, PARSE_MODE_HTML
            )
        except Exception:
            logger.exception("Delivery to %s raised", subscriber_id)
            return False

        if not delivered:
            logger.warning("Delivery to %s failed", subscriber_id)
        return delivered


__all__ = ["NotificationDispatcher"]
