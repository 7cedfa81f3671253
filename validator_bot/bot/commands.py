"""Chat commands: register, inspect and remove a validator, query status."""

from collections.abc import Awaitable, Callable

import asyncio

from validator_bot.helpers.address import format_address, is_valid_address
from validator_bot.helpers.constants import RECONNECT_BASE_DELAY
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.result import Err, Ok
from validator_bot.monitor import EpochMonitor
from validator_bot.notifications.messages import (
    ADDRESS_REMOVED,
    ADMIN_ONLY,
    ASK_ADDRESS,
    INVALID_ADDRESS,
    NO_ADDRESS,
    UNAVAILABLE,
    render_listening,
    render_rewards,
)
from validator_bot.notifications.telegram import TelegramTransport
from validator_bot.notifications.telegram_models import Message, Update
from validator_bot.subscribers.registry import SubscriberRegistry


logger = get_logger(__name__)

type CommandFn = Callable[[Message, str], Awaitable[None]]


class CommandHandler:
    """Long-polls Telegram for updates and answers bot commands.

    ``/start`` without an argument opens a one-step conversation: the next
    plain text message in that chat is taken as the validator address.
    """

    def __init__(
        self,
        transport: TelegramTransport,
        registry: SubscriberRegistry,
        monitor: EpochMonitor,
        retry_delay: float = RECONNECT_BASE_DELAY,
    ) -> None:
        self.transport = transport
        self.registry = registry
        self.monitor = monitor
        self.retry_delay = retry_delay

        self.awaiting_address: set[int] = set()
        self.offset: int | None = None
        self.should_shutdown = False

        self.commands: dict[str, CommandFn] = {
            "start": self.start,
            "validator": self.validator,
            "status": self.status,
            "money": self.money,
            "remove": self.remove,
        }

    async def poll(self) -> None:
        """Fetch and handle updates until shutdown."""
        logger.info("Command polling started")
        while not self.should_shutdown:
            try:
                updates = await self.transport.get_updates(self.offset)
                if updates is None:
                    await asyncio.sleep(self.retry_delay)
                    continue
            except asyncio.CancelledError:
                logger.info("Command polling cancelled")
                break

            for update in updates:
                self.offset = update.update_id + 1
                try:
                    await self.handle_update(update)
                except Exception:
                    logger.exception("Error handling update %s", update.update_id)

        logger.info("Command polling stopped")

    async def handle_update(self, update: Update) -> None:
        """Dispatch one update to a command or to a pending registration."""
        message = update.message
        if message is None or not message.text:
            return

        text = message.text.strip()
        chat_id = message.chat.id

        if text.startswith("/"):
            head, _, argument = text.partition(" ")
            name = head[1:].split("@", 1)[0].lower()
            command = self.commands.get(name)
            if command is None:
                return
            if name != "start":
                self.awaiting_address.discard(chat_id)
            await command(message, argument.strip())
        elif chat_id in self.awaiting_address:
            await self._register(message, text)

    async def _is_admin(self, message: Message) -> bool:
        if message.chat.is_private:
            return True
        if message.from_user is None:
            return False

        member = await self.transport.get_chat_member(
            message.chat.id, message.from_user.id
        )
        return member is not None and member.is_admin

    async def _require_admin(self, message: Message) -> bool:
        if await self._is_admin(message):
            return True
        await self.transport.reply(message.chat.id, ADMIN_ONLY)
        return False

    async def _register(self, message: Message, address: str) -> None:
        chat_id = message.chat.id
        self.awaiting_address.discard(chat_id)

        if not is_valid_address(address):
            await self.transport.reply(chat_id, INVALID_ADDRESS)
            return

        formatted = format_address(address)
        await self.registry.set_address(chat_id, formatted)
        await self.transport.reply(chat_id, render_listening(formatted))

    async def start(self, message: Message, argument: str) -> None:
        """Register the validator address this chat listens to."""
        if not await self._require_admin(message):
            return

        if argument:
            await self._register(message, argument)
            return

        self.awaiting_address.add(message.chat.id)
        await self.transport.reply(message.chat.id, ASK_ADDRESS, force_reply=True)

    async def validator(self, message: Message, _argument: str) -> None:
        """Show the registered validator address."""
        if not await self._require_admin(message):
            return

        subscriber = await self.registry.get(message.chat.id)
        if subscriber is None or not subscriber.validator_address:
            await self.transport.reply(message.chat.id, NO_ADDRESS)
            return
        await self.transport.reply(
            message.chat.id, render_listening(subscriber.validator_address)
        )

    async def status(self, message: Message, _argument: str) -> None:
        """Report slots and rewards for the latest election block."""
        subscriber = await self.registry.get(message.chat.id)
        if subscriber is None or not subscriber.validator_address:
            await self.transport.reply(message.chat.id, NO_ADDRESS)
            return

        match await self.monitor.report_on_demand(subscriber):
            case Err():
                await self.transport.reply(message.chat.id, UNAVAILABLE)
            case Ok():
                pass

    async def money(self, message: Message, _argument: str) -> None:
        """Report the validator's reward balance only."""
        subscriber = await self.registry.get(message.chat.id)
        if subscriber is None or not subscriber.validator_address:
            await self.transport.reply(message.chat.id, NO_ADDRESS)
            return

        match await self.monitor.reporter.rewards_for(subscriber.validator_address):
            case Err(error=error):
                logger.error("Rewards for chat %s failed: %s", message.chat.id, error)
                await self.transport.reply(message.chat.id, UNAVAILABLE)
            case Ok(value=reward):
                await self.transport.send_message(message.chat.id, render_rewards(reward))

    async def remove(self, message: Message, _argument: str) -> None:
        """Stop notifying this chat."""
        if not await self._require_admin(message):
            return

        await self.registry.remove(message.chat.id)
        self.awaiting_address.discard(message.chat.id)
        await self.transport.reply(message.chat.id, ADDRESS_REMOVED)

    def shutdown(self) -> None:
        """Stop after the current long-poll returns."""
        self.should_shutdown = True


__all__ = ["CommandHandler"]
