"""Epoch transition monitor.

Consumes the election block stream and, for every new election block,
reports slots and rewards to each subscriber one after another. A failure
for one subscriber is logged and never stops the others or the listener.
The same reporting routine serves on-demand status requests against the
most recent election block.
"""

from collections.abc import AsyncIterable
from enum import StrEnum

from validator_bot.chain.models import ElectionBlock
from validator_bot.chain.query import ChainQuery
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.result import Err, Ok, Result, RpcError
from validator_bot.reporter import ValidatorReporter
from validator_bot.subscribers.models import Subscriber
from validator_bot.subscribers.registry import SubscriberRegistry


logger = get_logger(__name__)


class MonitorState(StrEnum):
    """Lifecycle of the monitor; reconnects happen inside the stream."""

    IDLE = "idle"
    SUBSCRIBED = "subscribed"


class EpochMonitor:
    """Fans each election block out to all registered subscribers."""

    def __init__(
        self,
        stream: AsyncIterable[Result[ElectionBlock | None, RpcError]],
        registry: SubscriberRegistry,
        reporter: ValidatorReporter,
        chain: ChainQuery,
    ) -> None:
        self.stream = stream
        self.registry = registry
        self.reporter = reporter
        self.chain = chain

        self.state = MonitorState.IDLE

        # Stats
        self.blocks_processed = 0
        self.reports_sent = 0
        self.reports_failed = 0

        # Shutdown flag
        self.should_shutdown = False

    async def run(self) -> None:
        """Process stream events in arrival order until the stream ends."""
        logger.info("Epoch monitor started")
        self.state = MonitorState.SUBSCRIBED
        try:
            async for event in self.stream:
                if self.should_shutdown:
                    break
                await self.handle_event(event)
        finally:
            self.state = MonitorState.IDLE
            logger.info("Epoch monitor stopped")

    async def handle_event(self, event: Result[ElectionBlock | None, RpcError]) -> None:
        """Handle one stream event; error events are logged and dropped."""
        match event:
            case Err(error=error):
                logger.error("Election block stream error: %s", error)
            case Ok(value=block):
                await self.handle_block(block)

    async def handle_block(self, block: ElectionBlock | None) -> None:
        """Report ``block`` to every subscriber that has a validator address."""
        if block is None or not block.is_election_block:
            return

        try:
            subscribers = list(await self.registry.list_all())
        except Exception:
            logger.exception("Failed to list subscribers for block #%s", block.number)
            return

        logger.info(
            "Reporting election block #%s (epoch %s) to %s subscribers",
            block.number,
            block.epoch,
            len(subscribers),
        )

        for subscriber in subscribers:
            if not subscriber.validator_address:
                continue
            await self._report(subscriber.id, subscriber.validator_address, block)

        self.blocks_processed += 1

    async def _report(
        self, subscriber_id: int, validator_address: str, block: ElectionBlock
    ) -> bool:
        try:
            sent = await self.reporter.report(subscriber_id, validator_address, block)
        except Exception:
            logger.exception(
                "Report for %s to chat %s failed", validator_address, subscriber_id
            )
            sent = False

        if sent:
            self.reports_sent += 1
        else:
            self.reports_failed += 1
        return sent

    async def latest_election_block(self) -> Result[ElectionBlock, RpcError]:
        """Fetch the most recent election block.

        Head height, then the election height at or before it, then that
        block with its body. The first failure is returned as is.
        """
        match await self.chain.get_block_number():
            case Err() as failure:
                return failure
            case Ok(value=height):
                pass

        match await self.chain.get_election_block_before(height):
            case Err() as failure:
                return failure
            case Ok(value=election_height):
                pass

        return await self.chain.get_block_by_number(election_height, include_body=True)

    async def report_on_demand(self, subscriber: Subscriber) -> Result[bool, RpcError]:
        """Report the latest election block to one subscriber.

        Returns:
            ``Err`` if the latest election block could not be fetched, so the
            caller can ask the user to retry; otherwise ``Ok`` with whether
            the report was sent
        """
        if not subscriber.validator_address:
            return Ok(False)

        match await self.latest_election_block():
            case Err(error=error) as failure:
                logger.error(
                    "On-demand status for chat %s failed: %s", subscriber.id, error
                )
                return failure
            case Ok(value=block):
                return Ok(
                    await self._report(subscriber.id, subscriber.validator_address, block)
                )

    def shutdown(self) -> None:
        """Stop after the event currently being processed."""
        logger.info("Shutdown signal received, stopping monitor...")
        self.should_shutdown = True


__all__ = [
    "EpochMonitor",
    "MonitorState",
]
