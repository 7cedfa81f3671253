"""Validator epoch bot.

Runs two tasks on one event loop until SIGINT/SIGTERM:

1. Epoch monitor: election block stream -> slot and reward report per subscriber
2. Command polling: Telegram updates -> /start, /validator, /status, /money, /remove

Usage:
    python -m validator_bot.live
"""

import signal
import sys

import asyncio

from validator_bot.bot.commands import CommandHandler
from validator_bot.chain.stream import ElectionBlockStream
from validator_bot.helpers.config import BotConfig, load_config
from validator_bot.helpers.db import create_session_factory, create_tables
from validator_bot.helpers.http import create_http_client
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.rpc import NimiqRPCClient
from validator_bot.monitor import EpochMonitor
from validator_bot.notifications.dispatcher import NotificationDispatcher
from validator_bot.notifications.telegram import TelegramTransport
from validator_bot.reporter import ValidatorReporter
from validator_bot.rewards.calculator import RewardCalculator
from validator_bot.rewards.exchange import CoinGeckoRates
from validator_bot.subscribers.registry import SqlSubscriberRegistry


logger = get_logger(__name__)


class BotRunner:
    """Wires the collaborators together and owns their lifecycle."""

    def __init__(self, config: BotConfig) -> None:
        """Build every component from ``config``; nothing connects yet."""
        self.config = config

        # One HTTP client for RPC, price and Telegram calls
        self.http_client = create_http_client()

        self.chain = NimiqRPCClient(config.rpc_url, http_client=self.http_client)
        self.stream = ElectionBlockStream(config.ws_url)
        self.engine, session_factory = create_session_factory(config.database_url)
        self.registry = SqlSubscriberRegistry(session_factory)
        self.transport = TelegramTransport(config.telegram_bot_token, self.http_client)

        rates = CoinGeckoRates(self.http_client, config.price_api_url)
        reporter = ValidatorReporter(
            self.chain,
            RewardCalculator(self.chain, rates),
            NotificationDispatcher(self.transport),
        )
        self.monitor = EpochMonitor(self.stream, self.registry, reporter, self.chain)
        self.commands = CommandHandler(self.transport, self.registry, self.monitor)

        self.tasks: list[asyncio.Task[None]] = []

    def shutdown(self) -> None:
        """Gracefully stop both tasks."""
        logger.info("Shutdown signal received, stopping...")
        self.monitor.shutdown()
        self.commands.shutdown()
        for task in self.tasks:
            task.cancel()

    async def cleanup(self) -> None:
        """Clean up resources."""
        await self.stream.close()
        await self.http_client.aclose()
        await self.engine.dispose()

    async def run(self) -> None:
        """Run the monitor and the command poller until shutdown."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.shutdown)

        try:
            await create_tables(self.engine)

            self.tasks = [
                asyncio.create_task(self.monitor.run()),
                asyncio.create_task(self.commands.poll()),
            ]

            # Wait for tasks, but allow graceful shutdown
            await asyncio.gather(*self.tasks, return_exceptions=True)

        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
        finally:
            await self.cleanup()

        logger.info(
            "Bot stopped (%s blocks processed, %s reports sent, %s failed)",
            self.monitor.blocks_processed,
            self.monitor.reports_sent,
            self.monitor.reports_failed,
        )


async def main() -> None:
    """Main entry point."""
    try:
        runner = BotRunner(load_config())
        await runner.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting...")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


def cli() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
