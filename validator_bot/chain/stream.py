"""Election block stream over the node's websocket subscription.

The stream owns its connection: it subscribes to head blocks, yields the
election blocks among them, and reconnects with exponential backoff when
the socket drops. Consumers only see an endless async iterator of results.

Usage:
    stream = ElectionBlockStream("ws://localhost:8648/ws")
    async for event in stream:
        ...
"""

import json

from collections.abc import AsyncIterator, Callable
from typing import Any

import asyncio

from pydantic import ValidationError
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed

from validator_bot.chain.models import ElectionBlock
from validator_bot.helpers.constants import (
    HEAD_BLOCK_SUBSCRIPTION,
    RECONNECT_BASE_DELAY,
    RECONNECT_MAX_DELAY,
    WS_PING_INTERVAL,
    WS_PING_TIMEOUT,
)
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.parsers import unwrap_data
from validator_bot.helpers.result import Err, Ok, Result, RpcError, RpcErrorKind
from validator_bot.helpers.rpc_models import (
    SubscribeForHeadBlockRequest,
    SubscriptionNotification,
)


logger = get_logger(__name__)

type StreamEvent = Result[ElectionBlock, RpcError]


class ElectionBlockStream:
    """Endless async iterator of election blocks (or stream errors)."""

    def __init__(
        self,
        ws_url: str,
        *,
        election_only: bool = True,
        base_delay: float = RECONNECT_BASE_DELAY,
        max_delay: float = RECONNECT_MAX_DELAY,
        connect_fn: Callable[..., Any] = connect,
    ) -> None:
        """Initialize the stream.

        Args:
            ws_url: Node websocket URL
            election_only: Drop head blocks that are not election blocks
            base_delay: First reconnect delay in seconds
            max_delay: Upper bound for the reconnect delay
            connect_fn: Websocket connect factory

        Raises:
            ValueError: If ws_url is empty
        """
        if not ws_url:
            msg = "Websocket URL cannot be empty"
            raise ValueError(msg)

        self.ws_url = ws_url
        self.election_only = election_only
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._connect = connect_fn
        self._websocket: ClientConnection | None = None

        self.connection_status = "Initializing"
        self.reconnect_count = 0
        self.blocks_received = 0
        self.should_shutdown = False

    def __aiter__(self) -> AsyncIterator[StreamEvent]:
        return self.subscribe()

    async def subscribe(self) -> AsyncIterator[StreamEvent]:
        """Connect, subscribe to head blocks and yield events until closed."""
        retry_delay = self.base_delay

        while not self.should_shutdown:
            try:
                logger.info("Connecting to %s", self.ws_url)
                self.connection_status = "Connecting"

                async with self._connect(
                    self.ws_url,
                    ping_interval=WS_PING_INTERVAL,
                    ping_timeout=WS_PING_TIMEOUT,
                ) as websocket:
                    self._websocket = websocket
                    await websocket.send(SubscribeForHeadBlockRequest(id=1).model_dump_json())

                    # Wait for subscription confirmation
                    response_data = json.loads(await websocket.recv())

                    if "result" in response_data:
                        logger.info(
                            "Subscribed to head blocks: %s", response_data["result"]
                        )
                        self.connection_status = "Connected"
                        retry_delay = self.base_delay

                        async for message in websocket:
                            if self.should_shutdown:
                                break
                            event = self.parse_message(message)
                            if event is not None:
                                yield event
                    else:
                        logger.error("Subscription failed: %s", response_data)
                        self.connection_status = "Subscription failed"

            except (ConnectionClosed, OSError) as e:
                logger.warning("Websocket connection closed: %s", e)
                self.connection_status = "Disconnected"
            except json.JSONDecodeError:
                logger.exception("Failed to decode subscription response")
                self.connection_status = "Subscription failed"
            except Exception as e:
                logger.exception("Websocket error")
                self.connection_status = f"Error: {str(e)[:50]}"
            finally:
                self._websocket = None

            if not self.should_shutdown:
                self.reconnect_count += 1
                logger.info(
                    "Reconnecting in %s s (attempt %s)",
                    retry_delay,
                    self.reconnect_count,
                )
                self.connection_status = f"Reconnecting in {retry_delay}s"
                await asyncio.sleep(retry_delay)
                retry_delay = min(retry_delay * 2, self.max_delay)

        self.connection_status = "Closed"

    def parse_message(self, message: str | bytes) -> StreamEvent | None:
        """Turn one websocket frame into a stream event.

        Returns:
            ``Ok`` for an election block (or any block if ``election_only`` is
            off), ``Err`` for error frames and undecodable payloads, and None
            for frames that carry nothing of interest
        """
        try:
            data = json.loads(message)
        except json.JSONDecodeError as e:
            return Err(RpcError(RpcErrorKind.DECODE, HEAD_BLOCK_SUBSCRIPTION, str(e)))

        if not isinstance(data, dict):
            return Err(
                RpcError(RpcErrorKind.DECODE, HEAD_BLOCK_SUBSCRIPTION, "unexpected frame")
            )

        if "error" in data and "params" not in data:
            return Err(
                RpcError(RpcErrorKind.RPC, HEAD_BLOCK_SUBSCRIPTION, str(data["error"]))
            )

        if "params" not in data:
            return None

        try:
            notification = SubscriptionNotification.model_validate(data)
            if notification.params.error is not None:
                return Err(
                    RpcError(
                        RpcErrorKind.RPC,
                        notification.method,
                        str(notification.params.error),
                    )
                )
            block = ElectionBlock.model_validate(unwrap_data(notification.params.result))
        except ValidationError as e:
            return Err(RpcError(RpcErrorKind.DECODE, HEAD_BLOCK_SUBSCRIPTION, str(e)))

        self.blocks_received += 1
        if self.election_only and not block.is_election_block:
            logger.debug("Block #%s is not an election block", block.number)
            return None

        logger.info("Election block #%s (epoch %s)", block.number, block.epoch)
        return Ok(block)

    async def close(self) -> None:
        """Stop iterating and close the current connection, if any."""
        logger.info("Closing election block stream")
        self.should_shutdown = True
        if self._websocket is not None:
            await self._websocket.close()


__all__ = [
    "ElectionBlockStream",
    "StreamEvent",
]
