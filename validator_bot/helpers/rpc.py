"""Nimiq JSON-RPC client utilities."""

from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from validator_bot.chain.models import Account, ElectionBlock, Staker, ValidatorInfo
from validator_bot.helpers.constants import DEFAULT_TIMEOUT
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.parsers import unwrap_data
from validator_bot.helpers.result import Err, Ok, Result, RpcError, RpcErrorKind
from validator_bot.helpers.rpc_models import JsonRpcRequest, JsonRpcResponse


logger = get_logger(__name__)


class RPCClientError(Exception):
    """The node answered with a JSON-RPC error object."""


class NimiqRPCClient:
    """Nimiq JSON-RPC client returning tagged results."""

    def __init__(
        self,
        rpc_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Node JSON-RPC endpoint URL
            http_client: Shared HTTP client; one is created and owned if omitted
            timeout: Default timeout for requests in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def call(
        self,
        method: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            method: RPC method name (e.g., "getBlockNumber")
            params: Method parameters list
            timeout: Optional timeout override

        Returns:
            RPC result value with the ``data`` envelope removed

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RPCClientError: If the RPC response contains an error
        """
        request = JsonRpcRequest(
            method=method, params=params or [], id=self._next_request_id()
        )

        response = await self.http_client.post(
            self.rpc_url,
            json=request.model_dump(),
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
        payload = JsonRpcResponse.model_validate(response.json())

        if payload.error is not None:
            msg = payload.error.get("message") or str(payload.error)
            raise RPCClientError(msg)

        return unwrap_data(payload.result)

    async def request[T](
        self,
        method: str,
        params: list[Any],
        parse: Callable[[Any], T],
    ) -> Result[T, RpcError]:
        """Call ``method`` and parse its payload, mapping failures to ``Err``.

        Args:
            method: RPC method name
            params: Method parameters list
            parse: Converts the unwrapped payload into the caller's type

        Returns:
            ``Ok`` with the parsed value, or ``Err`` describing the failure
        """
        error: RpcError
        try:
            data = await self.call(method, params)
        except httpx.HTTPError as e:
            error = RpcError(RpcErrorKind.NETWORK, method, str(e) or type(e).__name__)
        except RPCClientError as e:
            error = RpcError(RpcErrorKind.RPC, method, str(e))
        except ValueError as e:
            error = RpcError(RpcErrorKind.DECODE, method, str(e))
        else:
            if data is None:
                error = RpcError(RpcErrorKind.DECODE, method, "empty result")
            else:
                try:
                    return Ok(parse(data))
                except (ValidationError, ValueError, TypeError) as e:
                    error = RpcError(RpcErrorKind.DECODE, method, str(e))

        logger.debug("%s", error)
        return Err(error)

    async def get_block_number(self) -> Result[int, RpcError]:
        """Get the current head height."""
        return await self.request("getBlockNumber", [], int)

    async def get_election_block_before(self, height: int) -> Result[int, RpcError]:
        """Get the height of the last election block at or before ``height``."""
        return await self.request("getElectionBlockBefore", [height], int)

    async def get_block_by_number(
        self, height: int, *, include_body: bool = True
    ) -> Result[ElectionBlock, RpcError]:
        """Get the block at ``height``.

        Args:
            height: Block height
            include_body: Whether the node should include the body (slots)
        """
        return await self.request(
            "getBlockByNumber",
            [height, include_body],
            ElectionBlock.model_validate,
        )

    async def get_validator_by_address(
        self, address: str
    ) -> Result[ValidatorInfo, RpcError]:
        """Get validator metadata, including its reward address."""
        return await self.request(
            "getValidatorByAddress", [address], ValidatorInfo.model_validate
        )

    async def get_account_by_address(self, address: str) -> Result[Account, RpcError]:
        """Get the basic account at ``address`` without metadata."""
        return await self.request(
            "getAccountByAddress", [address], Account.model_validate
        )

    async def get_staker_by_address(self, address: str) -> Result[Staker, RpcError]:
        """Get the staker at ``address``.

        Fails with an RPC error when the address is not a staker.
        """
        return await self.request(
            "getStakerByAddress", [address], Staker.model_validate
        )


__all__ = [
    "NimiqRPCClient",
    "RPCClientError",
]
