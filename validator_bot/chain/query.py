"""Read-only chain capabilities the reporting core depends on."""

from typing import Protocol

from validator_bot.chain.models import Account, ElectionBlock, Staker, ValidatorInfo
from validator_bot.helpers.result import Result, RpcError


class ChainQuery(Protocol):
    """Pull-based chain lookups; every call reports failure as ``Err``.

    ``NimiqRPCClient`` is the production implementation.
    """

    async def get_block_number(self) -> Result[int, RpcError]: ...

    async def get_election_block_before(self, height: int) -> Result[int, RpcError]: ...

    async def get_block_by_number(
        self, height: int, *, include_body: bool = True
    ) -> Result[ElectionBlock, RpcError]: ...

    async def get_validator_by_address(
        self, address: str
    ) -> Result[ValidatorInfo, RpcError]: ...

    async def get_account_by_address(self, address: str) -> Result[Account, RpcError]: ...

    async def get_staker_by_address(self, address: str) -> Result[Staker, RpcError]: ...


__all__ = ["ChainQuery"]
