"""Tests for the Nimiq RPC client."""

import json

from typing import TYPE_CHECKING

import httpx
import pytest

from validator_bot.chain.models import ElectionBlock
from validator_bot.helpers.result import Err, Ok, RpcErrorKind
from validator_bot.helpers.rpc import NimiqRPCClient, RPCClientError

from tests.fakes import BURN_ADDRESS


if TYPE_CHECKING:
    from pytest_httpx import HTTPXMock


RPC_URL = "http://node.test:8648"


def envelope(data: object) -> dict[str, object]:
    return {"jsonrpc": "2.0", "id": 1, "result": {"data": data, "metadata": None}}


def sent_body(httpx_mock: "HTTPXMock", index: int = 0) -> dict[str, object]:
    return json.loads(httpx_mock.get_requests()[index].content)


class TestNimiqRPCClientInit:
    """Tests for client construction."""

    def test_init_with_valid_url(self) -> None:
        """Test initialization with a valid URL."""
        client = NimiqRPCClient(RPC_URL)

        assert client.rpc_url == RPC_URL
        assert client.timeout == 30.0

    def test_init_with_empty_url_raises(self) -> None:
        """Test that empty URL raises ValueError."""
        with pytest.raises(ValueError, match="RPC URL cannot be empty"):
            NimiqRPCClient("")

    def test_init_with_none_url_raises(self) -> None:
        """Test that None URL raises ValueError."""
        with pytest.raises(ValueError, match="RPC URL cannot be empty"):
            NimiqRPCClient(None)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_aclose_keeps_shared_client_open(self) -> None:
        """Test a client passed in is not closed by the RPC client."""
        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            await client.aclose()

            assert not http_client.is_closed

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self) -> None:
        """Test a client created by the RPC client is closed with it."""
        client = NimiqRPCClient(RPC_URL)
        await client.aclose()

        assert client.http_client.is_closed


class TestNimiqRPCClientCall:
    """Tests for the raw call method."""

    @pytest.mark.asyncio
    async def test_call_unwraps_data(self, httpx_mock: "HTTPXMock") -> None:
        """Test the data envelope is removed from the result."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(1234))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.call("getBlockNumber")

        assert result == 1234
        body = sent_body(httpx_mock)
        assert body["method"] == "getBlockNumber"
        assert body["params"] == []
        assert body["jsonrpc"] == "2.0"

    @pytest.mark.asyncio
    async def test_call_increments_request_id(self, httpx_mock: "HTTPXMock") -> None:
        """Test each call gets a fresh request id."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(1))
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(2))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            await client.call("getBlockNumber")
            await client.call("getBlockNumber")

        assert sent_body(httpx_mock, 0)["id"] == 1
        assert sent_body(httpx_mock, 1)["id"] == 2

    @pytest.mark.asyncio
    async def test_call_error_object_raises(self, httpx_mock: "HTTPXMock") -> None:
        """Test an error object raises RPCClientError with its message."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32603, "message": "boom"}},
        )

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            with pytest.raises(RPCClientError, match="boom"):
                await client.call("getBlockNumber")


class TestNimiqRPCClientRequest:
    """Tests for typed requests and their failure mapping."""

    @pytest.mark.asyncio
    async def test_get_block_number(self, httpx_mock: "HTTPXMock") -> None:
        """Test a successful typed request."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(43200))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_number()

        assert result == Ok(43200)

    @pytest.mark.asyncio
    async def test_get_election_block_before_params(self, httpx_mock: "HTTPXMock") -> None:
        """Test the height is passed as the only parameter."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(43200))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_election_block_before(50000)

        assert result == Ok(43200)
        assert sent_body(httpx_mock)["params"] == [50000]

    @pytest.mark.asyncio
    async def test_get_block_by_number(self, httpx_mock: "HTTPXMock") -> None:
        """Test an election block with slots is parsed."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=envelope(
                {
                    "number": 43200,
                    "epoch": 1,
                    "isElectionBlock": True,
                    "type": "macro",
                    "slots": [
                        {"validator": BURN_ADDRESS, "numSlots": 3, "firstSlotNumber": 0}
                    ],
                }
            ),
        )

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_by_number(43200)

        match result:
            case Ok(value=block):
                assert isinstance(block, ElectionBlock)
                assert block.is_election_block
                assert block.slots[0].num_slots == 3
            case Err():
                pytest.fail("expected Ok")
        assert sent_body(httpx_mock)["params"] == [43200, True]

    @pytest.mark.asyncio
    async def test_get_account_by_address(self, httpx_mock: "HTTPXMock") -> None:
        """Test the account balance is read and metadata is not requested."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=envelope({"address": BURN_ADDRESS, "balance": 123456, "type": "basic"}),
        )

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_account_by_address(BURN_ADDRESS)

        match result:
            case Ok(value=account):
                assert account.balance == 123456
            case Err():
                pytest.fail("expected Ok")
        assert sent_body(httpx_mock)["params"] == [BURN_ADDRESS]

    @pytest.mark.asyncio
    async def test_get_validator_by_address(self, httpx_mock: "HTTPXMock") -> None:
        """Test the reward address is read from validator metadata."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json=envelope({"address": BURN_ADDRESS, "rewardAddress": "NQ28 reward"}),
        )

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_validator_by_address(BURN_ADDRESS)

        match result:
            case Ok(value=info):
                assert info.reward_address == "NQ28 reward"
            case Err():
                pytest.fail("expected Ok")

    @pytest.mark.asyncio
    async def test_network_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test transport failures map to NETWORK errors."""
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_number()

        match result:
            case Err(error=error):
                assert error.kind == RpcErrorKind.NETWORK
                assert error.method == "getBlockNumber"
            case Ok():
                pytest.fail("expected Err")

    @pytest.mark.asyncio
    async def test_http_status_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test HTTP error statuses map to NETWORK errors."""
        httpx_mock.add_response(url=RPC_URL, method="POST", status_code=502)

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_number()

        assert isinstance(result, Err)
        assert result.error.kind == RpcErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_rpc_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test error objects map to RPC errors."""
        httpx_mock.add_response(
            url=RPC_URL,
            method="POST",
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": -32603, "message": "No staker with address"},
            },
        )

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_staker_by_address(BURN_ADDRESS)

        assert isinstance(result, Err)
        assert result.error.kind == RpcErrorKind.RPC
        assert "No staker" in result.error.message

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test an undecodable body maps to DECODE."""
        httpx_mock.add_response(url=RPC_URL, method="POST", text="not json")

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_number()

        assert isinstance(result, Err)
        assert result.error.kind == RpcErrorKind.DECODE

    @pytest.mark.asyncio
    async def test_empty_result_is_decode_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test a null payload maps to DECODE."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope(None))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_account_by_address(BURN_ADDRESS)

        assert isinstance(result, Err)
        assert result.error.message == "empty result"

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_decode_error(self, httpx_mock: "HTTPXMock") -> None:
        """Test a payload that fails validation maps to DECODE."""
        httpx_mock.add_response(url=RPC_URL, method="POST", json=envelope({"foo": 1}))

        async with httpx.AsyncClient() as http_client:
            client = NimiqRPCClient(RPC_URL, http_client=http_client)
            result = await client.get_block_by_number(1)

        assert isinstance(result, Err)
        assert result.error.kind == RpcErrorKind.DECODE
