"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from validator_bot.helpers.constants import HEAD_BLOCK_SUBSCRIPTION


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(default_factory=list, description="Method parameters")
    id: int | str = Field(..., description="Request ID")


class SubscribeForHeadBlockRequest(JsonRpcRequest):
    """Websocket request to follow new head blocks, bodies included."""

    method: str = Field(default=HEAD_BLOCK_SUBSCRIPTION, frozen=True)
    params: list[Any] = Field(default_factory=lambda: [True])


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response; exactly one of result or error is meaningful."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: Any = None
    error: dict[str, Any] | None = None


class SubscriptionParams(BaseModel):
    """Params of a subscription notification."""

    subscription: int | str | None = None
    result: Any = None
    error: dict[str, Any] | None = None


class SubscriptionNotification(BaseModel):
    """Server push frame for an active subscription."""

    jsonrpc: str = "2.0"
    method: str
    params: SubscriptionParams


__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "SubscribeForHeadBlockRequest",
    "SubscriptionNotification",
    "SubscriptionParams",
]
