"""Pydantic models for chat subscribers."""

from pydantic import BaseModel, ConfigDict, Field


class Subscriber(BaseModel):
    """A chat that follows one validator address."""

    id: int = Field(..., description="Telegram chat id")
    validator_address: str | None = Field(
        default=None, description="Validator address the chat listens to"
    )

    model_config = ConfigDict(frozen=True)


__all__ = ["Subscriber"]
