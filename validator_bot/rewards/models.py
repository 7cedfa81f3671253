"""Pydantic models for reward reporting."""

from pydantic import BaseModel, ConfigDict, Field


class RewardResult(BaseModel):
    """Reward balance of one address in NIM and USD.

    ``unit_price`` is None when no price was available; ``native_amount`` is
    still valid then. ``error`` is set when the balance itself could not be
    read, in which case both amounts are zero.
    """

    native_amount: float = Field(..., description="NIM, two fraction digits")
    fiat_amount: float = Field(default=0.0, description="USD, two fraction digits")
    unit_price: float | None = Field(default=None, description="USD per NIM")
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_price(self) -> bool:
        return self.unit_price is not None


__all__ = ["RewardResult"]
