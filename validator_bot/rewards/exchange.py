"""Exchange rate lookup for NIM."""

from typing import Protocol

import httpx

from validator_bot.helpers.constants import NIM_PRICE_ID, PRICE_API_URL, USD
from validator_bot.helpers.http import fetch_json
from validator_bot.helpers.logging import get_logger


logger = get_logger(__name__)


class ExchangeRateProvider(Protocol):
    """Converts one unit of a crypto currency to a fiat price."""

    async def get_price(self, crypto: str = NIM_PRICE_ID, fiat: str = USD) -> float | None:
        """Return the current price, or None if unavailable."""
        ...


class CoinGeckoRates:
    """Price lookup against the CoinGecko ``simple/price`` endpoint."""

    def __init__(
        self, http_client: httpx.AsyncClient, base_url: str = PRICE_API_URL
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def get_price(self, crypto: str = NIM_PRICE_ID, fiat: str = USD) -> float | None:
        """Fetch the price of ``crypto`` in ``fiat``.

        Args:
            crypto: CoinGecko coin id (e.g. "nimiq-2")
            fiat: CoinGecko vs_currency (e.g. "usd")

        Returns:
            Price per unit, or None on any failure or a zero price
        """
        data = await fetch_json(
            self.http_client,
            f"{self.base_url}/simple/price",
            params={"ids": crypto, "vs_currencies": fiat},
        )
        if not isinstance(data, dict):
            return None

        quote = data.get(crypto)
        price = quote.get(fiat) if isinstance(quote, dict) else None
        if not isinstance(price, int | float) or isinstance(price, bool) or price <= 0:
            logger.warning("No %s price for %s in response", fiat, crypto)
            return None

        return float(price)


__all__ = [
    "CoinGeckoRates",
    "ExchangeRateProvider",
]
