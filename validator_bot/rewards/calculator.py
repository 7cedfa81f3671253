"""Reward balance of a validator's reward address, in NIM and USD."""

import asyncio

from validator_bot.chain.query import ChainQuery
from validator_bot.helpers.constants import NIM_PRICE_ID, ROUNDING_EPSILON, USD
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.parsers import luna_to_nim, round_half_up
from validator_bot.helpers.result import Err, Ok
from validator_bot.rewards.exchange import ExchangeRateProvider
from validator_bot.rewards.models import RewardResult


logger = get_logger(__name__)


class RewardCalculator:
    """Reads live balances on every call; nothing is cached."""

    def __init__(self, chain: ChainQuery, rates: ExchangeRateProvider) -> None:
        self.chain = chain
        self.rates = rates

    async def compute(self, reward_address: str) -> RewardResult:
        """Compute the balance held at ``reward_address``.

        The balance is the basic account plus, if the address also stakes,
        its staker balance. A failed staker lookup counts as zero.

        Args:
            reward_address: Address rewards are paid to

        Returns:
            RewardResult; zero amounts with ``error`` set if the account
            lookup failed, or a zero fiat amount if no price was available
        """
        account_result, staker_result = await asyncio.gather(
            self.chain.get_account_by_address(reward_address),
            self.chain.get_staker_by_address(reward_address),
        )

        match account_result:
            case Err(error=error):
                logger.error("Balance lookup for %s failed: %s", reward_address, error)
                return RewardResult(native_amount=0.0, fiat_amount=0.0, error=str(error))
            case Ok(value=account):
                account_luna = account.balance

        match staker_result:
            case Ok(value=staker):
                staker_luna = staker.balance
            case Err(error=error):
                # Most reward addresses are not stakers
                logger.debug("No staker at %s: %s", reward_address, error)
                staker_luna = 0

        balance = luna_to_nim(account_luna + staker_luna)
        native_amount = round_half_up(balance)

        price = await self.rates.get_price(NIM_PRICE_ID, USD)
        if price is None:
            return RewardResult(native_amount=native_amount, fiat_amount=0.0)

        return RewardResult(
            native_amount=native_amount,
            fiat_amount=round_half_up(balance * price, epsilon=ROUNDING_EPSILON),
            unit_price=price,
        )


__all__ = ["RewardCalculator"]
