"""Per-subscriber slot and reward report for one election block."""

from validator_bot.chain.models import ElectionBlock
from validator_bot.chain.query import ChainQuery
from validator_bot.helpers.logging import get_logger
from validator_bot.helpers.result import Err, Ok, Result, RpcError
from validator_bot.notifications.dispatcher import NotificationDispatcher
from validator_bot.notifications.messages import (
    pluralize_slots,
    render_rewards,
    render_slot_report,
)
from validator_bot.rewards.calculator import RewardCalculator
from validator_bot.rewards.models import RewardResult
from validator_bot.slots.resolver import resolve


logger = get_logger(__name__)


class ValidatorReporter:
    """Builds and sends the two messages a subscriber gets per election block."""

    def __init__(
        self,
        chain: ChainQuery,
        calculator: RewardCalculator,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self.chain = chain
        self.calculator = calculator
        self.dispatcher = dispatcher

    async def rewards_for(self, validator_address: str) -> Result[RewardResult, RpcError]:
        """Resolve the validator's reward address and compute its balance."""
        match await self.chain.get_validator_by_address(validator_address):
            case Err() as failure:
                return failure
            case Ok(value=info):
                return Ok(await self.calculator.compute(info.reward_address))

    async def report(
        self, subscriber_id: int, validator_address: str, block: ElectionBlock
    ) -> bool:
        """Send the slot summary and then the reward summary to one subscriber.

        Args:
            subscriber_id: Chat to notify
            validator_address: Validator the chat listens to
            block: Election block the report is about

        Returns:
            bool: False if nothing was sent (not an election block, or the
            validator lookup failed)
        """
        slot_report = resolve(block, validator_address)
        if not slot_report.applicable:
            return False

        match await self.rewards_for(validator_address):
            case Err(error=error):
                logger.error(
                    "Skipping report for %s to chat %s: %s",
                    validator_address,
                    subscriber_id,
                    error,
                )
                return False
            case Ok(value=reward):
                pass

        if slot_report.assigned:
            logger.info(
                "Validator %s has been assigned %s.",
                validator_address,
                pluralize_slots(slot_report.num_slots),
            )
        else:
            logger.info("Validator %s has not been assigned any slots.", validator_address)
        logger.info(
            "Validator %s has a balance of %.2f NIM (%.2f USD)",
            validator_address,
            reward.native_amount,
            reward.fiat_amount,
        )

        await self.dispatcher.send(subscriber_id, render_slot_report(slot_report))
        await self.dispatcher.send(subscriber_id, render_rewards(reward))
        return True


__all__ = ["ValidatorReporter"]
