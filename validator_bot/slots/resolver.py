"""Slot assignment lookup for a validator in an election block."""

from pydantic import BaseModel, ConfigDict, Field

from validator_bot.chain.models import ElectionBlock


class SlotReport(BaseModel):
    """Slots a validator holds in the epoch following an election block."""

    validator_address: str
    epoch: int = Field(..., description="Epoch of the inspected block itself")
    assigned: bool
    num_slots: int = Field(..., ge=0)
    applicable: bool = Field(
        default=True, description="False when the block is not an election block"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def upcoming_epoch(self) -> int:
        """Epoch the assignment applies to."""
        return self.epoch + 1


def not_applicable(block: ElectionBlock, validator_address: str) -> SlotReport:
    """Report for a block that assigns no slots at all."""
    return SlotReport(
        validator_address=validator_address,
        epoch=block.epoch,
        assigned=False,
        num_slots=0,
        applicable=False,
    )


def resolve(block: ElectionBlock, validator_address: str) -> SlotReport:
    """Find the slots assigned to ``validator_address`` by ``block``.

    Matching is exact and case-sensitive. A block assigns each validator at
    most once, so the first match wins.

    Args:
        block: Block snapshot to inspect
        validator_address: Validator to look for

    Returns:
        SlotReport; ``applicable`` is False when the block is not an
        election block, and callers must then skip all further work
    """
    if not block.is_election_block:
        return not_applicable(block, validator_address)

    assignment = next(
        (slot for slot in block.slots if slot.validator == validator_address), None
    )
    num_slots = assignment.num_slots if assignment else 0

    return SlotReport(
        validator_address=validator_address,
        epoch=block.epoch,
        assigned=num_slots > 0,
        num_slots=num_slots,
    )


__all__ = [
    "SlotReport",
    "not_applicable",
    "resolve",
]
