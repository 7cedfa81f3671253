"""Pydantic models for chain data returned by the node."""

from pydantic import BaseModel, ConfigDict, Field


class SlotAssignment(BaseModel):
    """Slots given to one validator by an election block."""

    validator: str = Field(..., description="Validator address")
    num_slots: int = Field(..., ge=0, alias="numSlots")
    first_slot_number: int | None = Field(default=None, alias="firstSlotNumber")

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ElectionBlock(BaseModel):
    """Block snapshot as seen by the slot resolver.

    Micro blocks and checkpoint macro blocks parse too, with
    ``is_election_block`` false and no slots.
    """

    number: int = Field(..., description="Block height")
    epoch: int = Field(..., description="Epoch the block belongs to")
    is_election_block: bool = Field(default=False, alias="isElectionBlock")
    slots: list[SlotAssignment] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ValidatorInfo(BaseModel):
    """Validator metadata; only the reward address is used here."""

    address: str
    reward_address: str = Field(..., alias="rewardAddress")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Account(BaseModel):
    """Basic account with its balance in Luna."""

    address: str
    balance: int = Field(..., ge=0)

    model_config = ConfigDict(extra="ignore")


class Staker(BaseModel):
    """Staking account with its active balance in Luna."""

    address: str
    balance: int = Field(..., ge=0)

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "Account",
    "ElectionBlock",
    "SlotAssignment",
    "Staker",
    "ValidatorInfo",
]
