"""Chat message texts (Telegram HTML parse mode)."""

from html import escape

from validator_bot.rewards.models import RewardResult
from validator_bot.slots.resolver import SlotReport

UNAVAILABLE = "Unable to get the info right now, please try again later."
NO_ADDRESS = "No address set. Use /start to set one."
ADMIN_ONLY = "You need to be an admin to use this bot."
ASK_ADDRESS = "What validator address you want to listen to?"
INVALID_ADDRESS = "Invalid address, please try again."
ADDRESS_REMOVED = "Address removed."


def pluralize_slots(num_slots: int) -> str:
    """Example:
    >>> pluralize_slots(1)
    '1 slot'
    >>> pluralize_slots(3)
    '3 slots'
    """
    return f"{num_slots} slot{'' if num_slots == 1 else 's'}"


def render_slot_report(report: SlotReport) -> str:
    """Slot summary for the epoch that follows the election block."""
    address = escape(report.validator_address)
    if report.assigned:
        return (
            f"Validator <code>{address}</code> has been assigned "
            f"<b>{pluralize_slots(report.num_slots)}</b> "
            f"in epoch {report.upcoming_epoch}"
        )
    return (
        f"Validator <code>{address}</code> has not been assigned any slots "
        f"in epoch {report.upcoming_epoch} 🥲"
    )


def render_rewards(reward: RewardResult) -> str:
    """Reward summary; sent even when no price was available."""
    price = f"{reward.unit_price}" if reward.unit_price is not None else "n/a"
    return (
        "Validator total rewards:\n"
        f" <b>{reward.native_amount:.2f} NIM</b>\n"
        f" <b>{reward.fiat_amount:.2f} USD</b>\n\n"
        " Price:\n"
        f" <b>{price} NIM/USD</b>"
    )


def render_listening(address: str) -> str:
    return f"Listening to {escape(address)}"


__all__ = [
    "ADDRESS_REMOVED",
    "ADMIN_ONLY",
    "ASK_ADDRESS",
    "INVALID_ADDRESS",
    "NO_ADDRESS",
    "UNAVAILABLE",
    "pluralize_slots",
    "render_listening",
    "render_rewards",
    "render_slot_report",
]
