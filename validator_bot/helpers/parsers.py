"""Parsing utilities for common data transformations."""

import math

from typing import Any

from validator_bot.helpers.constants import AMOUNT_DECIMALS, LUNA_PER_NIM


def unwrap_data(result: Any) -> Any:
    """Extract the payload from a node response envelope.

    The node wraps every result as ``{"data": ..., "metadata": ...}``.
    Bare values are returned unchanged.

    Example:
        >>> unwrap_data({"data": 42, "metadata": None})
        42
        >>> unwrap_data(42)
        42
    """
    if isinstance(result, dict) and "data" in result:
        return result["data"]
    return result


def luna_to_nim(luna: int | float) -> float:
    """Convert Luna to NIM (divide by 1e5).

    Example:
        >>> luna_to_nim(123456)
        1.23456
    """
    return luna / LUNA_PER_NIM


def round_half_up(
    value: float, decimals: int = AMOUNT_DECIMALS, epsilon: float = 0.0
) -> float:
    """Round half away from the floor, with an optional pre-rounding nudge.

    Args:
        value: Amount to round
        decimals: Number of fraction digits to keep
        epsilon: Added to ``value`` before scaling

    Returns:
        float: Rounded amount

    Example:
        >>> round_half_up(1.23456)
        1.23
        >>> round_half_up(0.125)
        0.13
    """
    factor = 10**decimals
    return math.floor((value + epsilon) * factor + 0.5) / factor


__all__ = [
    "luna_to_nim",
    "round_half_up",
    "unwrap_data",
]
