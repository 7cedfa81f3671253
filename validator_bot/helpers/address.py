"""Nimiq user-friendly address validation."""

import re

ADDRESS_PREFIX = "NQ"
"""Country code every user-friendly address starts with"""

ADDRESS_LENGTH = 36
"""Address length without spaces: prefix, two check digits, 32 base32 chars"""

ADDRESS_PATTERN = re.compile(r"^NQ[0-9]{2}[0-9A-HJ-NP-VXY]{32}$")
"""Nimiq base32 alphabet excludes I, O, W and Z"""


def normalize_address(address: str) -> str:
    """Uppercase and strip all whitespace.

    Example:
        >>> normalize_address("nq07 0000 ")
        'NQ070000'
    """
    return "".join(address.split()).upper()


def format_address(address: str) -> str:
    """Render an address in groups of four characters.

    Example:
        >>> format_address("NQ0700000000000000000000000000000000")
        'NQ07 0000 0000 0000 0000 0000 0000 0000 0000'
    """
    compact = normalize_address(address)
    return " ".join(compact[i : i + 4] for i in range(0, len(compact), 4))


def _iban_check(value: str) -> int:
    digits = "".join(str(int(char, 36)) for char in value)
    return int(digits) % 97


def is_valid_address(address: str | None) -> bool:
    """Check format and IBAN-style checksum of a Nimiq address.

    Args:
        address: Address with or without grouping spaces

    Returns:
        bool: True if the address is well-formed and its checksum matches
    """
    if not address:
        return False

    compact = normalize_address(address)
    if len(compact) != ADDRESS_LENGTH or not ADDRESS_PATTERN.match(compact):
        return False

    return _iban_check(compact[4:] + compact[:4]) == 1


__all__ = [
    "format_address",
    "is_valid_address",
    "normalize_address",
]
