"""Tests for Nimiq address helpers."""

import pytest

from validator_bot.helpers.address import (
    format_address,
    is_valid_address,
    normalize_address,
)

from tests.fakes import BURN_ADDRESS, OTHER_ADDRESS


class TestNormalizeAddress:
    """Tests for normalize_address."""

    def test_strips_spaces_and_uppercases(self) -> None:
        """Test whitespace is removed and letters are uppercased."""
        assert normalize_address(" nq07 0000\t0000 ") == "NQ0700000000"


class TestFormatAddress:
    """Tests for format_address."""

    def test_groups_of_four(self) -> None:
        """Test the compact form is split into groups of four."""
        assert format_address("NQ0700000000000000000000000000000000") == BURN_ADDRESS

    def test_idempotent(self) -> None:
        """Test formatting an already formatted address changes nothing."""
        assert format_address(OTHER_ADDRESS) == OTHER_ADDRESS

    def test_lowercase_input(self) -> None:
        """Test lowercase input is normalized first."""
        assert format_address(OTHER_ADDRESS.lower()) == OTHER_ADDRESS


class TestIsValidAddress:
    """Tests for is_valid_address."""

    @pytest.mark.parametrize(
        "address",
        [
            BURN_ADDRESS,
            OTHER_ADDRESS,
            "NQ0700000000000000000000000000000000",
            OTHER_ADDRESS.lower(),
        ],
    )
    def test_valid(self, address: str) -> None:
        """Test well-formed addresses with matching check digits."""
        assert is_valid_address(address)

    @pytest.mark.parametrize(
        "address",
        [
            "",
            None,
            "NQ08 0000 0000 0000 0000 0000 0000 0000 0000",
            "NQ07 0000 0000 0000 0000 0000 0000 0000",
            "DE07 0000 0000 0000 0000 0000 0000 0000 0000",
            "NQ07 0000 0000 0000 0000 0000 0000 0000 000O",
            "not an address",
        ],
    )
    def test_invalid(self, address: str | None) -> None:
        """Test bad checksums, lengths, prefixes and characters."""
        assert not is_valid_address(address)
