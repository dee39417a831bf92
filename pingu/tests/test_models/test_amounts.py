"""Tests for the fixed-point amount codec."""

from decimal import Decimal

import pytest

from pingu.models.amounts import ScaledAmount, from_scaled, to_float, to_scaled
from pingu.rpc.errors import ValidationError


class TestToScaled:
    def test_decimal_string(self):
        assert to_scaled("1.5", 6) == 1_500_000
        assert to_scaled("100", 6) == 100_000_000

    def test_float_goes_through_repr(self):
        assert to_scaled(0.1, 6) == 100_000
        assert to_scaled(0.3, 18) == 3 * 10**17
        assert to_scaled(1.005, 3) == 1005

    def test_plain_int_is_human_amount(self):
        assert to_scaled(100, 6) == 100_000_000
        assert to_scaled(1, 18) == 10**18

    def test_scaled_amount_passes_through(self):
        amount = ScaledAmount(123)
        assert to_scaled(amount, 6) == 123
        assert to_scaled(amount, 6) is amount

    def test_excess_digits_truncated(self):
        assert to_scaled("1.9999999", 6) == 1_999_999
        assert to_scaled("0.0000001", 6) == 0

    def test_empty_and_none_are_zero(self):
        assert to_scaled(None, 6) == 0
        assert to_scaled("", 6) == 0
        assert to_scaled("   ", 6) == 0
        assert to_scaled(0, 6) == 0

    def test_nan_is_zero(self):
        assert to_scaled(float("nan"), 6) == 0
        assert to_scaled("NaN", 6) == 0

    def test_infinite_rejected(self):
        with pytest.raises(ValidationError):
            to_scaled(float("inf"), 6)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            to_scaled("-1", 6)
        with pytest.raises(ValidationError):
            to_scaled(-1, 6)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError):
            to_scaled("abc", 6)

    def test_decimal_input(self):
        assert to_scaled(Decimal("2.25"), 2) == 225

    def test_zero_decimals(self):
        assert to_scaled("42.9", 0) == 42

    def test_large_values_exact(self):
        assert to_scaled("123456789012345678901234567890.5", 18) == (
            123456789012345678901234567890 * 10**18 + 5 * 10**17
        )


class TestFromScaled:
    def test_basic(self):
        assert from_scaled(1_500_000, 6) == "1.5"
        assert from_scaled(100_000_000, 6) == "100.0"

    def test_zero(self):
        assert from_scaled(0, 18) == "0.0"
        assert from_scaled(None, 6) == "0.0"
        assert from_scaled(0, 0) == "0"

    def test_small(self):
        assert from_scaled(1, 6) == "0.000001"
        assert from_scaled(1, 18) == "0.000000000000000001"

    def test_negative(self):
        assert from_scaled(-1_500_000, 6) == "-1.5"

    def test_zero_decimals(self):
        assert from_scaled(42, 0) == "42"


class TestRoundTrip:
    def test_representative_values(self):
        for decimals in (0, 6, 18):
            for x in (0, 1, 7, 10**decimals, 123_456_789, 10**30 + 1):
                assert to_scaled(from_scaled(x, decimals), decimals) == x


class TestToFloat:
    def test_display(self):
        assert to_float(1_500_000, 6) == 1.5
        assert to_float(None, 6) == 0.0
