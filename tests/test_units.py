"""
Unit Tests for Amount Conversion
"""

import pytest
from decimal import Decimal

from utils.units import format_ether, parse_ether, parse_units


class TestParseUnits:
    """Test decimal string to base unit conversion"""

    def test_spin_cost_literal(self):
        """0.001 ether is 10**15 wei"""
        assert parse_ether("0.001") == 10 ** 15
        assert parse_ether("0.001") == 1 * 10 ** (18 - 3)

    @pytest.mark.parametrize("value,decimals,expected", [
        ("1", 18, 10 ** 18),
        ("0", 18, 0),
        ("1.5", 6, 1_500_000),
        ("0.000000000000000001", 18, 1),
        (" 2.25 ", 2, 225),
        (3, 0, 3),
        (Decimal("0.1"), 1, 1),
    ])
    def test_valid_amounts(self, value, decimals, expected):
        assert parse_units(value, decimals) == expected

    @pytest.mark.parametrize("value", ["abc", "", "-1", "NaN", "Infinity", "1e400x"])
    def test_invalid_amounts(self, value):
        with pytest.raises(ValueError):
            parse_units(value, 18)

    def test_rejects_sub_unit_precision(self):
        """More decimals than the unit supports cannot be represented"""
        with pytest.raises(ValueError, match="decimal places"):
            parse_ether("0.0000000000000000001")

    def test_rejects_floats(self):
        with pytest.raises(ValueError):
            parse_ether(0.001)

    def test_rejects_bad_decimals(self):
        with pytest.raises(ValueError):
            parse_units("1", -1)


class TestFormatEther:
    """Test wei to ether display conversion"""

    def test_format(self):
        assert format_ether(10 ** 15) == Decimal("0.001")
        assert format_ether(0) == Decimal(0)


class TestUint256Bounds:
    """Test amounts at the edge of the uint256 range"""

    def test_max_value(self):
        assert parse_units(str(2 ** 256 - 1), 0) == 2 ** 256 - 1

    @pytest.mark.parametrize("value", [str(2 ** 256), "1e100", "1e999999999"])
    def test_overflow(self, value):
        with pytest.raises(ValueError, match="uint256"):
            parse_units(value, 0)

    def test_huge_negative_exponent(self):
        with pytest.raises(ValueError, match="decimal places"):
            parse_ether("1e-999999999")
        assert parse_ether("0e-999999999") == 0
