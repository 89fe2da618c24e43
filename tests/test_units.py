"""Tests for the units module."""

import pytest

from copper_substrate.units import (
    MM_PER_MIL,
    UnitSystem,
    format_length,
    mm_to_mils,
    parse_length,
    to_mm,
)


class TestUnitSystem:
    """Tests for UnitSystem enum."""

    def test_from_string_mm(self):
        """Test parsing mm unit strings."""
        assert UnitSystem.from_string("mm") == UnitSystem.MM
        assert UnitSystem.from_string("MM") == UnitSystem.MM
        assert UnitSystem.from_string("millimeters") == UnitSystem.MM

    def test_from_string_mils(self):
        """Test parsing mils unit strings."""
        assert UnitSystem.from_string("mils") == UnitSystem.MILS
        assert UnitSystem.from_string("mil") == UnitSystem.MILS
        assert UnitSystem.from_string("thou") == UnitSystem.MILS

    def test_from_string_inch(self):
        """Test parsing inch unit strings."""
        assert UnitSystem.from_string("in") == UnitSystem.INCH
        assert UnitSystem.from_string("inches") == UnitSystem.INCH

    def test_from_string_invalid(self):
        """Test parsing None or invalid strings returns None."""
        assert UnitSystem.from_string(None) is None
        assert UnitSystem.from_string("furlong") is None
        assert UnitSystem.from_string("") is None


class TestConversions:
    """Tests for conversion helpers."""

    def test_to_mm(self):
        """Test conversion into millimetres."""
        assert to_mm(10, UnitSystem.MILS) == pytest.approx(0.254)
        assert to_mm(1, UnitSystem.INCH) == pytest.approx(25.4)
        assert to_mm(0.25, UnitSystem.MM) == 0.25

    def test_mm_to_mils(self):
        """Test conversion into mils."""
        assert mm_to_mils(MM_PER_MIL) == pytest.approx(1.0)


class TestParseLength:
    """Tests for parse_length."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.25, 0.25),
            (1, 1.0),
            ("0.25", 0.25),
            ("0.25mm", 0.25),
            (" 0.5 mm ", 0.5),
            ("10mil", 0.254),
            ("10 mils", 0.254),
            ("0.01in", 0.254),
            ("1e-1", 0.1),
        ],
    )
    def test_valid(self, value, expected):
        """Test numbers and unit strings."""
        assert parse_length(value) == pytest.approx(expected)

    def test_returns_float(self):
        """Test integers become floats."""
        assert isinstance(parse_length(1), float)

    @pytest.mark.parametrize("value", ["wide", "10 furlongs", "", None, True, [0.25]])
    def test_invalid(self, value):
        """Test non-lengths raise ValueError."""
        with pytest.raises(ValueError):
            parse_length(value)


class TestFormatLength:
    """Tests for format_length."""

    def test_format_mm(self):
        """Test formatting in mm."""
        assert format_length(0.254) == "0.254 mm"

    def test_format_mils(self):
        """Test formatting in mils."""
        assert format_length(0.254, UnitSystem.MILS, precision=1) == "10.0 mils"

    def test_format_inch(self):
        """Test formatting in inches."""
        assert format_length(25.4, UnitSystem.INCH, precision=2) == "1.00 in"
