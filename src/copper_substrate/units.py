"""
Length units for copper-substrate.

All internal values are stored in millimetres. Configuration values may be
given as plain numbers (mm) or as strings with a unit suffix, e.g. ``"0.25mm"``
or ``"10mil"``.
"""

from __future__ import annotations

import re
from enum import Enum

__all__ = [
    "UnitSystem",
    "MM_PER_MIL",
    "MM_PER_INCH",
    "parse_length",
    "to_mm",
    "mm_to_mils",
    "format_length",
]

MM_PER_MIL = 0.0254
MM_PER_INCH = 25.4

_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z]*)\s*$")


class UnitSystem(Enum):
    """Unit system for length values."""

    MM = "mm"
    MILS = "mils"
    INCH = "in"

    @classmethod
    def from_string(cls, value: str | None) -> UnitSystem | None:
        """Parse a unit system from a string value.

        Args:
            value: String like "mm", "mils", "mil", "in", or None

        Returns:
            UnitSystem or None if value is None or invalid
        """
        if value is None:
            return None
        value = value.lower().strip()
        if value in ("mm", "millimeters", "millimeter"):
            return cls.MM
        if value in ("mils", "mil", "thou", "thousandths"):
            return cls.MILS
        if value in ("in", "inch", "inches"):
            return cls.INCH
        return None


def to_mm(value: float, system: UnitSystem) -> float:
    """Convert a value in the given unit system to millimetres."""
    if system == UnitSystem.MILS:
        return value * MM_PER_MIL
    if system == UnitSystem.INCH:
        return value * MM_PER_INCH
    return value


def mm_to_mils(value_mm: float) -> float:
    """Convert millimetres to mils."""
    return value_mm / MM_PER_MIL


def parse_length(value: float | int | str) -> float:
    """
    Parse a length into millimetres.

    Numbers are taken as millimetres. Strings may carry a unit suffix
    (``mm``, ``mil``/``mils``/``thou``, ``in``); a bare numeric string is mm.

    Raises:
        ValueError: If the value is not a number or a recognised length string

    Example:
        >>> parse_length("10mil")
        0.254
        >>> parse_length(0.25)
        0.25
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a length: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"Not a length: {value!r}")

    match = _LENGTH_RE.match(value)
    if match is None:
        raise ValueError(f"Not a length: {value!r}")

    number, unit = match.groups()
    if not unit:
        return float(number)

    system = UnitSystem.from_string(unit)
    if system is None:
        raise ValueError(f"Unknown length unit {unit!r} in {value!r}")
    return round(to_mm(float(number), system), 9)


def format_length(value_mm: float, system: UnitSystem = UnitSystem.MM, precision: int = 3) -> str:
    """Format a mm value in the given unit system.

    Example:
        >>> format_length(0.254, UnitSystem.MILS, precision=1)
        '10.0 mils'
    """
    if system == UnitSystem.MILS:
        return f"{mm_to_mils(value_mm):.{precision}f} mils"
    if system == UnitSystem.INCH:
        return f"{value_mm / MM_PER_INCH:.{precision}f} in"
    return f"{value_mm:.{precision}f} mm"
