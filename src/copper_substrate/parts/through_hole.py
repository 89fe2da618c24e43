"""
Through-hole parts: DIP packages and pin headers.
"""

from __future__ import annotations

import math

from ..component import BoardComposableObject
from ..exceptions import ConstructionError
from ..functional_types import FunctionalType
from ..geometry import Point
from ..layers import LayerType
from ..package_types import ThroughHole
from ..primitives import (
    GraphicCircle,
    GraphicLine,
    GraphicRect,
    GraphicText,
    Pad,
    PadKind,
    PadShape,
)
from .standards import (
    DIP_STANDARDS,
    PIN_HEADER_DRILL,
    PIN_HEADER_PAD_DIAMETER,
    PIN_HEADER_PITCH,
)

__all__ = ["DualInline", "PinHeader"]


def _tht_pad(number: int, x: float, y: float, diameter: float, drill: float) -> Pad:
    # Pin 1 is square
    return Pad(
        str(number),
        Point(x, y),
        (diameter, diameter),
        PadShape.RECT if number == 1 else PadShape.CIRCLE,
        PadKind.THROUGH_HOLE,
        drill=drill,
    )


def _dimension(name: str, value, part: str) -> float:
    if (
        not isinstance(value, (int, float))
        or isinstance(value, bool)
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ConstructionError(
            f"{part} {name} must be a positive number", context={name: value}
        )
    return float(value)


def _reference_text() -> tuple[GraphicText, ...]:
    return (GraphicText("${REFERENCE}", Point(0.0, 0.0), LayerType.F_FAB),)


class _ThroughHolePart(BoardComposableObject):
    """Shared storage for the through-hole parts."""

    _functional: FunctionalType
    _package: ThroughHole
    _pads: tuple[Pad, ...]
    _graphics: tuple

    def functional_type(self) -> FunctionalType:
        return self._functional

    def package(self) -> ThroughHole:
        return self._package

    def pads(self) -> tuple[Pad, ...]:
        return self._pads

    def graphics(self) -> tuple:
        return self._graphics

    def texts(self) -> tuple[GraphicText, ...]:
        return _reference_text()


class DualInline(_ThroughHolePart):
    """
    DIP (Dual In-line Package) integrated circuit.

    Pins run down the left column and back up the right column, counter-clockwise
    seen from the top. Dimensions default to :data:`DIP_STANDARDS`.

    Args:
        pins: Number of pins (even, at least 4)
        value: Part value, e.g. "NE555"
        pitch: Pin pitch in mm (default: 2.54mm)
        row_spacing: Distance between rows in mm (default: 7.62mm for narrow,
                     15.24mm for wide)
        pad_diameter: Pad diameter in mm
        drill: Drill hole diameter in mm

    Example:
        >>> DualInline(8, "NE555").footprint_name()
        'U_DIP-8_W7.62mm'
    """

    def __init__(
        self,
        pins: int,
        value: str | None = None,
        *,
        pitch: float | None = None,
        row_spacing: float | None = None,
        pad_diameter: float | None = None,
        drill: float | None = None,
    ):
        if not isinstance(pins, int) or pins < 4 or pins % 2 != 0:
            raise ConstructionError(
                "DIP needs an even number of pins, at least 4",
                context={"pins": pins},
            )

        std = DIP_STANDARDS.get(pins, {})
        self.pin_count = pins
        if pitch is None:
            pitch = std.get("pitch", 2.54)
        if row_spacing is None:
            row_spacing = std.get("row_spacing", 7.62 if pins <= 22 else 15.24)
        if pad_diameter is None:
            pad_diameter = std.get("pad_diameter", 1.6)
        if drill is None:
            drill = std.get("drill", 0.8)
        self.pitch = _dimension("pitch", pitch, "DIP")
        self.row_spacing = _dimension("row_spacing", row_spacing, "DIP")
        self.pad_diameter = _dimension("pad_diameter", pad_diameter, "DIP")
        self.drill = _dimension("drill", drill, "DIP")

        self._functional = FunctionalType.integrated_circuit(value)
        self._package = ThroughHole(f"DIP-{pins}_W{self.row_spacing:g}mm", self.drill)

        pins_per_side = pins // 2
        span = (pins_per_side - 1) * self.pitch
        left = -self.row_spacing / 2
        right = self.row_spacing / 2

        pads = []
        # Left column (pins 1 to pins_per_side), top to bottom
        for i in range(pins_per_side):
            pads.append(_tht_pad(i + 1, left, -span / 2 + i * self.pitch, self.pad_diameter, self.drill))
        # Right column, bottom to top
        for i in range(pins_per_side):
            pads.append(
                _tht_pad(
                    pins_per_side + i + 1,
                    right,
                    span / 2 - i * self.pitch,
                    self.pad_diameter,
                    self.drill,
                )
            )
        self._pads = tuple(pads)
        self._graphics = self._artwork(span)

    def _artwork(self, span: float) -> tuple:
        body_width = self.row_spacing - 2.0
        body_length = span + self.pitch
        silk_x = body_width / 2
        silk_y = body_length / 2

        # Body outline with a chamfer at the pin 1 corner
        notch = 0.8
        return (
            GraphicLine(Point(-silk_x, -silk_y), Point(silk_x, -silk_y)),
            GraphicLine(Point(silk_x, -silk_y), Point(silk_x, silk_y)),
            GraphicLine(Point(silk_x, silk_y), Point(-silk_x, silk_y)),
            GraphicLine(Point(-silk_x, silk_y), Point(-silk_x, -silk_y + notch)),
            GraphicLine(Point(-silk_x, -silk_y + notch), Point(-silk_x + notch, -silk_y)),
            # Pin 1 marker
            GraphicCircle(
                Point(-self.row_spacing / 2, -span / 2 - self.pad_diameter / 2 - 0.5),
                0.2,
                LayerType.F_SILKS,
                0.12,
                fill=True,
            ),
            GraphicRect(Point(-silk_x, -silk_y), Point(silk_x, silk_y), LayerType.F_FAB, 0.1),
        )

    def __repr__(self) -> str:
        return f"DualInline({self.pin_count}, {self._functional.value!r})"

    def description(self) -> str:
        return (
            f"DIP, {self.pin_count} Pin, pitch {self.pitch:g}mm, "
            f"row spacing {self.row_spacing:g}mm"
        )

    def tags(self) -> tuple[str, ...]:
        return ("DIP", "THT", f"P{self.pitch:g}mm")


class PinHeader(_ThroughHolePart):
    """
    Vertical pin header.

    Two-row headers are numbered in the usual odd/even zigzag (pin 1 and 2
    side by side).

    Args:
        pins: Total number of pins
        rows: Number of rows (1 or 2)
        pitch: Pin pitch in mm (default: 2.54mm)
        pad_diameter: Pad diameter in mm
        drill: Drill hole diameter in mm

    Example:
        >>> PinHeader(4).footprint_name()
        'J_PinHeader_1x04_P2.54mm_Vertical'
    """

    def __init__(
        self,
        pins: int,
        rows: int = 1,
        pitch: float = PIN_HEADER_PITCH,
        pad_diameter: float = PIN_HEADER_PAD_DIAMETER,
        drill: float = PIN_HEADER_DRILL,
    ):
        if rows not in (1, 2):
            raise ConstructionError(f"Rows must be 1 or 2, got {rows}", context={"rows": rows})
        if not isinstance(pins, int) or pins < 1:
            raise ConstructionError("Pin header needs at least one pin", context={"pins": pins})
        if rows == 2 and pins % 2 != 0:
            raise ConstructionError(
                f"2-row header must have even number of pins, got {pins}",
                context={"pins": pins, "rows": rows},
            )

        pitch = _dimension("pitch", pitch, "Pin header")
        pad_diameter = _dimension("pad_diameter", pad_diameter, "Pin header")
        drill = _dimension("drill", drill, "Pin header")

        self.pin_count = pins
        self.rows = rows
        self.pitch = pitch
        self.pins_per_row = pins // rows

        designator = f"PinHeader_{rows}x{self.pins_per_row:02d}_P{pitch:g}mm_Vertical"
        self._functional = FunctionalType.connector()
        self._package = ThroughHole(designator, drill)

        span = (self.pins_per_row - 1) * pitch
        row_x = [0.0] if rows == 1 else [-pitch / 2, pitch / 2]

        pads = []
        number = 1
        for i in range(self.pins_per_row):
            y = -span / 2 + i * pitch
            for x in row_x:
                pads.append(_tht_pad(number, x, y, pad_diameter, drill))
                number += 1
        self._pads = tuple(pads)

        half_x = rows * pitch / 2
        half_y = span / 2 + pitch / 2
        silk = 0.11
        self._graphics = (
            GraphicRect(
                Point(-half_x - silk, -half_y - silk),
                Point(half_x + silk, half_y + silk),
                LayerType.F_SILKS,
                0.12,
            ),
            # Pin 1 marker
            GraphicCircle(
                Point(-half_x - silk - 0.4, -span / 2),
                0.15,
                LayerType.F_SILKS,
                0.12,
                fill=True,
            ),
            GraphicRect(Point(-half_x, -half_y), Point(half_x, half_y), LayerType.F_FAB, 0.1),
        )

    def __repr__(self) -> str:
        return f"PinHeader({self.pin_count}, rows={self.rows})"

    def description(self) -> str:
        return f"Pin Header, {self.rows}x{self.pins_per_row:02d}, pitch {self.pitch:g}mm"

    def tags(self) -> tuple[str, ...]:
        return ("PinHeader", "THT", f"P{self.pitch:g}mm")
