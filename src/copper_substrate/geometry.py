"""
Geometry primitives for footprint construction.

Provides immutable points and axis-aligned bounding boxes in board units
(millimetres), plus the rotation and grid-rounding helpers used by pads,
graphics and the courtyard engine.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

__all__ = [
    "Point",
    "BoundingBox",
    "ORIGIN",
    "GRID_SNAP_ULPS",
    "normalize_angle",
    "rotate_point",
    "floor_to_grid",
    "ceil_to_grid",
]

# A value within this many units in the last place of a grid line is taken as
# lying on it. Anything further away is rounded outward.
GRID_SNAP_ULPS = 4


@dataclass(frozen=True)
class Point:
    """A 2D point in millimetres."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def translated(self, dx: float, dy: float) -> Point:
        """Return this point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def rotated(self, angle_deg: float, center: Point | None = None) -> Point:
        """Rotate about ``center`` (default origin) by angle in degrees."""
        return rotate_point(self, angle_deg, center)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point(0.0, 0.0)


def normalize_angle(angle_deg: float) -> float:
    """Normalize an angle into [0, 360)."""
    angle = math.fmod(float(angle_deg), 360.0)
    if angle < 0:
        angle += 360.0
    # fmod of a tiny negative value can round back up to exactly 360
    if angle >= 360.0:
        angle = 0.0
    return angle + 0.0


def _cos_sin(angle_deg: float) -> tuple[float, float]:
    """Cosine and sine, exact for multiples of 90 degrees."""
    angle = normalize_angle(angle_deg)
    quarter_turns = {0.0: (1.0, 0.0), 90.0: (0.0, 1.0), 180.0: (-1.0, 0.0), 270.0: (0.0, -1.0)}
    if angle in quarter_turns:
        return quarter_turns[angle]
    rad = math.radians(angle)
    return math.cos(rad), math.sin(rad)


def rotate_point(point: Point, angle_deg: float, center: Point | None = None) -> Point:
    """Rotate a point about ``center`` by angle in degrees."""
    cx, cy = (center.x, center.y) if center is not None else (0.0, 0.0)
    cos_a, sin_a = _cos_sin(angle_deg)
    dx = point.x - cx
    dy = point.y - cy
    return Point(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)


def _grid_decimals(grid: float) -> int:
    """Number of decimal places needed to represent grid multiples."""
    exponent = Decimal(repr(grid)).normalize().as_tuple().exponent
    return max(0, -int(exponent))


def _grid_value(steps: float, grid: float) -> float:
    return round(int(steps) * grid, _grid_decimals(grid)) + 0.0


def _is_float_noise(value: float, grid_value: float) -> bool:
    scale = max(abs(value), abs(grid_value))
    return abs(value - grid_value) <= GRID_SNAP_ULPS * sys.float_info.epsilon * scale


def floor_to_grid(value: float, grid: float) -> float:
    """
    Round ``value`` down to the nearest multiple of ``grid``.

    The result is never above ``value`` except by float noise, so a value
    computed as ``1.4999999999999998`` still lands on 1.5.
    """
    nearest = _grid_value(round(value / grid), grid)
    if nearest <= value or _is_float_noise(value, nearest):
        return nearest
    return _grid_value(math.floor(value / grid), grid)


def ceil_to_grid(value: float, grid: float) -> float:
    """Round ``value`` up to the nearest multiple of ``grid`` (see :func:`floor_to_grid`)."""
    nearest = _grid_value(round(value / grid), grid)
    if nearest >= value or _is_float_noise(value, nearest):
        return nearest
    return _grid_value(math.ceil(value / grid), grid)


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned bounding box.

    Invariant: ``min_x <= max_x`` and ``min_y <= max_y``. Zero-area boxes are
    legal and describe single-point (or empty) geometry.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Invalid bounding box: min ({self.min_x}, {self.min_y}) "
                f"exceeds max ({self.max_x}, {self.max_y})"
            )

    @classmethod
    def empty(cls) -> BoundingBox:
        """The origin-centred degenerate box used for "no geometry"."""
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_point(cls, point: Point) -> BoundingBox:
        return cls(point.x, point.y, point.x, point.y)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BoundingBox:
        """Smallest box containing all points (degenerate at origin if none)."""
        pts = list(points)
        if not pts:
            return cls.empty()
        return cls(
            min(p.x for p in pts),
            min(p.y for p in pts),
            max(p.x for p in pts),
            max(p.y for p in pts),
        )

    @classmethod
    def from_center(cls, center: Point, width: float, height: float) -> BoundingBox:
        return cls(
            center.x - width / 2,
            center.y - height / 2,
            center.x + width / 2,
            center.y + height / 2,
        )

    @classmethod
    def union_all(cls, boxes: Iterable[BoundingBox]) -> BoundingBox:
        """Union of all boxes (degenerate at origin if none)."""
        result: BoundingBox | None = None
        for box in boxes:
            result = box if result is None else result.union(box)
        return result if result is not None else cls.empty()

    @property
    def min_point(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def max_point(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def is_degenerate(self) -> bool:
        """True if the box has zero area."""
        return self.width == 0 or self.height == 0

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners in order: top-left, top-right, bottom-right, bottom-left."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def inflate(self, margin: float) -> BoundingBox:
        """Grow the box by ``margin`` on every side."""
        return BoundingBox(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )

    def translate(self, dx: float, dy: float) -> BoundingBox:
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)

    def round_outward(self, grid: float) -> BoundingBox:
        """Snap every edge outward onto ``grid``; the result always contains self."""
        if grid <= 0:
            raise ValueError(f"Grid resolution must be positive, got {grid}")
        return BoundingBox(
            floor_to_grid(self.min_x, grid),
            floor_to_grid(self.min_y, grid),
            ceil_to_grid(self.max_x, grid),
            ceil_to_grid(self.max_y, grid),
        )

    def contains(self, other: BoundingBox | Point, tolerance: float = 0.0) -> bool:
        """True if ``other`` lies inside this box (edges inclusive)."""
        if isinstance(other, Point):
            other = BoundingBox.from_point(other)
        return (
            self.min_x <= other.min_x + tolerance
            and self.min_y <= other.min_y + tolerance
            and self.max_x >= other.max_x - tolerance
            and self.max_y >= other.max_y - tolerance
        )
