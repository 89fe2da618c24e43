"""
Footprint primitives: pads, graphic elements and 3D model references.

All primitives are frozen dataclasses. They know their own extents and can be
translated, which is all the courtyard engine and component aggregation need.
Serialization lives in :mod:`copper_substrate.export`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .exceptions import ConstructionError
from .geometry import BoundingBox, Point, normalize_angle, rotate_point
from .layers import COPPER_LAYERS, LayerType, Side

__all__ = [
    "PadShape",
    "StrokeType",
    "PadKind",
    "Pad",
    "GraphicLine",
    "GraphicRect",
    "GraphicCircle",
    "GraphicArc",
    "GraphicPolygon",
    "GraphicText",
    "GraphicElement",
    "Model3D",
    "default_pad_layers",
]


class PadShape(Enum):
    """Closed set of pad shapes."""

    CIRCLE = "circle"
    RECT = "rect"
    ROUNDRECT = "roundrect"
    OVAL = "oval"


class StrokeType(Enum):
    """Line style of a graphic element outline."""

    SOLID = "solid"
    DASHED = "dash"
    DOTTED = "dot"


class PadKind(Enum):
    """Electrical/mechanical role of a pad."""

    SMD = "smd"
    THROUGH_HOLE = "through_hole"
    NPTH = "npth"  # Non-plated through hole

    @property
    def is_hole(self) -> bool:
        return self != PadKind.SMD


def default_pad_layers(kind: PadKind, side: Side = Side.FRONT) -> tuple[LayerType, ...]:
    """Standard layer set for a pad of the given kind."""
    if kind == PadKind.SMD:
        front = (LayerType.F_CU, LayerType.F_PASTE, LayerType.F_MASK)
        if side == Side.BACK:
            return tuple(layer.flipped() for layer in front)
        return front
    if kind == PadKind.NPTH:
        return (LayerType.F_MASK, LayerType.B_MASK)
    return (LayerType.F_CU, LayerType.B_CU, LayerType.F_MASK, LayerType.B_MASK)


def _finite(value) -> bool:
    return (
        isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
    )


def _check_point(point, name: str, element: str) -> None:
    if not isinstance(point, Point) or not (_finite(point.x) and _finite(point.y)):
        raise ConstructionError(
            f"{element} {name} must be a point with finite coordinates",
            context={name: point},
        )


def _check_stroke(width: float, element: str) -> None:
    if not _finite(width) or width < 0:
        raise ConstructionError(
            f"{element} stroke width must be a non-negative number",
            context={"width": width},
        )


def _check_layer(layer, element: str) -> None:
    if not isinstance(layer, LayerType):
        raise ConstructionError(
            f"{element} layer must be a LayerType",
            context={"layer": layer},
        )


def _check_style(stroke_type, element: str) -> None:
    if not isinstance(stroke_type, StrokeType):
        raise ConstructionError(
            f"{element} stroke type must be a StrokeType",
            context={"stroke_type": stroke_type},
        )


@dataclass(frozen=True)
class Pad:
    """
    A copper contact (or plain hole) of a footprint.

    Rotation is normalized into [0, 360). When ``layers`` is omitted the
    standard set for ``kind`` on ``side`` is used.
    """

    number: str
    center: Point
    size: tuple[float, float]
    shape: PadShape = PadShape.ROUNDRECT
    kind: PadKind = PadKind.SMD
    rotation: float = 0.0
    drill: float | None = None
    layers: tuple[LayerType, ...] | None = None
    side: Side = Side.FRONT
    roundrect_ratio: float = 0.25

    def __post_init__(self):
        if not isinstance(self.number, str):
            raise ConstructionError("Pad number must be a string", context={"number": self.number})
        if not self.number and self.kind != PadKind.NPTH:
            raise ConstructionError(
                "Only non-plated holes may have an empty pad number",
                context={"kind": self.kind.value},
            )
        _check_point(self.center, "center", f"Pad {self.number}")

        if len(self.size) != 2 or not all(_finite(v) and v >= 0 for v in self.size):
            raise ConstructionError(
                "Pad size must be two non-negative numbers",
                context={"pad": self.number, "size": self.size},
            )
        object.__setattr__(self, "size", (float(self.size[0]), float(self.size[1])))

        if not _finite(self.rotation):
            raise ConstructionError(
                "Pad rotation must be a finite number",
                context={"pad": self.number, "rotation": self.rotation},
            )
        object.__setattr__(self, "rotation", normalize_angle(self.rotation))

        self._check_drill()

        if not 0 <= self.roundrect_ratio <= 0.5:
            raise ConstructionError(
                "Roundrect ratio must be between 0 and 0.5",
                context={"pad": self.number, "roundrect_ratio": self.roundrect_ratio},
            )

        layers = self.layers
        if layers is None:
            layers = default_pad_layers(self.kind, self.side)
        layers = tuple(layers)
        if not layers:
            raise ConstructionError("Pad needs at least one layer", context={"pad": self.number})
        for layer in layers:
            _check_layer(layer, f"Pad {self.number}")
        object.__setattr__(self, "layers", layers)
        self._check_copper()

    def _check_drill(self) -> None:
        if self.kind == PadKind.SMD:
            if self.drill is not None:
                raise ConstructionError(
                    "SMD pads cannot have a drill",
                    context={"pad": self.number, "drill": self.drill},
                    suggestions=["Use PadKind.THROUGH_HOLE for drilled pads"],
                )
            return

        if self.drill is None or not _finite(self.drill) or self.drill <= 0:
            raise ConstructionError(
                f"{self.kind.value} pads need a positive drill diameter",
                context={"pad": self.number, "drill": self.drill},
            )
        if self.kind == PadKind.THROUGH_HOLE and self.drill > min(self.size):
            raise ConstructionError(
                "Plated hole is larger than its pad",
                context={"pad": self.number, "drill": self.drill, "size": self.size},
                suggestions=["Increase the pad size or use PadKind.NPTH"],
            )

    def _check_copper(self) -> None:
        copper = [layer for layer in self.layers if layer.is_copper]
        if self.kind == PadKind.SMD:
            if len(copper) != 1:
                raise ConstructionError(
                    "SMD pads must be on exactly one copper layer",
                    context={"pad": self.number, "copper": [c.name for c in copper]},
                )
        elif self.kind == PadKind.THROUGH_HOLE:
            if set(copper) != COPPER_LAYERS:
                raise ConstructionError(
                    "Plated through-hole pads must span both copper layers",
                    context={"pad": self.number, "copper": [c.name for c in copper]},
                )
        elif copper:
            raise ConstructionError(
                "Non-plated holes cannot be on a copper layer",
                context={"pad": self.number, "copper": [c.name for c in copper]},
            )

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]

    @property
    def copper_side(self) -> Side | None:
        """Side of an SMD pad's copper; None for pads spanning the board."""
        copper = [layer for layer in self.layers if layer.is_copper]
        if len(copper) == 1:
            return copper[0].side
        return None

    def extent(self) -> BoundingBox:
        """Bounding box of the pad outline, rotation-aware."""
        if self.shape == PadShape.CIRCLE:
            radius = max(self.size) / 2
            return BoundingBox(
                self.center.x - radius,
                self.center.y - radius,
                self.center.x + radius,
                self.center.y + radius,
            )

        local = BoundingBox.from_center(self.center, self.width, self.height)
        if self.rotation == 0:
            return local
        return BoundingBox.from_points(
            rotate_point(corner, self.rotation, self.center) for corner in local.corners()
        )

    def translated(self, dx: float, dy: float) -> Pad:
        return replace(self, center=self.center.translated(dx, dy))

    def renumbered(self, number: str) -> Pad:
        return replace(self, number=number)


@dataclass(frozen=True)
class GraphicLine:
    """A line segment on a footprint layer."""

    start: Point
    end: Point
    layer: LayerType = LayerType.F_SILKS
    width: float = 0.12
    stroke_type: StrokeType = StrokeType.SOLID

    def __post_init__(self):
        _check_layer(self.layer, "Line")
        _check_stroke(self.width, "Line")
        _check_style(self.stroke_type, "Line")
        _check_point(self.start, "start", "Line")
        _check_point(self.end, "end", "Line")

    def extent(self) -> BoundingBox:
        return BoundingBox.from_points((self.start, self.end))

    def translated(self, dx: float, dy: float) -> GraphicLine:
        return replace(self, start=self.start.translated(dx, dy), end=self.end.translated(dx, dy))


@dataclass(frozen=True)
class GraphicRect:
    """An axis-aligned rectangle given by opposite corners."""

    start: Point
    end: Point
    layer: LayerType = LayerType.F_SILKS
    width: float = 0.12
    fill: bool = False
    stroke_type: StrokeType = StrokeType.SOLID

    def __post_init__(self):
        _check_layer(self.layer, "Rectangle")
        _check_stroke(self.width, "Rectangle")
        _check_style(self.stroke_type, "Rectangle")
        _check_point(self.start, "start", "Rectangle")
        _check_point(self.end, "end", "Rectangle")

    def extent(self) -> BoundingBox:
        return BoundingBox.from_points((self.start, self.end))

    def translated(self, dx: float, dy: float) -> GraphicRect:
        return replace(self, start=self.start.translated(dx, dy), end=self.end.translated(dx, dy))


@dataclass(frozen=True)
class GraphicCircle:
    """A circle given by center and radius."""

    center: Point
    radius: float
    layer: LayerType = LayerType.F_SILKS
    width: float = 0.12
    fill: bool = False
    stroke_type: StrokeType = StrokeType.SOLID

    def __post_init__(self):
        _check_layer(self.layer, "Circle")
        _check_stroke(self.width, "Circle")
        _check_style(self.stroke_type, "Circle")
        _check_point(self.center, "center", "Circle")
        if not _finite(self.radius) or self.radius <= 0:
            raise ConstructionError("Circle radius must be positive", context={"radius": self.radius})

    def extent(self) -> BoundingBox:
        return BoundingBox.from_center(self.center, 2 * self.radius, 2 * self.radius)

    def translated(self, dx: float, dy: float) -> GraphicCircle:
        return replace(self, center=self.center.translated(dx, dy))


@dataclass(frozen=True)
class GraphicArc:
    """A circular arc through start, mid and end points."""

    start: Point
    mid: Point
    end: Point
    layer: LayerType = LayerType.F_SILKS
    width: float = 0.12
    stroke_type: StrokeType = StrokeType.SOLID

    def __post_init__(self):
        _check_layer(self.layer, "Arc")
        _check_stroke(self.width, "Arc")
        _check_style(self.stroke_type, "Arc")
        for name in ("start", "mid", "end"):
            _check_point(getattr(self, name), name, "Arc")
        if self.start == self.end:
            raise ConstructionError(
                "Arc start and end must differ",
                context={"start": self.start.as_tuple()},
                suggestions=["Use GraphicCircle for full circles"],
            )

    def circle(self) -> tuple[Point, float] | None:
        """Center and radius of the arc's circle, or None if the points are collinear."""
        ax, ay = self.start.x, self.start.y
        bx, by = self.mid.x, self.mid.y
        cx, cy = self.end.x, self.end.y
        d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if abs(d) < 1e-12:
            return None
        a2 = ax * ax + ay * ay
        b2 = bx * bx + by * by
        c2 = cx * cx + cy * cy
        ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
        uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
        center = Point(ux, uy)
        return center, math.hypot(ax - ux, ay - uy)

    def extent(self) -> BoundingBox:
        """Bounding box including any axis extremes the arc sweeps through."""
        points = [self.start, self.mid, self.end]
        circle = self.circle()
        if circle is None:
            return BoundingBox.from_points(points)

        center, radius = circle
        two_pi = 2 * math.pi

        def sweep_from_start(p: Point) -> float:
            angle = math.atan2(p.y - center.y, p.x - center.x)
            start_angle = math.atan2(self.start.y - center.y, self.start.x - center.x)
            return (angle - start_angle) % two_pi

        end_sweep = sweep_from_start(self.end)
        counter_clockwise = sweep_from_start(self.mid) < end_sweep

        for quarter in range(4):
            angle = quarter * math.pi / 2
            extreme = Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
            sweep = sweep_from_start(extreme)
            if (counter_clockwise and sweep <= end_sweep) or (
                not counter_clockwise and (sweep >= end_sweep or sweep == 0)
            ):
                points.append(extreme)
        return BoundingBox.from_points(points)

    def translated(self, dx: float, dy: float) -> GraphicArc:
        return replace(
            self,
            start=self.start.translated(dx, dy),
            mid=self.mid.translated(dx, dy),
            end=self.end.translated(dx, dy),
        )


@dataclass(frozen=True)
class GraphicPolygon:
    """A closed polygon."""

    points: tuple[Point, ...]
    layer: LayerType = LayerType.F_SILKS
    width: float = 0.12
    fill: bool = True
    stroke_type: StrokeType = StrokeType.SOLID

    def __post_init__(self):
        _check_layer(self.layer, "Polygon")
        _check_stroke(self.width, "Polygon")
        _check_style(self.stroke_type, "Polygon")
        object.__setattr__(self, "points", tuple(self.points))
        for point in self.points:
            _check_point(point, "point", "Polygon")
        if len(self.points) < 3:
            raise ConstructionError(
                "Polygon needs at least three points",
                context={"points": len(self.points)},
            )

    def extent(self) -> BoundingBox:
        return BoundingBox.from_points(self.points)

    def translated(self, dx: float, dy: float) -> GraphicPolygon:
        return replace(self, points=tuple(p.translated(dx, dy) for p in self.points))


@dataclass(frozen=True)
class GraphicText:
    """User text drawn on a footprint layer, centred on ``position``."""

    text: str
    position: Point
    layer: LayerType = LayerType.F_FAB
    height: float = 1.0
    thickness: float = 0.15
    rotation: float = 0.0
    hide: bool = False

    def __post_init__(self):
        _check_layer(self.layer, "Text")
        _check_point(self.position, "position", "Text")
        if not self.text:
            raise ConstructionError("Text elements need non-empty text")
        if not _finite(self.height) or self.height <= 0:
            raise ConstructionError("Text height must be positive", context={"height": self.height})
        _check_stroke(self.thickness, "Text")
        if not _finite(self.rotation):
            raise ConstructionError(
                "Text rotation must be a finite number", context={"rotation": self.rotation}
            )
        object.__setattr__(self, "rotation", normalize_angle(self.rotation))

    def extent(self) -> BoundingBox:
        """Approximate extent: one ``height``-sized square cell per character."""
        cell = BoundingBox.from_center(self.position, self.height * len(self.text), self.height)
        if self.rotation == 0:
            return cell
        return BoundingBox.from_points(
            rotate_point(corner, self.rotation, self.position) for corner in cell.corners()
        )

    def translated(self, dx: float, dy: float) -> GraphicText:
        return replace(self, position=self.position.translated(dx, dy))


GraphicElement = Union[
    GraphicLine, GraphicRect, GraphicCircle, GraphicArc, GraphicPolygon, GraphicText
]


@dataclass(frozen=True)
class Model3D:
    """Reference to a 3D model file with its placement transform."""

    path: str
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        if not self.path:
            raise ConstructionError("3D model path must not be empty")
