"""
Mechanical parts with no electrical function.
"""

from __future__ import annotations

from ..component import BoardComposableObject
from ..exceptions import ConstructionError
from ..functional_types import FunctionalType
from ..geometry import Point
from ..layers import LayerType
from ..package_types import Custom
from ..primitives import GraphicCircle, Pad, PadKind, PadShape
from .standards import MOUNTING_HOLE_SIZES

__all__ = ["MountingHole"]


class MountingHole(BoardComposableObject):
    """
    Screw mounting hole.

    Without ``pad_diameter`` the hole is non-plated and unnumbered; with it,
    a plated annular ring numbered "1" is added (e.g. for chassis ground).

    Example:
        >>> MountingHole.for_screw("M3").footprint_name()
        'H_MountingHole_3.2mm'
    """

    def __init__(self, drill: float, pad_diameter: float | None = None):
        if isinstance(drill, bool) or not isinstance(drill, (int, float)) or not drill > 0:
            raise ConstructionError("Mounting hole drill must be positive", context={"drill": drill})
        if pad_diameter is not None and pad_diameter <= drill:
            raise ConstructionError(
                "Mounting hole pad must be larger than the drill",
                context={"drill": drill, "pad_diameter": pad_diameter},
            )

        self.drill = drill
        self.pad_diameter = pad_diameter
        suffix = "_Pad" if self.plated else ""
        self._package = Custom(f"MountingHole_{drill:g}mm{suffix}")

        if self.plated:
            pad = Pad(
                "1",
                Point(0.0, 0.0),
                (pad_diameter, pad_diameter),
                PadShape.CIRCLE,
                PadKind.THROUGH_HOLE,
                drill=drill,
            )
        else:
            pad = Pad("", Point(0.0, 0.0), (drill, drill), PadShape.CIRCLE, PadKind.NPTH, drill=drill)
        self._pads = (pad,)

        outer = pad_diameter if self.plated else drill
        self._graphics = (
            GraphicCircle(Point(0.0, 0.0), outer / 2, LayerType.DWGS_USER, 0.15),
        )

    @classmethod
    def for_screw(cls, screw: str, plated: bool = False) -> MountingHole:
        """Clearance hole for a metric screw size such as "M3"."""
        if screw not in MOUNTING_HOLE_SIZES:
            raise ConstructionError(
                f"Unknown screw size: {screw}",
                suggestions=[f"Valid sizes: {', '.join(MOUNTING_HOLE_SIZES)}"],
            )
        drill = MOUNTING_HOLE_SIZES[screw]
        # Plated ring: 2x the drill, like the KiCad MountingHole_*_Pad footprints
        return cls(drill, round(drill * 2, 2) if plated else None)

    @property
    def plated(self) -> bool:
        return self.pad_diameter is not None

    def __repr__(self) -> str:
        return f"MountingHole({self.drill!r}, pad_diameter={self.pad_diameter!r})"

    def functional_type(self) -> FunctionalType:
        return FunctionalType.mechanical()

    def package(self) -> Custom:
        return self._package

    def pads(self) -> tuple[Pad, ...]:
        return self._pads

    def graphics(self) -> tuple:
        return self._graphics

    def description(self) -> str:
        kind = "plated" if self.plated else "non-plated"
        return f"Mounting hole, {self.drill:g}mm drill, {kind}"

    def tags(self) -> tuple[str, ...]:
        return ("mounting", "hole")
