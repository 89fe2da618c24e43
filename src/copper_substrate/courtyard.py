"""
Courtyard engine.

Derives a component's keep-out courtyard from its pads:

1. union of all pad extents (rotation-aware)
2. inflate by the clearance margin selected for the package class
3. round every edge outward onto the configured grid

Margins and grid come from a :class:`CourtyardPolicy`, validated when it is
loaded. The defaults follow the KiCad Library Conventions (0.25 mm clearance
for SMD parts, 0.01 mm grid); through-hole parts get 0.5 mm.

Example::

    from copper_substrate.courtyard import CourtyardPolicy, derive_courtyard

    policy = CourtyardPolicy.from_mapping({"smt_margin": "0.25mm"})
    courtyard = derive_courtyard(component.pads(), component.package(), policy)
    print(courtyard.bounds)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigurationError
from .geometry import BoundingBox, Point
from .layers import LayerType, Side
from .package_types import PackageClass, PackageType
from .primitives import GraphicRect, Pad
from .units import format_length, parse_length

__all__ = [
    "CourtyardPolicy",
    "Courtyard",
    "DEFAULT_POLICY",
    "COURTYARD_LINE_WIDTH",
    "derive_courtyard",
    "pad_union",
]

logger = logging.getLogger(__name__)

# Courtyard outline stroke (KiCad Library Conventions F5.3)
COURTYARD_LINE_WIDTH = 0.05

POLICY_KEYS = frozenset({"smt_margin", "tht_margin", "default_margin", "grid_resolution"})


class CourtyardPolicy(BaseModel):
    """
    Clearance margins per package class plus the output grid, all in mm.

    Values may be given as numbers (mm) or length strings such as "10mil".
    Every value must be positive.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    smt_margin: float = 0.25
    tht_margin: float = 0.5
    default_margin: float = 0.25
    grid_resolution: float = 0.01

    @field_validator("smt_margin", "tht_margin", "default_margin", "grid_resolution", mode="before")
    @classmethod
    def _parse_distance(cls, value: Any) -> float:
        return parse_length(value)

    @field_validator("smt_margin", "tht_margin", "default_margin", "grid_resolution")
    @classmethod
    def _require_positive(cls, value: float) -> float:
        if not value > 0 or value == float("inf"):
            raise ValueError("must be a positive finite distance")
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CourtyardPolicy:
        """
        Build a policy from a mapping, failing fast on bad values.

        Raises:
            ConfigurationError: If a key is unknown or a value is not a
                positive distance
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                "Invalid courtyard policy",
                context={"problems": "; ".join(problems)},
                suggestions=[
                    f"Recognized keys: {', '.join(sorted(POLICY_KEYS))}",
                    "Margins and grid must be positive, e.g. 0.25 or '10mil'",
                ],
            ) from e

    def margin_for(self, package: PackageType) -> float:
        """Clearance margin for a package's class."""
        package_class = package.package_class
        if package_class == PackageClass.SMT:
            return self.smt_margin
        if package_class == PackageClass.THT:
            return self.tht_margin
        return self.default_margin


DEFAULT_POLICY = CourtyardPolicy()


@dataclass(frozen=True)
class Courtyard:
    """
    A derived courtyard.

    Attributes:
        bounds: Grid-aligned keep-out box (degenerate at origin when empty)
        margin: Clearance margin that was applied
        layer: Courtyard layer the outline belongs on
        is_empty: True when derived from no pads
    """

    bounds: BoundingBox
    margin: float
    layer: LayerType = LayerType.F_CRTYD
    is_empty: bool = False

    @classmethod
    def empty(cls, margin: float = 0.0) -> Courtyard:
        return cls(BoundingBox.empty(), margin, LayerType.F_CRTYD, True)

    def outline(self) -> tuple[Point, ...]:
        """Closed outline polygon (first corner repeated at the end); empty if no pads."""
        if self.is_empty:
            return ()
        corners = self.bounds.corners()
        return corners + (corners[0],)

    def to_graphic(self, width: float = COURTYARD_LINE_WIDTH) -> GraphicRect:
        """The courtyard as a rectangle on its courtyard layer."""
        return GraphicRect(
            start=self.bounds.min_point,
            end=self.bounds.max_point,
            layer=self.layer,
            width=width,
        )


def pad_union(pads: Iterable[Pad]) -> BoundingBox | None:
    """Union of pad extents, or None when there are no pads."""
    boxes = [pad.extent() for pad in pads]
    if not boxes:
        return None
    return BoundingBox.union_all(boxes)


def _courtyard_side(pads: list[Pad]) -> Side:
    """Back only when every pad's copper is on the back side."""
    sides = {pad.copper_side for pad in pads}
    if sides == {Side.BACK}:
        return Side.BACK
    return Side.FRONT


def derive_courtyard(
    pads: Iterable[Pad],
    package: PackageType,
    policy: CourtyardPolicy | None = None,
) -> Courtyard:
    """
    Derive the courtyard for a pad set.

    Args:
        pads: Pads of the component, in any order
        package: Package whose class selects the clearance margin
        policy: Margins and grid (default: :data:`DEFAULT_POLICY`)

    Returns:
        Courtyard enclosing every pad by at least the selected margin. An
        empty pad set yields :meth:`Courtyard.empty`.
    """
    policy = policy or DEFAULT_POLICY
    pads = list(pads)
    margin = policy.margin_for(package)

    raw = pad_union(pads)
    if raw is None:
        logger.debug("No pads for package %s; courtyard is empty", package.name)
        return Courtyard.empty(margin)

    inflated = raw.inflate(margin)
    bounds = inflated.round_outward(policy.grid_resolution)
    side = _courtyard_side(pads)

    logger.debug(
        "Courtyard for %s (%s, margin %s): %s x %s",
        package.name,
        package.package_class.value,
        format_length(margin),
        format_length(bounds.width),
        format_length(bounds.height),
    )
    return Courtyard(bounds, margin, LayerType.courtyard(side))
