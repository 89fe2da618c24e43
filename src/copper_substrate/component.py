"""
Board Composable Object: the capability interface of every board component.

Anything that can sit on a PCB (a resistor, a connector, a mounting hole)
implements :class:`BoardComposableObject`. The courtyard engine and every
exporter are written against this interface only, so adding a component
variant never requires changes to them.

Concrete variants implement four methods (``functional_type``, ``package``,
``pads`` and ``graphics``); everything else is derived and may be overridden.
:class:`Component` is a ready-made immutable implementation, and
:meth:`Component.aggregate` builds a complex component from simpler ones.

Example::

    from copper_substrate import Component, FunctionalType, Pad, Point, SurfaceMount

    cap = Component(
        FunctionalType.capacitor("100nF"),
        SurfaceMount("0603", 1.27),
        pads=[
            Pad("1", Point(-0.75, 0), (1.0, 0.5)),
            Pad("2", Point(0.75, 0), (1.0, 0.5)),
        ],
    )
    cap.footprint_name()   # "C_0603"
    cap.courtyard().bounds
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from .courtyard import Courtyard, CourtyardPolicy, derive_courtyard
from .exceptions import ConstructionError
from .functional_types import FunctionalType
from .geometry import ORIGIN, BoundingBox, Point
from .package_types import PackageType
from .primitives import GraphicElement, GraphicText, Model3D, Pad, PadKind

__all__ = ["BoardComposableObject", "Component", "derive_footprint_name"]


def derive_footprint_name(functional: FunctionalType, package: PackageType) -> str:
    """Default footprint name: ``{functional prefix}_{package designator}``."""
    return f"{functional.footprint_prefix}_{package.name}"


class BoardComposableObject(ABC):
    """
    Capability interface for anything that can be placed on a PCB.

    Geometry returned by :meth:`pads` and :meth:`graphics` is ordered and
    read-only. The courtyard is never authored; it is derived from the pads
    each time :meth:`courtyard` is called.
    """

    # Core identification

    @abstractmethod
    def functional_type(self) -> FunctionalType:
        """What the component is."""

    @abstractmethod
    def package(self) -> PackageType:
        """Physical package."""

    def footprint_name(self) -> str:
        """Deterministic footprint name, e.g. "C_0603"."""
        return derive_footprint_name(self.functional_type(), self.package())

    def reference_prefix(self) -> str:
        """Reference designator prefix, e.g. "C" for C1."""
        return self.functional_type().reference_prefix

    def library_name(self) -> str:
        """Library the footprint belongs in, e.g. "Capacitor_SMD"."""
        functional = self.functional_type().label.replace(" ", "")
        suffix = "SMD" if self.is_smt() else "THT"
        return f"{functional}_{suffix}"

    # Geometry

    @abstractmethod
    def pads(self) -> Sequence[Pad]:
        """Contact geometry in footprint order."""

    @abstractmethod
    def graphics(self) -> Sequence[GraphicElement]:
        """Silkscreen and fabrication artwork, excluding the courtyard."""

    def courtyard(self, policy: CourtyardPolicy | None = None) -> Courtyard:
        """Courtyard derived from the current pads."""
        return derive_courtyard(self.pads(), self.package(), policy)

    def bounding_box(self) -> BoundingBox:
        """Union of pad and graphic extents, without courtyard clearance."""
        extents = [pad.extent() for pad in self.pads()]
        extents.extend(graphic.extent() for graphic in self.graphics())
        return BoundingBox.union_all(extents)

    # Classification

    def is_smt(self) -> bool:
        """True if the component has pads and all of them are SMD."""
        pads = self.pads()
        return bool(pads) and all(pad.kind == PadKind.SMD for pad in pads)

    def is_electrical(self) -> bool:
        return self.functional_type().is_electrical

    def is_passive(self) -> bool:
        return self.functional_type().is_passive

    def terminal_count(self) -> int:
        """Number of distinct numbered pads."""
        return len({pad.number for pad in self.pads() if pad.number})

    # Footprint metadata

    def description(self) -> str | None:
        return None

    def tags(self) -> tuple[str, ...]:
        return ()

    def texts(self) -> Sequence[GraphicText]:
        """Extra user text (beyond reference and value) to place on the footprint."""
        return ()

    def model_3d(self) -> Model3D | None:
        return None


class Component(BoardComposableObject):
    """
    Immutable component assembled from explicit parts.

    Pads and graphics are stored as tuples; use :meth:`with_pads` and
    :meth:`with_graphics` to derive modified copies.

    Raises:
        ConstructionError: If a graphic is placed on a courtyard layer, or a
            footprint name override is blank
    """

    def __init__(
        self,
        functional_type: FunctionalType,
        package: PackageType,
        pads: Iterable[Pad] = (),
        graphics: Iterable[GraphicElement] = (),
        *,
        name: str | None = None,
        description: str | None = None,
        tags: Iterable[str] = (),
        texts: Iterable[GraphicText] = (),
        model: Model3D | None = None,
    ):
        if not isinstance(functional_type, FunctionalType):
            raise ConstructionError(
                "Component needs a FunctionalType", context={"functional_type": functional_type}
            )
        if not hasattr(package, "package_class"):
            raise ConstructionError("Component needs a PackageType", context={"package": package})

        self._functional = functional_type
        self._package = package
        self._pads = tuple(pads)
        self._graphics = tuple(graphics)
        self._name = name
        self._description = description
        self._tags = tuple(tags)
        self._texts = tuple(texts)
        self._model = model

        for pad in self._pads:
            if not isinstance(pad, Pad):
                raise ConstructionError("Pads must be Pad instances", context={"pad": pad})
        authored_courtyards = [
            g for g in (*self._graphics, *self._texts) if g.layer.is_courtyard
        ]
        if authored_courtyards:
            raise ConstructionError(
                "Courtyard geometry is derived and cannot be authored",
                context={"footprint": self.footprint_name(), "elements": len(authored_courtyards)},
                suggestions=["Remove graphics on F.CrtYd/B.CrtYd; adjust the courtyard policy"],
            )
        if name is not None and not name.strip():
            raise ConstructionError("Footprint name override must not be blank")

    def __repr__(self) -> str:
        return (
            f"Component({self.footprint_name()!r}, pads={len(self._pads)}, "
            f"graphics={len(self._graphics)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Component):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (
            self._functional,
            self._package,
            self._pads,
            self._graphics,
            self._name,
            self._description,
            self._tags,
            self._texts,
            self._model,
        )

    def functional_type(self) -> FunctionalType:
        return self._functional

    def package(self) -> PackageType:
        return self._package

    def footprint_name(self) -> str:
        if self._name is not None:
            return self._name
        return super().footprint_name()

    def pads(self) -> tuple[Pad, ...]:
        return self._pads

    def graphics(self) -> tuple[GraphicElement, ...]:
        return self._graphics

    def description(self) -> str | None:
        return self._description

    def tags(self) -> tuple[str, ...]:
        return self._tags

    def texts(self) -> tuple[GraphicText, ...]:
        return self._texts

    def model_3d(self) -> Model3D | None:
        return self._model

    def _copy(self, **changes) -> Component:
        fields = {
            "functional_type": self._functional,
            "package": self._package,
            "pads": self._pads,
            "graphics": self._graphics,
            "name": self._name,
            "description": self._description,
            "tags": self._tags,
            "texts": self._texts,
            "model": self._model,
        }
        fields.update(changes)
        return Component(**fields)

    def with_pads(self, pads: Iterable[Pad]) -> Component:
        """Copy with a new pad sequence (the courtyard follows automatically)."""
        return self._copy(pads=tuple(pads))

    def with_graphics(self, graphics: Iterable[GraphicElement]) -> Component:
        """Copy with a new graphics sequence."""
        return self._copy(graphics=tuple(graphics))

    def translated(self, dx: float, dy: float) -> Component:
        """Copy with all geometry moved by (dx, dy)."""
        return self._copy(
            pads=tuple(pad.translated(dx, dy) for pad in self._pads),
            graphics=tuple(g.translated(dx, dy) for g in self._graphics),
            texts=tuple(t.translated(dx, dy) for t in self._texts),
        )

    @classmethod
    def from_object(cls, obj: BoardComposableObject) -> Component:
        """Snapshot any board object into a plain Component."""
        if isinstance(obj, Component):
            return obj
        return cls(
            obj.functional_type(),
            obj.package(),
            obj.pads(),
            obj.graphics(),
            name=obj.footprint_name(),
            description=obj.description(),
            tags=obj.tags(),
            texts=obj.texts(),
            model=obj.model_3d(),
        )

    @classmethod
    def aggregate(
        cls,
        functional_type: FunctionalType,
        package: PackageType,
        children: Iterable[BoardComposableObject | tuple[BoardComposableObject, Point]],
        *,
        renumber: bool = False,
        name: str | None = None,
        description: str | None = None,
        tags: Iterable[str] = (),
    ) -> Component:
        """
        Build one component from the pads and graphics of several others.

        Each child is either a board object or a ``(board object, offset)``
        pair; its geometry is translated by the offset and appended in order.
        Children are not referenced afterwards.

        Args:
            renumber: Number the merged pads 1..N in order instead of keeping
                the children's pad numbers (unnumbered holes stay unnumbered)
        """
        pads: list[Pad] = []
        graphics: list[GraphicElement] = []
        texts: list[GraphicText] = []

        for child in children:
            if isinstance(child, tuple):
                obj, offset = child
            else:
                obj, offset = child, ORIGIN
            pads.extend(pad.translated(offset.x, offset.y) for pad in obj.pads())
            graphics.extend(g.translated(offset.x, offset.y) for g in obj.graphics())
            texts.extend(t.translated(offset.x, offset.y) for t in obj.texts())

        if renumber:
            counter = 0
            numbered = []
            for pad in pads:
                if pad.number:
                    counter += 1
                    pad = pad.renumbered(str(counter))
                numbered.append(pad)
            pads = numbered

        return cls(
            functional_type,
            package,
            pads,
            graphics,
            name=name,
            description=description,
            tags=tags,
            texts=texts,
        )
