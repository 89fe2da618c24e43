"""
Board layer taxonomy.

Layers are format-agnostic: each :class:`LayerType` is a (kind, side) pair.
Exporters map them onto their own layer names.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["LayerKind", "Side", "LayerType", "COPPER_LAYERS", "PAD_LAYER_KINDS"]


class LayerKind(Enum):
    """Function of a board layer."""

    COPPER = "copper"
    SILKSCREEN = "silkscreen"
    COURTYARD = "courtyard"
    FABRICATION = "fabrication"
    MASK = "mask"
    PASTE = "paste"
    ADHESIVE = "adhesive"
    USER_DRAWINGS = "user_drawings"
    EDGE_CUTS = "edge_cuts"


class Side(Enum):
    """Board side a layer belongs to."""

    FRONT = "front"
    BACK = "back"

    def opposite(self) -> Side:
        return Side.BACK if self == Side.FRONT else Side.FRONT


class LayerType(Enum):
    """Standard PCB layers."""

    F_CU = (LayerKind.COPPER, Side.FRONT)
    B_CU = (LayerKind.COPPER, Side.BACK)
    F_SILKS = (LayerKind.SILKSCREEN, Side.FRONT)
    B_SILKS = (LayerKind.SILKSCREEN, Side.BACK)
    F_CRTYD = (LayerKind.COURTYARD, Side.FRONT)
    B_CRTYD = (LayerKind.COURTYARD, Side.BACK)
    F_FAB = (LayerKind.FABRICATION, Side.FRONT)
    B_FAB = (LayerKind.FABRICATION, Side.BACK)
    F_MASK = (LayerKind.MASK, Side.FRONT)
    B_MASK = (LayerKind.MASK, Side.BACK)
    F_PASTE = (LayerKind.PASTE, Side.FRONT)
    B_PASTE = (LayerKind.PASTE, Side.BACK)
    F_ADHES = (LayerKind.ADHESIVE, Side.FRONT)
    B_ADHES = (LayerKind.ADHESIVE, Side.BACK)
    DWGS_USER = (LayerKind.USER_DRAWINGS, None)
    EDGE_CUTS = (LayerKind.EDGE_CUTS, None)

    @property
    def kind(self) -> LayerKind:
        return self.value[0]

    @property
    def side(self) -> Side | None:
        """Board side, or None for side-less layers."""
        return self.value[1]

    @property
    def is_copper(self) -> bool:
        return self.kind == LayerKind.COPPER

    @property
    def is_courtyard(self) -> bool:
        return self.kind == LayerKind.COURTYARD

    def flipped(self) -> LayerType:
        """The same layer kind on the opposite side (side-less layers unchanged)."""
        if self.side is None:
            return self
        return LayerType.of(self.kind, self.side.opposite())

    @classmethod
    def of(cls, kind: LayerKind, side: Side | None = None) -> LayerType:
        """Look up the layer with the given kind and side."""
        for layer in cls:
            if layer.kind == kind and layer.side == side:
                return layer
        raise KeyError(f"No {kind.value} layer on side {side}")

    @classmethod
    def courtyard(cls, side: Side = Side.FRONT) -> LayerType:
        return cls.of(LayerKind.COURTYARD, side)


COPPER_LAYERS = frozenset({LayerType.F_CU, LayerType.B_CU})

# Layer kinds a pad may be assigned to
PAD_LAYER_KINDS = frozenset(
    {LayerKind.COPPER, LayerKind.MASK, LayerKind.PASTE, LayerKind.ADHESIVE}
)
