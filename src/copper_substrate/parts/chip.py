"""
Chip passives: two-terminal SMD resistors, capacitors and inductors.

Pads follow the IPC-7351 nominal land patterns in :data:`CHIP_SIZES`.
"""

from __future__ import annotations

from ..component import BoardComposableObject
from ..exceptions import ConstructionError
from ..functional_types import FunctionalType
from ..geometry import Point
from ..layers import LayerType
from ..package_types import SurfaceMount
from ..primitives import GraphicLine, GraphicRect, GraphicText, Model3D, Pad, PadShape
from .standards import CHIP_SIZES

__all__ = ["ChipPassive", "ChipResistor", "ChipCapacitor", "ChipInductor"]


class ChipPassive(BoardComposableObject):
    """
    Two-terminal SMD chip component.

    Args:
        functional_type: Resistor, capacitor or inductor
        size: Imperial size code ("0402", "0603", ...)

    Raises:
        ConstructionError: If the size is unknown or the functional type is
            not a passive

    Example:
        >>> cap = ChipPassive(FunctionalType.capacitor("100nF"), "0603")
        >>> cap.footprint_name()
        'C_0603'
    """

    def __init__(self, functional_type: FunctionalType, size: str):
        if size not in CHIP_SIZES:
            valid_sizes = ", ".join(sorted(CHIP_SIZES))
            raise ConstructionError(
                f"Unknown chip size: {size}",
                context={"size": size},
                suggestions=[f"Valid sizes: {valid_sizes}"],
            )
        if not functional_type.is_passive:
            raise ConstructionError(
                "Chip packages hold resistors, capacitors or inductors",
                context={"functional_type": functional_type.label},
            )

        self.size = size
        self._functional = functional_type
        std = CHIP_SIZES[size]
        self._std = std

        # Center-to-center distance of the two pads
        pitch = round(std["pad_gap"] + std["pad_width"], 6)
        self._package = SurfaceMount(size, pitch)

        pad_size = (std["pad_width"], std["pad_height"])
        # Pad 1 on left (negative terminal for polarized parts)
        self._pads = (
            Pad("1", Point(-pitch / 2, 0.0), pad_size, PadShape.ROUNDRECT),
            Pad("2", Point(pitch / 2, 0.0), pad_size, PadShape.ROUNDRECT),
        )
        self._graphics = self._artwork()

    def _artwork(self) -> tuple:
        length = self._std["length"]
        width = self._std["width"]

        # Fab layer - component body outline
        graphics = [
            GraphicRect(
                Point(-length / 2, -width / 2),
                Point(length / 2, width / 2),
                LayerType.F_FAB,
                0.1,
            )
        ]

        # Silkscreen along the body edges, kept inside the gap between the pads
        silk_x = round(self._std["pad_gap"] / 2 - 0.16, 6)
        if silk_x > 0.1:
            silk_y = width / 2 + 0.12
            graphics.append(GraphicLine(Point(-silk_x, -silk_y), Point(silk_x, -silk_y)))
            graphics.append(GraphicLine(Point(-silk_x, silk_y), Point(silk_x, silk_y)))
        return tuple(graphics)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._functional.value!r}, {self.size!r})"

    @property
    def metric_size(self) -> str:
        return self._std["metric"]

    def functional_type(self) -> FunctionalType:
        return self._functional

    def package(self) -> SurfaceMount:
        return self._package

    def pads(self) -> tuple[Pad, ...]:
        return self._pads

    def graphics(self) -> tuple:
        return self._graphics

    def description(self) -> str:
        std = self._std
        label = self._functional.label
        return f"{label} SMD {self.size} ({std['length']}x{std['width']}mm)"

    def tags(self) -> tuple[str, ...]:
        return (self.size, self.metric_size, "SMD", self._functional.label.lower())

    def texts(self) -> tuple[GraphicText, ...]:
        height = min(1.0, round(self._std["width"] / 2, 2))
        return (
            GraphicText(
                "${REFERENCE}",
                Point(0.0, 0.0),
                LayerType.F_FAB,
                height=height,
                thickness=round(height * 0.15, 3),
            ),
        )

    def model_3d(self) -> Model3D:
        prefix = self._functional.footprint_prefix
        return Model3D(
            f"${{KICAD8_3DMODEL_DIR}}/{self.library_name()}.3dshapes/"
            f"{prefix}_{self.size}_{self.metric_size}Metric.wrl"
        )


class ChipResistor(ChipPassive):
    """Chip resistor, e.g. ``ChipResistor("0805", "10k")``."""

    def __init__(self, size: str, value: str | None = None):
        super().__init__(FunctionalType.resistor(value), size)


class ChipCapacitor(ChipPassive):
    """Chip capacitor, e.g. ``ChipCapacitor("0603", "100nF")``."""

    def __init__(self, size: str, value: str | None = None):
        super().__init__(FunctionalType.capacitor(value), size)


class ChipInductor(ChipPassive):
    """Chip inductor."""

    def __init__(self, size: str, value: str | None = None):
        super().__init__(FunctionalType.inductor(value), size)
