"""Pytest fixtures for copper-substrate tests."""

import pytest

from copper_substrate import (
    BoardComposableObject,
    Component,
    Custom,
    CourtyardPolicy,
    FunctionalType,
    GraphicLine,
    KiCadFootprintExporter,
    LayerType,
    Pad,
    PadShape,
    Point,
    SurfaceMount,
)


class WireJumper(BoardComposableObject):
    """
    Test-only component variant.

    Implements just the four required methods, so any test using it shows
    that the courtyard engine and exporters work for variants they have never
    seen.
    """

    def __init__(self, span: float = 5.0):
        self.span = span

    def functional_type(self):
        return FunctionalType.other("Jumper", "0R")

    def package(self):
        return Custom(f"Wire_{self.span:g}mm")

    def pads(self):
        half = self.span / 2
        return (
            Pad("1", Point(-half, 0), (1.2, 1.2), PadShape.CIRCLE),
            Pad("2", Point(half, 0), (1.2, 1.2), PadShape.CIRCLE),
        )

    def graphics(self):
        half = self.span / 2
        return (GraphicLine(Point(-half, 0), Point(half, 0), LayerType.F_SILKS, 0.15),)


@pytest.fixture
def example_pads():
    """Two 1.0x0.5mm rectangular pads at x = -0.75 and 0.75."""
    return (
        Pad("1", Point(-0.75, 0), (1.0, 0.5), PadShape.RECT),
        Pad("2", Point(0.75, 0), (1.0, 0.5), PadShape.RECT),
    )


@pytest.fixture
def capacitor_0603(example_pads):
    """100nF capacitor in an 0603 package built from explicit pads."""
    return Component(
        FunctionalType.capacitor("100nF"),
        SurfaceMount("0603", 1.27),
        pads=example_pads,
        graphics=[GraphicLine(Point(-0.3, -0.5), Point(0.3, -0.5))],
        description="Test capacitor",
        tags=["capacitor", "0603"],
    )


@pytest.fixture
def empty_component():
    """Component with no pads and no graphics."""
    return Component(FunctionalType.mechanical(), Custom("Empty"))


@pytest.fixture
def wire_jumper():
    return WireJumper()


@pytest.fixture
def default_policy():
    return CourtyardPolicy()


@pytest.fixture
def exporter():
    return KiCadFootprintExporter()
