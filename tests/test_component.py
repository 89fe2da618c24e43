"""Tests for the BoardComposableObject interface and Component."""

import itertools

import pytest

from copper_substrate import (
    BoardComposableObject,
    Component,
    ConstructionError,
    CourtyardPolicy,
    Custom,
    FunctionalType,
    GraphicLine,
    GraphicRect,
    GraphicText,
    LayerType,
    Pad,
    PadKind,
    PadShape,
    Point,
    SurfaceMount,
    ThroughHole,
)
from copper_substrate.geometry import BoundingBox


class TestInterface:
    """Tests for derived capability methods."""

    def test_footprint_name(self, capacitor_0603):
        """Test the C_0603 naming example."""
        assert capacitor_0603.footprint_name() == "C_0603"
        assert capacitor_0603.reference_prefix() == "C"

    def test_footprint_name_is_stable(self, example_pads):
        """Test identical inputs give identical names."""
        a = Component(FunctionalType.capacitor("100nF"), SurfaceMount("0603", 1.27), example_pads)
        b = Component(FunctionalType.capacitor("100nF"), SurfaceMount("0603", 1.27), example_pads)
        assert a.footprint_name() == b.footprint_name()
        assert a == b
        assert hash(a) == hash(b)

    def test_name_override(self, example_pads):
        """Test an explicit footprint name."""
        comp = Component(
            FunctionalType.capacitor(), SurfaceMount("0603", 1.27), example_pads, name="C_0603_1608Metric"
        )
        assert comp.footprint_name() == "C_0603_1608Metric"

    def test_blank_name_override(self, example_pads):
        """Test blank name overrides are rejected."""
        with pytest.raises(ConstructionError):
            Component(FunctionalType.capacitor(), SurfaceMount("0603", 1.27), example_pads, name=" ")

    def test_classification(self, capacitor_0603):
        """Test SMT/electrical/passive flags and terminal count."""
        assert capacitor_0603.is_smt()
        assert capacitor_0603.is_electrical()
        assert capacitor_0603.is_passive()
        assert capacitor_0603.terminal_count() == 2
        assert capacitor_0603.library_name() == "Capacitor_SMD"

    def test_metadata(self, capacitor_0603):
        """Test description and tags pass through."""
        assert capacitor_0603.description() == "Test capacitor"
        assert capacitor_0603.tags() == ("capacitor", "0603")
        assert capacitor_0603.model_3d() is None

    def test_bounding_box_includes_graphics(self, capacitor_0603):
        """Test bounding box covers pads and graphics without clearance."""
        box = capacitor_0603.bounding_box()
        assert box == BoundingBox(-1.25, -0.5, 1.25, 0.25)

    def test_bounding_box_order_independent(self, capacitor_0603):
        """Test reordering pads or graphics never changes the bounding box."""
        pads = [
            *capacitor_0603.pads(),
            Pad("3", Point(0.3, 0.9), (0.4, 0.6), PadShape.RECT, rotation=30),
            Pad("4", Point(-0.7, -0.8), (0.5, 0.5), PadShape.CIRCLE),
        ]
        art = [
            *capacitor_0603.graphics(),
            GraphicRect(Point(-1.4, -1.1), Point(0.2, 0.4), LayerType.F_FAB, 0.1),
        ]
        base = capacitor_0603.with_graphics(art)
        expected = base.with_pads(pads).bounding_box()
        for order in itertools.permutations(pads):
            component = base.with_pads(order)
            assert component.bounding_box() == expected
            assert component.with_graphics(reversed(art)).bounding_box() == expected

    def test_courtyard_from_pads(self, capacitor_0603):
        """Test the courtyard comes from pads only."""
        bounds = capacitor_0603.courtyard().bounds
        assert bounds.min_x == pytest.approx(-1.5)
        assert bounds.max_y == pytest.approx(0.5)

    def test_courtyard_uses_policy(self, capacitor_0603):
        """Test a policy passed at access time."""
        bounds = capacitor_0603.courtyard(CourtyardPolicy(smt_margin=1.0)).bounds
        assert bounds.max_x == pytest.approx(2.25)


class TestEmptyGeometry:
    """Tests for components without pads or graphics."""

    def test_empty_courtyard(self, empty_component):
        """Test an empty component has an empty courtyard."""
        courtyard = empty_component.courtyard()
        assert courtyard.is_empty
        assert courtyard.bounds == BoundingBox.empty()

    def test_empty_bounding_box(self, empty_component):
        """Test the bounding box is the origin point."""
        assert empty_component.bounding_box() == BoundingBox.empty()

    def test_empty_classification(self, empty_component):
        """Test a padless component is not SMT and has no terminals."""
        assert not empty_component.is_smt()
        assert empty_component.terminal_count() == 0


class TestCourtyardStaysCurrent:
    """Tests that the courtyard follows pad changes."""

    def test_with_pads_recomputes(self, capacitor_0603):
        """Test replacing pads changes the courtyard."""
        wider = capacitor_0603.with_pads(
            [
                Pad("1", Point(-2, 0), (1.0, 0.5), PadShape.RECT),
                Pad("2", Point(2, 0), (1.0, 0.5), PadShape.RECT),
            ]
        )
        assert wider.courtyard().bounds.max_x == pytest.approx(2.75)
        assert capacitor_0603.courtyard().bounds.max_x == pytest.approx(1.5)

    def test_with_graphics(self, capacitor_0603):
        """Test replacing graphics leaves pads and courtyard alone."""
        plain = capacitor_0603.with_graphics([])
        assert plain.graphics() == ()
        assert plain.courtyard() == capacitor_0603.courtyard()

    def test_translated(self, capacitor_0603):
        """Test moving a component moves its courtyard."""
        moved = capacitor_0603.translated(10, 0)
        assert moved.courtyard().bounds.min_x == pytest.approx(8.5)
        assert moved.pads()[0].center == Point(9.25, 0)


class TestConstructionErrors:
    """Tests for component construction failures."""

    def test_courtyard_graphic_rejected(self, example_pads):
        """Test courtyards cannot be authored."""
        with pytest.raises(ConstructionError) as exc_info:
            Component(
                FunctionalType.capacitor(),
                SurfaceMount("0603", 1.27),
                example_pads,
                [GraphicRect(Point(-2, -1), Point(2, 1), LayerType.F_CRTYD, 0.05)],
            )
        assert exc_info.value.context["footprint"] == "C_0603"

    def test_courtyard_text_rejected(self, example_pads):
        """Test text on a courtyard layer is rejected."""
        with pytest.raises(ConstructionError):
            Component(
                FunctionalType.capacitor(),
                SurfaceMount("0603", 1.27),
                example_pads,
                texts=[GraphicText("x", Point(0, 0), LayerType.B_CRTYD)],
            )

    def test_non_finite_translation_rejected(self, capacitor_0603):
        """Test moving by a non-finite offset fails before any courtyard math."""
        with pytest.raises(ConstructionError):
            capacitor_0603.translated(float("inf"), 0.0)
        with pytest.raises(ConstructionError):
            capacitor_0603.translated(0.0, float("nan"))

    def test_non_pad_rejected(self):
        """Test pads must be Pad instances."""
        with pytest.raises(ConstructionError):
            Component(FunctionalType.resistor(), SurfaceMount("0805", 2.0), [object()])

    def test_invalid_functional_type(self, example_pads):
        """Test functional type is required."""
        with pytest.raises(ConstructionError):
            Component("capacitor", SurfaceMount("0603", 1.27), example_pads)

    def test_invalid_package(self, example_pads):
        """Test package type is required."""
        with pytest.raises(ConstructionError):
            Component(FunctionalType.capacitor(), "0603", example_pads)


class TestAggregation:
    """Tests for building components from other components."""

    def test_aggregate_merges_geometry(self, capacitor_0603):
        """Test child pads and graphics are translated and appended in order."""
        array = Component.aggregate(
            FunctionalType.capacitor("100nF"),
            SurfaceMount("0603x2", 1.27),
            [(capacitor_0603, Point(0, -1)), (capacitor_0603, Point(0, 1))],
        )
        assert len(array.pads()) == 4
        assert len(array.graphics()) == 2
        assert [p.center.y for p in array.pads()] == [-1, -1, 1, 1]
        assert array.footprint_name() == "C_0603x2"

    def test_aggregate_courtyard_covers_children(self, capacitor_0603):
        """Test the aggregate courtyard encloses every child courtyard."""
        offsets = [Point(0, -1), Point(0, 1)]
        array = Component.aggregate(
            FunctionalType.capacitor(),
            SurfaceMount("0603x2", 1.27),
            [(capacitor_0603, offset) for offset in offsets],
        )
        bounds = array.courtyard().bounds
        for offset in offsets:
            child = capacitor_0603.translated(offset.x, offset.y).courtyard().bounds
            assert bounds.contains(child, tolerance=1e-9)

    def test_aggregate_renumber(self, capacitor_0603):
        """Test renumbering merged pads 1..N."""
        array = Component.aggregate(
            FunctionalType.capacitor(),
            SurfaceMount("0603x2", 1.27),
            [capacitor_0603, (capacitor_0603, Point(0, 2))],
            renumber=True,
        )
        assert [p.number for p in array.pads()] == ["1", "2", "3", "4"]

    def test_aggregate_keeps_unnumbered_holes(self, capacitor_0603):
        """Test renumbering skips non-plated holes."""
        hole = Component(
            FunctionalType.mechanical(),
            Custom("Hole"),
            [Pad("", Point(0, 0), (1, 1), PadShape.CIRCLE, PadKind.NPTH, drill=1.0)],
        )
        combined = Component.aggregate(
            FunctionalType.other("Module"),
            Custom("Module"),
            [capacitor_0603, (hole, Point(3, 0))],
            renumber=True,
        )
        assert [p.number for p in combined.pads()] == ["1", "2", ""]

    def test_aggregate_detached_from_children(self, example_pads):
        """Test the aggregate does not change when a child is replaced later."""
        child = Component(FunctionalType.resistor(), SurfaceMount("0805", 2.0), example_pads)
        parent = Component.aggregate(FunctionalType.resistor(), SurfaceMount("0805", 2.0), [child])
        child = child.with_pads([])
        assert len(parent.pads()) == 2

    def test_from_object(self, wire_jumper):
        """Test snapshotting any board object into a Component."""
        snapshot = Component.from_object(wire_jumper)
        assert snapshot.footprint_name() == wire_jumper.footprint_name()
        assert snapshot.pads() == wire_jumper.pads()
        assert Component.from_object(snapshot) is snapshot


class TestExtensibility:
    """Tests with a variant defined only in the test suite."""

    def test_variant_is_board_object(self, wire_jumper):
        """Test the test-only variant satisfies the interface."""
        assert isinstance(wire_jumper, BoardComposableObject)
        assert wire_jumper.footprint_name() == "Jumper_Wire_5mm"
        assert wire_jumper.reference_prefix() == "J"

    def test_variant_courtyard(self, wire_jumper):
        """Test the courtyard engine handles the new variant."""
        bounds = wire_jumper.courtyard().bounds
        assert bounds.min_x == pytest.approx(-3.35)
        assert bounds.max_x == pytest.approx(3.35)
        assert bounds.max_y == pytest.approx(0.85)

    def test_incomplete_variant_cannot_instantiate(self):
        """Test the abstract methods are enforced."""

        class Incomplete(BoardComposableObject):
            def functional_type(self):
                return FunctionalType.resistor()

        with pytest.raises(TypeError):
            Incomplete()

    def test_through_hole_library_name(self):
        """Test the THT library suffix."""
        comp = Component(
            FunctionalType.connector(),
            ThroughHole("Pin", 1.0),
            [Pad("1", Point(0, 0), (1.7, 1.7), PadShape.CIRCLE, PadKind.THROUGH_HOLE, drill=1.0)],
        )
        assert comp.library_name() == "Connector_THT"
        assert not comp.is_smt()
