"""
Tests for courtyard derivation.

Tests cover:
- The two-pad 0603 reference scenario
- Margin selection by package class
- Monotonicity, order independence and outward rounding
- Policy validation at load time
"""

import itertools
import logging

import pytest

from copper_substrate import ConfigurationError
from copper_substrate.courtyard import (
    DEFAULT_POLICY,
    Courtyard,
    CourtyardPolicy,
    derive_courtyard,
    pad_union,
)
from copper_substrate.geometry import BoundingBox, Point
from copper_substrate.layers import LayerType, Side
from copper_substrate.package_types import Custom, SurfaceMount, ThroughHole
from copper_substrate.primitives import GraphicRect, Pad, PadKind, PadShape

SMT = SurfaceMount("0603", 1.27)


def _approx_box(box, expected, tol=1e-9):
    assert box.min_x == pytest.approx(expected[0], abs=tol)
    assert box.min_y == pytest.approx(expected[1], abs=tol)
    assert box.max_x == pytest.approx(expected[2], abs=tol)
    assert box.max_y == pytest.approx(expected[3], abs=tol)


class TestReferenceScenario:
    """The two rectangular pads of an 0603 part."""

    def test_raw_union(self, example_pads):
        """Test the union of pad extents."""
        assert pad_union(example_pads) == BoundingBox(-1.25, -0.25, 1.25, 0.25)

    def test_inflated_and_rounded(self, example_pads):
        """Test inflation by 0.25mm stays grid aligned after rounding."""
        courtyard = derive_courtyard(example_pads, SMT)
        _approx_box(courtyard.bounds, (-1.5, -0.5, 1.5, 0.5))
        assert courtyard.margin == 0.25
        assert courtyard.layer == LayerType.F_CRTYD
        assert not courtyard.is_empty

    def test_outline_is_closed(self, example_pads):
        """Test outline returns the corners with the first repeated."""
        outline = derive_courtyard(example_pads, SMT).outline()
        assert len(outline) == 5
        assert outline[0] == outline[-1]

    def test_derivation_logged(self, example_pads, caplog):
        """Test the derived size is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="copper_substrate.courtyard"):
            derive_courtyard(example_pads, SMT)
        assert "margin 0.250 mm" in caplog.text
        assert "3.000 mm x 1.000 mm" in caplog.text

    def test_to_graphic(self, example_pads):
        """Test the courtyard as a rectangle on the courtyard layer."""
        graphic = derive_courtyard(example_pads, SMT).to_graphic(0.05)
        assert isinstance(graphic, GraphicRect)
        assert graphic.layer == LayerType.F_CRTYD
        assert graphic.width == 0.05
        _approx_box(graphic.extent(), (-1.5, -0.5, 1.5, 0.5))


class TestMarginSelection:
    """Tests for margin selection by package class."""

    def test_margin_for_each_class(self):
        """Test default margins per package class."""
        assert DEFAULT_POLICY.margin_for(SMT) == 0.25
        assert DEFAULT_POLICY.margin_for(ThroughHole("DIP-8", 0.8)) == 0.5
        assert DEFAULT_POLICY.margin_for(Custom("Odd")) == 0.25

    def test_custom_policy_margin(self, example_pads):
        """Test a policy margin changes the courtyard."""
        policy = CourtyardPolicy(smt_margin=0.5)
        courtyard = derive_courtyard(example_pads, SMT, policy)
        _approx_box(courtyard.bounds, (-1.75, -0.75, 1.75, 0.75))

    def test_through_hole_margin(self):
        """Test through-hole packages get the larger clearance."""
        pad = Pad("1", Point(0, 0), (1.6, 1.6), PadShape.CIRCLE, PadKind.THROUGH_HOLE, drill=0.8)
        courtyard = derive_courtyard([pad], ThroughHole("TP", 0.8))
        _approx_box(courtyard.bounds, (-1.3, -1.3, 1.3, 1.3))


class TestCourtyardProperties:
    """Property-style tests."""

    def test_empty_pads(self):
        """Test no pads gives an empty courtyard at the origin."""
        courtyard = derive_courtyard([], SMT)
        assert courtyard.is_empty
        assert courtyard.bounds == BoundingBox.empty()
        assert courtyard.outline() == ()

    def test_contains_every_pad_with_margin(self, example_pads):
        """Test the courtyard encloses each pad inflated by the margin."""
        courtyard = derive_courtyard(example_pads, SMT)
        for pad in example_pads:
            assert courtyard.bounds.contains(pad.extent().inflate(0.25), tolerance=1e-9)

    def test_order_independence(self):
        """Test every permutation of the pads yields the same courtyard."""
        pads = [
            Pad("1", Point(-1.1, 0.3), (0.6, 0.4), PadShape.RECT),
            Pad("2", Point(0.9, -0.2), (0.6, 0.4), PadShape.RECT, rotation=30),
            Pad("3", Point(0.1, 1.7), (0.5, 0.5), PadShape.CIRCLE),
            Pad("4", Point(0.0, -1.3), (1.1, 0.3), PadShape.OVAL, rotation=90),
        ]
        results = {derive_courtyard(p, SMT).bounds for p in itertools.permutations(pads)}
        assert len(results) == 1

    def test_monotonicity(self, example_pads):
        """Test adding a pad never shrinks the courtyard."""
        before = derive_courtyard(example_pads, SMT).bounds
        extra = Pad("3", Point(0.0, 1.2), (0.4, 0.4), PadShape.RECT)
        after = derive_courtyard((*example_pads, extra), SMT).bounds
        assert after.contains(before)
        assert after.max_y > before.max_y

    def test_adding_inner_pad_keeps_courtyard(self, example_pads):
        """Test a pad already inside the union changes nothing."""
        before = derive_courtyard(example_pads, SMT).bounds
        inner = Pad("3", Point(0.0, 0.0), (0.2, 0.2), PadShape.RECT)
        assert derive_courtyard((*example_pads, inner), SMT).bounds == before

    @pytest.mark.parametrize("grid", [0.01, 0.05, 0.1, 0.25])
    def test_rounding_only_grows(self, grid):
        """Test the rounded box contains the inflated box and sits on the grid."""
        pads = [Pad("1", Point(0.123, -0.377), (0.61, 0.33), PadShape.RECT, rotation=17)]
        policy = CourtyardPolicy(grid_resolution=grid)
        inflated = pad_union(pads).inflate(policy.smt_margin)
        bounds = derive_courtyard(pads, SMT, policy).bounds

        assert bounds.min_x <= inflated.min_x
        assert bounds.min_y <= inflated.min_y
        assert bounds.max_x >= inflated.max_x
        assert bounds.max_y >= inflated.max_y
        for edge in (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y):
            steps = edge / grid
            assert steps == pytest.approx(round(steps), abs=1e-6)
        # Rounding moves each edge by less than one grid step
        assert inflated.min_x - bounds.min_x < grid
        assert bounds.max_x - inflated.max_x < grid

    def test_edge_just_past_grid_line_rounds_out(self):
        """Test an edge a hair beyond a grid line moves to the next line."""
        pads = [Pad("1", Point(0.0, 0.0), (2.50000000001, 1.0), PadShape.RECT)]
        inflated = pad_union(pads).inflate(0.25)
        bounds = derive_courtyard(pads, SMT).bounds

        assert inflated.max_x > 1.5
        assert bounds.max_x == 1.51
        assert bounds.min_x == -1.51
        assert bounds.max_x >= inflated.max_x
        assert bounds.min_x <= inflated.min_x
        # Height is exact and stays on its grid line
        assert bounds.max_y == 0.75

    def test_back_side_courtyard(self):
        """Test all-back SMD pads put the courtyard on B.CrtYd."""
        pads = [Pad("1", Point(0, 0), (1, 1), side=Side.BACK)]
        assert derive_courtyard(pads, SMT).layer == LayerType.B_CRTYD

    def test_mixed_sides_use_front(self):
        """Test mixed front/back pads stay on the front courtyard."""
        pads = [
            Pad("1", Point(0, 0), (1, 1), side=Side.BACK),
            Pad("2", Point(2, 0), (1, 1)),
        ]
        assert derive_courtyard(pads, SMT).layer == LayerType.F_CRTYD

    def test_empty_courtyard_factory(self):
        """Test the empty courtyard value."""
        empty = Courtyard.empty(0.25)
        assert empty.is_empty
        assert empty.margin == 0.25


class TestCourtyardPolicy:
    """Tests for policy validation."""

    def test_defaults(self, default_policy):
        """Test KiCad Library Convention defaults."""
        assert default_policy.smt_margin == 0.25
        assert default_policy.tht_margin == 0.5
        assert default_policy.default_margin == 0.25
        assert default_policy.grid_resolution == 0.01

    def test_unit_strings(self):
        """Test lengths with units."""
        policy = CourtyardPolicy.from_mapping({"smt_margin": "10mil", "tht_margin": "0.6mm"})
        assert policy.smt_margin == pytest.approx(0.254)
        assert policy.tht_margin == pytest.approx(0.6)

    @pytest.mark.parametrize(
        "data",
        [
            {"smt_margin": 0},
            {"tht_margin": -0.5},
            {"grid_resolution": 0},
            {"default_margin": "wide"},
            {"smt_margin": float("nan")},
            {"smt_margin": True},
        ],
    )
    def test_invalid_values(self, data):
        """Test non-positive or unparsable values fail at load time."""
        with pytest.raises(ConfigurationError) as exc_info:
            CourtyardPolicy.from_mapping(data)
        assert "problems" in exc_info.value.context

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigurationError):
            CourtyardPolicy.from_mapping({"smd_margin": 0.25})

    def test_policy_is_frozen(self, default_policy):
        """Test policies are immutable."""
        with pytest.raises(Exception):
            default_policy.smt_margin = 1.0
