"""Tests for the S-expression tree, serializer, parser and builders."""

import pytest

from copper_substrate import ParseError
from copper_substrate.sexp import SExp, format_number, parse_string
from copper_substrate.sexp.builders import (
    at,
    effects,
    fill,
    layer_node,
    layers_node,
    property_node,
    pts,
    size,
    stroke,
    uuid_node,
    xy,
    yes_no,
)


class TestFormatNumber:
    """Tests for number formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (0.0, "0"),
            (-0.0, "0"),
            (1.5, "1.5"),
            (2.0, "2"),
            (-1.25, "-1.25"),
            (0.1 + 0.2, "0.3"),
            (1.23456789, "1.234568"),
            (1e-9, "0"),
            (20240108, "20240108"),
        ],
    )
    def test_format(self, value, expected):
        """Test trailing zeros are stripped and precision is bounded."""
        assert format_number(value) == expected

    def test_bool_rejected(self):
        """Test booleans are not numbers here."""
        with pytest.raises(TypeError):
            format_number(True)


class TestSerializer:
    """Tests for SExp.to_string."""

    def test_inline_node(self):
        """Test non-block nodes stay on one line."""
        assert at(1.5, -2).to_string() == "(at 1.5 -2)"
        assert at(1, 2, 90).to_string() == "(at 1 2 90)"

    def test_strings_are_quoted(self):
        """Test string atoms are quoted and escaped."""
        node = SExp.list("descr", 'say "hi"\nbye')
        assert node.to_string() == '(descr "say \\"hi\\"\\nbye")'

    def test_symbols_are_bare(self):
        """Test symbol atoms are not quoted."""
        assert fill(True).to_string() == "(fill solid)"
        assert yes_no("hide").to_string() == "(hide yes)"

    def test_block_node_layout(self):
        """Test block nodes put children on indented lines."""
        text = stroke(0.12).to_string()
        assert text == "(stroke\n\t(width 0.12)\n\t(type solid)\n)"

    def test_block_node_keeps_leading_atoms(self):
        """Test atoms before the first child stay on the head line."""
        node = SExp.list("pad", "1", SExp.sym("smd"), SExp.sym("rect"), at(0, 0))
        assert node.to_string().splitlines()[0] == '(pad "1" smd rect'

    def test_nested_indent(self):
        """Test nested block nodes indent further."""
        text = effects(1.0, 0.15).to_string()
        lines = text.splitlines()
        assert lines[0] == "(effects"
        assert lines[1] == "\t(font"
        assert lines[2] == "\t\t(size 1 1)"

    def test_name_and_value_exclusive(self):
        """Test a node cannot be both a list and an atom."""
        with pytest.raises(ValueError):
            SExp(name="at", value=1)


class TestParser:
    """Tests for parse_string."""

    def test_parse_simple(self):
        """Test parsing numbers, strings and symbols."""
        node = parse_string('(pad "1" smd rect (at -0.75 0) (size 1 0.5))')
        assert node.name == "pad"
        assert node.get_atoms() == ["1", "smd", "rect"]
        assert node["at"].get_atoms() == [-0.75, 0]
        assert node["size"].get_atoms() == [1, 0.5]
        assert node.children[1].symbol

    def test_round_trip_builders(self):
        """Test builder output parses back to the same structure."""
        built = property_node("Reference", "REF**", 0, -1.5, "F.SilkS", "abc", hide=True)
        parsed = parse_string(built.to_string())
        assert parsed.to_string() == built.to_string()
        assert parsed["layer"].get_first_atom() == "F.SilkS"
        assert parsed["hide"].get_first_atom() == "yes"

    def test_escapes(self):
        """Test escaped quotes and newlines."""
        node = parse_string('(descr "a \\"b\\"\\nc")')
        assert node.get_first_atom() == 'a "b"\nc'

    def test_lookup_helpers(self):
        """Test find, find_all, children_named and get."""
        doc = parse_string('(footprint "X" (pad "1" (at 0 0)) (pad "2" (at 1 0)))')
        assert len(doc.children_named("pad")) == 2
        assert len(doc.find_all("at")) == 2
        assert doc.find("at").get_atoms() == [0, 0]
        assert doc.get("model") is None

    def test_missing_child_key_error(self):
        """Test missing children raise KeyError listing alternatives."""
        doc = parse_string("(footprint (version 1))")
        with pytest.raises(KeyError, match="version"):
            doc["layer"]

    @pytest.mark.parametrize(
        "text",
        ["(at 1 2", '(descr "open)', "(at 1 2))", ")", ""],
    )
    def test_malformed(self, text):
        """Test malformed input raises ParseError with a position."""
        with pytest.raises(ParseError) as exc_info:
            parse_string(text)
        assert "position" in exc_info.value.context


class TestBuilders:
    """Tests for node builders."""

    def test_xy_and_pts(self):
        """Test point lists."""
        node = pts(xy(0, 0), xy(1, 0), xy(1, 1))
        assert node.to_string() == "(pts\n\t(xy 0 0)\n\t(xy 1 0)\n\t(xy 1 1)\n)"

    def test_layers_node(self):
        """Test quoted layer lists."""
        assert layers_node(["*.Cu", "*.Mask"]).to_string() == '(layers "*.Cu" "*.Mask")'
        assert layer_node("F.Fab").to_string() == '(layer "F.Fab")'

    def test_uuid_and_size(self):
        """Test simple nodes."""
        assert uuid_node("u-1").to_string() == '(uuid "u-1")'
        assert size(1.0, 0.5).to_string() == "(size 1 0.5)"

    def test_property_node(self):
        """Test property layout and optional hide flag."""
        prop = property_node("Value", "C_0603", 0, 1.5, "F.Fab", "u-2")
        names = [c.name for c in prop.children if c.name]
        assert names == ["at", "layer", "uuid", "effects"]
        assert prop["at"].get_atoms() == [0, 1.5, 0]
