"""
KiCad footprint S-expression builders.

Small functions that each produce one well-formed node of the KiCad footprint
grammar. Exporters compose these instead of formatting text by hand.

Usage:
    from copper_substrate.sexp.builders import layer_node, point_node, stroke

    line = SExp.list("fp_line", point_node("start", 0, 0),
                     point_node("end", 1, 0), stroke(0.12),
                     layer_node("F.SilkS"))
"""

from __future__ import annotations

from .parser import SExp


def xy(x: float, y: float) -> SExp:
    """Build an (xy X Y) coordinate node."""
    return SExp.list("xy", x, y)


def xyz(x: float, y: float, z: float) -> SExp:
    """Build an (xyz X Y Z) node."""
    return SExp.list("xyz", x, y, z)


def at(x: float, y: float, rotation: float | None = 0) -> SExp:
    """Build an (at X Y [ROTATION]) position node.

    Omits rotation when it is 0 or None; properties pass it explicitly.
    """
    if not rotation:
        return SExp.list("at", x, y)
    return SExp.list("at", x, y, rotation)


def point_node(name: str, x: float, y: float) -> SExp:
    """Build a named point node such as (start X Y) or (center X Y)."""
    return SExp.list(name, x, y)


def size(width: float, height: float) -> SExp:
    """Build a (size W H) node."""
    return SExp.list("size", width, height)


def stroke(width: float = 0.12, stroke_type: str = "solid") -> SExp:
    """Build a (stroke (width W) (type T)) node."""
    return SExp.list("stroke", SExp.list("width", width), SExp.list("type", SExp.sym(stroke_type)))


def fill(filled: bool) -> SExp:
    """Build a (fill solid|none) node."""
    return SExp.list("fill", SExp.sym("solid" if filled else "none"))


def font(height: float = 1.0, thickness: float = 0.15) -> SExp:
    """Build a (font (size H H) (thickness T)) node."""
    return SExp.list("font", size(height, height), SExp.list("thickness", thickness))


def effects(height: float = 1.0, thickness: float = 0.15) -> SExp:
    """Build an (effects (font ...)) node."""
    return SExp.list("effects", font(height, thickness))


def layer_node(name: str) -> SExp:
    """Build a (layer "NAME") node."""
    return SExp.list("layer", name)


def layers_node(names: list[str]) -> SExp:
    """Build a (layers "A" "B" ...) node."""
    return SExp.list("layers", *names)


def uuid_node(uuid_str: str) -> SExp:
    """Build a (uuid "UUID") node."""
    return SExp.list("uuid", uuid_str)


def yes_no(name: str, flag: bool = True) -> SExp:
    """Build a (name yes|no) flag node."""
    return SExp.list(name, SExp.sym("yes" if flag else "no"))


def pts(*points: SExp) -> SExp:
    """Build a (pts (xy ...) (xy ...) ...) node from xy nodes."""
    return SExp.list("pts", *points)


def property_node(
    name: str,
    value: str,
    x: float,
    y: float,
    layer: str,
    uuid_str: str,
    hide: bool = False,
    height: float = 1.0,
    thickness: float = 0.15,
) -> SExp:
    """Build a footprint property block.

    Args:
        name: Property name (e.g., "Reference", "Value")
        value: Property value
        x, y: Position
        layer: KiCad layer name
        uuid_str: Element UUID
        hide: Whether to hide the property
    """
    prop = SExp.list("property", name, value, SExp.list("at", x, y, 0), layer_node(layer))
    if hide:
        prop.append(yes_no("hide"))
    prop.append(uuid_node(uuid_str))
    prop.append(effects(height, thickness))
    return prop
