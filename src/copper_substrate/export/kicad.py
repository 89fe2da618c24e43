"""
KiCad footprint (.kicad_mod) exporter.

Produces KiCad 8 footprint files (format version 20240108). The output is a
pure function of the component's public interface: pads and graphics are
written in interface order, and element UUIDs are derived from the footprint
name and element position, so the same component always yields the same
bytes.

Example::

    from copper_substrate.export import KiCadFootprintExporter

    exporter = KiCadFootprintExporter()
    text = exporter.export(component)
    Path(exporter.filename(component)).write_text(text)
"""

from __future__ import annotations

import re
import uuid

from ..component import BoardComposableObject
from ..config import ExportConfig
from ..courtyard import Courtyard, CourtyardPolicy
from ..layers import PAD_LAYER_KINDS, LayerType
from ..primitives import (
    GraphicArc,
    GraphicCircle,
    GraphicLine,
    GraphicPolygon,
    GraphicRect,
    GraphicText,
    Pad,
    PadKind,
)
from ..sexp import SExp
from ..sexp.builders import (
    at,
    effects,
    fill,
    layer_node,
    layers_node,
    point_node,
    property_node,
    pts,
    size,
    stroke,
    uuid_node,
    xy,
    xyz,
    yes_no,
)
from .base import FootprintExporter, register_exporter

__all__ = ["KiCadFootprintExporter", "KICAD_LAYER_NAMES", "FORMAT_VERSION"]

FORMAT_VERSION = 20240108

KICAD_LAYER_NAMES: dict[LayerType, str] = {
    LayerType.F_CU: "F.Cu",
    LayerType.B_CU: "B.Cu",
    LayerType.F_SILKS: "F.SilkS",
    LayerType.B_SILKS: "B.SilkS",
    LayerType.F_CRTYD: "F.CrtYd",
    LayerType.B_CRTYD: "B.CrtYd",
    LayerType.F_FAB: "F.Fab",
    LayerType.B_FAB: "B.Fab",
    LayerType.F_MASK: "F.Mask",
    LayerType.B_MASK: "B.Mask",
    LayerType.F_PASTE: "F.Paste",
    LayerType.B_PASTE: "B.Paste",
    LayerType.F_ADHES: "F.Adhes",
    LayerType.B_ADHES: "B.Adhes",
    LayerType.DWGS_USER: "Dwgs.User",
    LayerType.EDGE_CUTS: "Edge.Cuts",
}

# Front/back pairs collapsed into KiCad's wildcard layer names
_WILDCARD_PAIRS = (
    ((LayerType.F_CU, LayerType.B_CU), "*.Cu"),
    ((LayerType.F_MASK, LayerType.B_MASK), "*.Mask"),
    ((LayerType.F_PASTE, LayerType.B_PASTE), "*.Paste"),
)

_PAD_TYPES = {
    PadKind.SMD: "smd",
    PadKind.THROUGH_HOLE: "thru_hole",
    PadKind.NPTH: "np_thru_hole",
}

# Characters KiCad rejects in footprint names (LIB_ID and file name rules)
_ILLEGAL_NAME_CHARS = re.compile(r'[\\/:"<>|*?\s\x00-\x1f\x7f]')

_UUID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "copper-substrate/kicad-footprint")

_GRAPHIC_TYPES = (GraphicLine, GraphicRect, GraphicCircle, GraphicArc, GraphicPolygon, GraphicText)


@register_exporter
class KiCadFootprintExporter(FootprintExporter):
    """
    Exporter for KiCad ``.kicad_mod`` footprint files.

    Args:
        policy: Courtyard policy used to derive the courtyard outline
        config: Generator name and courtyard stroke settings
    """

    format_name = "kicad"
    file_extension = ".kicad_mod"

    def __init__(
        self,
        policy: CourtyardPolicy | None = None,
        config: ExportConfig | None = None,
    ):
        self.policy = policy
        self.config = config or ExportConfig()

    # Validation

    def validate(self, component: BoardComposableObject) -> list[str]:
        errors: list[str] = []

        name = component.footprint_name()
        if not isinstance(name, str) or not name:
            errors.append("Footprint name is empty")
        else:
            illegal = sorted(set(_ILLEGAL_NAME_CHARS.findall(name)))
            if illegal:
                shown = ", ".join(repr(c) for c in illegal)
                errors.append(f"Footprint name {name!r} contains illegal characters: {shown}")

        for index, pad in enumerate(component.pads()):
            label = pad.number or f"#{index + 1}"
            for layer in pad.layers:
                if layer not in KICAD_LAYER_NAMES:
                    errors.append(f"Pad {label} references undefined layer {layer!r}")
                elif layer.kind not in PAD_LAYER_KINDS:
                    errors.append(
                        f"Pad {label} is on {KICAD_LAYER_NAMES[layer]}, which cannot hold pads"
                    )

        for index, graphic in enumerate((*component.graphics(), *component.texts())):
            if not isinstance(graphic, _GRAPHIC_TYPES):
                errors.append(f"Graphic #{index + 1} has unsupported type {type(graphic).__name__}")
                continue
            if graphic.layer not in KICAD_LAYER_NAMES:
                errors.append(f"Graphic #{index + 1} references undefined layer {graphic.layer!r}")
            elif graphic.layer.is_courtyard:
                errors.append(
                    f"Graphic #{index + 1} is on {KICAD_LAYER_NAMES[graphic.layer]}; "
                    "courtyards are derived, not authored"
                )

        return errors

    # Rendering

    def render(self, component: BoardComposableObject) -> str:
        return self.build(component).to_string() + "\n"

    def build(self, component: BoardComposableObject) -> SExp:
        """Build the footprint S-expression tree (no validation)."""
        name = component.footprint_name()
        ids = _UuidSequence(name)
        courtyard = component.courtyard(self.policy)

        root = SExp.list(
            "footprint",
            name,
            SExp.list("version", FORMAT_VERSION),
            SExp.list("generator", self.config.generator),
            SExp.list("generator_version", self.config.generator_version),
            layer_node("F.Cu"),
        )

        description = component.description()
        if description:
            root.append(SExp.list("descr", description))
        tags = component.tags()
        if tags:
            root.append(SExp.list("tags", " ".join(tags)))

        ref_y, value_y = self._label_positions(component, courtyard)
        root.append(property_node("Reference", "REF**", 0, ref_y, "F.SilkS", ids.next("reference")))
        root.append(property_node("Value", name, 0, value_y, "F.Fab", ids.next("value")))

        attr = self._attr(component)
        if attr is not None:
            root.append(attr)

        for graphic in component.graphics():
            root.append(self._graphic(graphic, ids))
        for text in component.texts():
            root.append(self._graphic(text, ids))

        if not courtyard.is_empty:
            root.append(
                self._graphic(courtyard.to_graphic(self.config.courtyard_line_width), ids)
            )

        for pad in component.pads():
            root.append(self._pad(pad, ids))

        model = component.model_3d()
        if model is not None:
            root.append(
                SExp.list(
                    "model",
                    model.path,
                    SExp.list("offset", xyz(*model.offset)),
                    SExp.list("scale", xyz(*model.scale)),
                    SExp.list("rotate", xyz(*model.rotation)),
                )
            )

        return root

    @staticmethod
    def _label_positions(
        component: BoardComposableObject, courtyard: Courtyard
    ) -> tuple[float, float]:
        """Reference text above the footprint, value text below it."""
        extent = component.bounding_box()
        if not courtyard.is_empty:
            extent = extent.union(courtyard.bounds)
        return round(extent.min_y - 1.0, 2), round(extent.max_y + 1.0, 2)

    @staticmethod
    def _attr(component: BoardComposableObject) -> SExp | None:
        pads = component.pads()
        if not pads:
            return None

        kinds = {pad.kind for pad in pads}
        flags: list[str] = []
        if component.is_smt():
            flags.append("smd")
        elif PadKind.THROUGH_HOLE in kinds:
            flags.append("through_hole")
        if not component.is_electrical() or kinds == {PadKind.NPTH}:
            flags.extend(["exclude_from_pos_files", "exclude_from_bom"])
        return SExp.list("attr", *(SExp.sym(flag) for flag in flags))

    def _pad(self, pad: Pad, ids: _UuidSequence) -> SExp:
        node = SExp.list(
            "pad",
            pad.number,
            SExp.sym(_PAD_TYPES[pad.kind]),
            SExp.sym(pad.shape.value),
            at(pad.center.x, pad.center.y, pad.rotation),
            size(pad.width, pad.height),
        )
        if pad.drill is not None:
            node.append(SExp.list("drill", pad.drill))
        node.append(layers_node(_pad_layer_names(pad.layers)))
        if pad.shape.value == "roundrect":
            node.append(SExp.list("roundrect_rratio", pad.roundrect_ratio))
        node.append(uuid_node(ids.next("pad")))
        return node

    def _graphic(self, graphic, ids: _UuidSequence) -> SExp:
        layer = layer_node(KICAD_LAYER_NAMES[graphic.layer])

        if isinstance(graphic, GraphicLine):
            return SExp.list(
                "fp_line",
                point_node("start", graphic.start.x, graphic.start.y),
                point_node("end", graphic.end.x, graphic.end.y),
                stroke(graphic.width, graphic.stroke_type.value),
                layer,
                uuid_node(ids.next("fp_line")),
            )
        if isinstance(graphic, GraphicRect):
            return SExp.list(
                "fp_rect",
                point_node("start", graphic.start.x, graphic.start.y),
                point_node("end", graphic.end.x, graphic.end.y),
                stroke(graphic.width, graphic.stroke_type.value),
                fill(graphic.fill),
                layer,
                uuid_node(ids.next("fp_rect")),
            )
        if isinstance(graphic, GraphicCircle):
            # KiCad stores a circle as center + one point on the circumference
            return SExp.list(
                "fp_circle",
                point_node("center", graphic.center.x, graphic.center.y),
                point_node("end", graphic.center.x + graphic.radius, graphic.center.y),
                stroke(graphic.width, graphic.stroke_type.value),
                fill(graphic.fill),
                layer,
                uuid_node(ids.next("fp_circle")),
            )
        if isinstance(graphic, GraphicArc):
            return SExp.list(
                "fp_arc",
                point_node("start", graphic.start.x, graphic.start.y),
                point_node("mid", graphic.mid.x, graphic.mid.y),
                point_node("end", graphic.end.x, graphic.end.y),
                stroke(graphic.width, graphic.stroke_type.value),
                layer,
                uuid_node(ids.next("fp_arc")),
            )
        if isinstance(graphic, GraphicPolygon):
            return SExp.list(
                "fp_poly",
                pts(*(xy(p.x, p.y) for p in graphic.points)),
                stroke(graphic.width, graphic.stroke_type.value),
                fill(graphic.fill),
                layer,
                uuid_node(ids.next("fp_poly")),
            )

        node = SExp.list(
            "fp_text",
            SExp.sym("user"),
            graphic.text,
            at(graphic.position.x, graphic.position.y, graphic.rotation),
            layer,
        )
        if graphic.hide:
            node.append(yes_no("hide"))
        node.append(uuid_node(ids.next("fp_text")))
        node.append(effects(graphic.height, graphic.thickness))
        return node


def _pad_layer_names(layers: tuple[LayerType, ...]) -> list[str]:
    """KiCad layer names for a pad, collapsing front/back pairs to wildcards."""
    remaining = list(layers)
    names: list[str] = []
    for pair, wildcard in _WILDCARD_PAIRS:
        if all(layer in remaining for layer in pair):
            names.append(wildcard)
            remaining = [layer for layer in remaining if layer not in pair]
    names.extend(KICAD_LAYER_NAMES[layer] for layer in remaining)
    return names


class _UuidSequence:
    """Deterministic element UUIDs for one footprint."""

    def __init__(self, footprint_name: str):
        self.footprint_name = footprint_name
        self.index = 0

    def next(self, kind: str) -> str:
        self.index += 1
        key = f"{self.footprint_name}/{kind}/{self.index}"
        return str(uuid.uuid5(_UUID_NAMESPACE, key))
