"""
Footprint export.

Usage:
    from copper_substrate.export import get_exporter

    exporter = get_exporter("kicad")
    text = exporter.export(component)
"""

from .base import FootprintExporter, available_formats, get_exporter, register_exporter
from .kicad import FORMAT_VERSION, KICAD_LAYER_NAMES, KiCadFootprintExporter

__all__ = [
    "FootprintExporter",
    "register_exporter",
    "get_exporter",
    "available_formats",
    "KiCadFootprintExporter",
    "KICAD_LAYER_NAMES",
    "FORMAT_VERSION",
]
