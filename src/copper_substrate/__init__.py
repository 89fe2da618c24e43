"""
copper-substrate: PCB components as composable objects with derived footprints.

Components expose a common capability interface
(:class:`BoardComposableObject`); courtyards are derived from their pads, and
exporters turn any component into a KiCad footprint file.

Modules:
    component: Capability interface, Component, aggregation
    courtyard: Courtyard policy and derivation
    primitives: Pads, graphic elements, 3D model references
    parts: Chip passives, DIP packages, pin headers, mounting holes
    export: Exporter contract and the KiCad .kicad_mod target
    config: Project/user TOML configuration

Quick Start::

    from copper_substrate import ChipCapacitor, KiCadFootprintExporter

    cap = ChipCapacitor("0603", "100nF")
    cap.footprint_name()          # "C_0603"
    cap.courtyard().bounds        # keep-out box, grid aligned

    exporter = KiCadFootprintExporter()
    text = exporter.export(cap)
"""

__version__ = "0.1.0"

from copper_substrate.component import BoardComposableObject, Component, derive_footprint_name
from copper_substrate.config import Config, ExportConfig
from copper_substrate.courtyard import Courtyard, CourtyardPolicy, derive_courtyard
from copper_substrate.exceptions import (
    ConfigurationError,
    ConstructionError,
    CopperSubstrateError,
    ExportValidationError,
    ParseError,
)
from copper_substrate.export import (
    FootprintExporter,
    KiCadFootprintExporter,
    available_formats,
    get_exporter,
    register_exporter,
)
from copper_substrate.functional_types import FunctionalKind, FunctionalType
from copper_substrate.geometry import BoundingBox, Point
from copper_substrate.layers import LayerKind, LayerType, Side
from copper_substrate.package_types import Custom, PackageClass, SurfaceMount, ThroughHole
from copper_substrate.parts import (
    ChipCapacitor,
    ChipInductor,
    ChipPassive,
    ChipResistor,
    DualInline,
    MountingHole,
    PinHeader,
)
from copper_substrate.primitives import (
    GraphicArc,
    GraphicCircle,
    GraphicLine,
    GraphicPolygon,
    GraphicRect,
    GraphicText,
    Model3D,
    Pad,
    PadKind,
    PadShape,
    StrokeType,
)

__all__ = [
    "__version__",
    # Capability interface
    "BoardComposableObject",
    "Component",
    "derive_footprint_name",
    # Taxonomy
    "FunctionalKind",
    "FunctionalType",
    "PackageClass",
    "SurfaceMount",
    "ThroughHole",
    "Custom",
    "LayerKind",
    "LayerType",
    "Side",
    # Geometry and primitives
    "Point",
    "BoundingBox",
    "Pad",
    "PadKind",
    "PadShape",
    "StrokeType",
    "GraphicLine",
    "GraphicRect",
    "GraphicCircle",
    "GraphicArc",
    "GraphicPolygon",
    "GraphicText",
    "Model3D",
    # Courtyard
    "Courtyard",
    "CourtyardPolicy",
    "derive_courtyard",
    # Parts
    "ChipPassive",
    "ChipResistor",
    "ChipCapacitor",
    "ChipInductor",
    "DualInline",
    "PinHeader",
    "MountingHole",
    # Export
    "FootprintExporter",
    "KiCadFootprintExporter",
    "register_exporter",
    "get_exporter",
    "available_formats",
    # Configuration
    "Config",
    "ExportConfig",
    # Errors
    "CopperSubstrateError",
    "ConstructionError",
    "ConfigurationError",
    "ExportValidationError",
    "ParseError",
]
