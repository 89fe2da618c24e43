#!/usr/bin/env python3
"""
Example: Footprint Library Export

Builds a small footprint library (chip passives, a DIP, pin headers, mounting
holes and one hand-made component) and writes it as a KiCad ``.pretty``
directory using the copper-substrate Python API.

Usage:
    python export_library.py [output_dir] [mm|mils|in]

If no directory is specified, writes to ./Example.pretty. Courtyard sizes are
reported in millimetres unless another unit is given. Settings are read
from .copper-substrate.toml / ~/.config/copper-substrate/config.toml when
present.
"""

import logging
import sys
from pathlib import Path

from copper_substrate import (
    ChipCapacitor,
    ChipResistor,
    Component,
    Config,
    CopperSubstrateError,
    DualInline,
    FunctionalType,
    MountingHole,
    Pad,
    PadShape,
    PinHeader,
    Point,
    SurfaceMount,
    get_exporter,
)
from copper_substrate.units import UnitSystem, format_length


def build_library() -> list:
    """All components to export, in library order."""
    parts = [ChipResistor(size) for size in ("0402", "0603", "0805")]
    parts += [ChipCapacitor(size) for size in ("0402", "0603", "0805")]
    parts += [DualInline(8), DualInline(16)]
    parts += [PinHeader(4), PinHeader(10, rows=2)]
    parts += [MountingHole.for_screw("M3"), MountingHole.for_screw("M3", plated=True)]

    # A component built directly from pads
    parts.append(
        Component(
            FunctionalType.capacitor(),
            SurfaceMount("0603_HandSolder", 1.7),
            pads=[
                Pad("1", Point(-0.85, 0), (1.1, 0.95), PadShape.ROUNDRECT),
                Pad("2", Point(0.85, 0), (1.1, 0.95), PadShape.ROUNDRECT),
            ],
            description="Capacitor SMD 0603, hand soldering pads",
            tags=["capacitor", "handsolder"],
        )
    )

    # Two capacitors side by side as one footprint
    cap = ChipCapacitor("0402")
    parts.append(
        Component.aggregate(
            FunctionalType.capacitor(),
            SurfaceMount("0402x2", 1.0),
            [(cap, Point(0, -0.6)), (cap, Point(0, 0.6))],
            renumber=True,
            description="Two 0402 capacitors",
        )
    )
    return parts


def export_library(output_dir: Path, units: UnitSystem = UnitSystem.MM) -> int:
    """Export every component; returns the number of failures."""
    config = Config.load()
    exporter = get_exporter("kicad", policy=config.courtyard, config=config.export)
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"Exporting footprints to: {output_dir}")
    print(f"Courtyard margins (SMT/THT/other): "
          f"{config.courtyard.smt_margin} / {config.courtyard.tht_margin} / "
          f"{config.courtyard.default_margin} mm")
    print("=" * 70)
    print(f"{'Footprint':<40} {'Pads':>5} {'Courtyard':>24}")
    print("-" * 70)

    failures = 0
    for part in build_library():
        try:
            text = exporter.export(part)
        except CopperSubstrateError as e:
            failures += 1
            print(f"{part.footprint_name():<40} FAILED")
            print(e)
            continue

        (output_dir / exporter.filename(part)).write_text(text)
        bounds = part.courtyard(config.courtyard).bounds
        size = f"{format_length(bounds.width, units, 2)} x {format_length(bounds.height, units, 2)}"
        print(f"{part.footprint_name():<40} {len(part.pads()):>5} {size:>24}")

    print("-" * 70)
    print(f"Failures: {failures}")
    return failures


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("Example.pretty")
    units = UnitSystem.from_string(sys.argv[2]) if len(sys.argv) > 2 else UnitSystem.MM
    if units is None:
        print(f"Unknown unit: {sys.argv[2]}")
        return 2
    return 1 if export_library(output_dir, units) else 0


if __name__ == "__main__":
    sys.exit(main())
