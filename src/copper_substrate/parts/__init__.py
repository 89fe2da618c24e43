"""
Ready-made component variants.

Each part is a :class:`~copper_substrate.component.BoardComposableObject`
subclass that computes its pads and artwork from package standards.

Usage:
    from copper_substrate.parts import ChipCapacitor, DualInline, MountingHole, PinHeader

    cap = ChipCapacitor("0603", "100nF")     # C_0603
    ic = DualInline(8, "NE555")              # U_DIP-8_W7.62mm
    header = PinHeader(6, rows=2)            # J_PinHeader_2x03_P2.54mm_Vertical
    hole = MountingHole.for_screw("M3")      # H_MountingHole_3.2mm
"""

from .chip import ChipCapacitor, ChipInductor, ChipPassive, ChipResistor
from .mechanical import MountingHole
from .standards import CHIP_SIZES, DIP_STANDARDS, MOUNTING_HOLE_SIZES
from .through_hole import DualInline, PinHeader

__all__ = [
    "ChipPassive",
    "ChipResistor",
    "ChipCapacitor",
    "ChipInductor",
    "DualInline",
    "PinHeader",
    "MountingHole",
    "CHIP_SIZES",
    "DIP_STANDARDS",
    "MOUNTING_HOLE_SIZES",
]
