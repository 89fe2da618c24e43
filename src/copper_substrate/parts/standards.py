"""
Package dimension tables.

Land patterns for common chip sizes (IPC-7351 nominal density) and DIP
defaults, all in millimetres.
"""

# Chip (two-terminal passive) sizes keyed by imperial code.
# pad_gap is the copper-to-copper gap between the two pads.
CHIP_SIZES = {
    "0201": {
        "length": 0.6,
        "width": 0.3,
        "pad_width": 0.4,
        "pad_height": 0.35,
        "pad_gap": 0.3,
        "metric": "0603",
    },
    "0402": {
        "length": 1.0,
        "width": 0.5,
        "pad_width": 0.6,
        "pad_height": 0.55,
        "pad_gap": 0.5,
        "metric": "1005",
    },
    "0603": {
        "length": 1.6,
        "width": 0.8,
        "pad_width": 0.9,
        "pad_height": 0.95,
        "pad_gap": 0.8,
        "metric": "1608",
    },
    "0805": {
        "length": 2.0,
        "width": 1.25,
        "pad_width": 1.0,
        "pad_height": 1.35,
        "pad_gap": 1.0,
        "metric": "2012",
    },
    "1206": {
        "length": 3.2,
        "width": 1.6,
        "pad_width": 1.15,
        "pad_height": 1.8,
        "pad_gap": 1.8,
        "metric": "3216",
    },
    "1210": {
        "length": 3.2,
        "width": 2.5,
        "pad_width": 1.15,
        "pad_height": 2.7,
        "pad_gap": 1.8,
        "metric": "3225",
    },
}

# DIP defaults by pin count
DIP_STANDARDS = {
    # Narrow DIP (0.3" = 7.62mm row spacing)
    8: {"pitch": 2.54, "row_spacing": 7.62, "pad_diameter": 1.6, "drill": 0.8},
    14: {"pitch": 2.54, "row_spacing": 7.62, "pad_diameter": 1.6, "drill": 0.8},
    16: {"pitch": 2.54, "row_spacing": 7.62, "pad_diameter": 1.6, "drill": 0.8},
    18: {"pitch": 2.54, "row_spacing": 7.62, "pad_diameter": 1.6, "drill": 0.8},
    20: {"pitch": 2.54, "row_spacing": 7.62, "pad_diameter": 1.6, "drill": 0.8},
    # Wide DIP (0.6" = 15.24mm row spacing)
    24: {"pitch": 2.54, "row_spacing": 15.24, "pad_diameter": 1.6, "drill": 0.8},
    28: {"pitch": 2.54, "row_spacing": 15.24, "pad_diameter": 1.6, "drill": 0.8},
    40: {"pitch": 2.54, "row_spacing": 15.24, "pad_diameter": 1.6, "drill": 0.8},
}

# Pin header defaults
PIN_HEADER_PITCH = 2.54
PIN_HEADER_PAD_DIAMETER = 1.7
PIN_HEADER_DRILL = 1.0

# ISO 273 clearance holes for metric screws: screw size -> drill diameter
MOUNTING_HOLE_SIZES = {
    "M2": 2.2,
    "M2.5": 2.7,
    "M3": 3.2,
    "M4": 4.3,
    "M5": 5.3,
    "M6": 6.4,
}
