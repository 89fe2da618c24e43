"""
Physical package classification.

A package is one of :class:`SurfaceMount`, :class:`ThroughHole` or
:class:`Custom`. Its :class:`PackageClass` selects the courtyard clearance
used by the courtyard engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .exceptions import ConstructionError

__all__ = ["PackageClass", "SurfaceMount", "ThroughHole", "Custom", "PackageType"]


class PackageClass(Enum):
    """Courtyard clearance class of a package."""

    SMT = "smt"
    THT = "tht"
    CUSTOM = "custom"


def _check_designator(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ConstructionError(
            f"Package {field_name} must be a non-empty string",
            context={field_name: value},
        )


def _check_positive(value: float, field_name: str, designator: str) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ConstructionError(
            f"Package {field_name} must be a positive distance",
            context={"designator": designator, field_name: value},
            suggestions=[f"Give the {field_name} in millimetres, e.g. 1.27"],
        )


@dataclass(frozen=True)
class SurfaceMount:
    """Surface-mount package such as "0603" or "SOIC-8" with its pad pitch in mm."""

    designator: str
    pitch: float

    def __post_init__(self):
        _check_designator(self.designator, "designator")
        _check_positive(self.pitch, "pitch", self.designator)

    @property
    def package_class(self) -> PackageClass:
        return PackageClass.SMT

    @property
    def name(self) -> str:
        return self.designator


@dataclass(frozen=True)
class ThroughHole:
    """Through-hole package such as "DIP-8" with its drill diameter in mm."""

    designator: str
    drill: float

    def __post_init__(self):
        _check_designator(self.designator, "designator")
        _check_positive(self.drill, "drill", self.designator)

    @property
    def package_class(self) -> PackageClass:
        return PackageClass.THT

    @property
    def name(self) -> str:
        return self.designator


@dataclass(frozen=True)
class Custom:
    """Package that fits neither standard class."""

    name: str

    def __post_init__(self):
        _check_designator(self.name, "name")

    @property
    def package_class(self) -> PackageClass:
        return PackageClass.CUSTOM


PackageType = Union[SurfaceMount, ThroughHole, Custom]
