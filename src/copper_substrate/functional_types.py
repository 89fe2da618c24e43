"""
Functional classification of board components.

A :class:`FunctionalType` says what a component *is* (resistor, capacitor,
IC, ...) and optionally carries its value, e.g. ``"100nF"``. The kind drives
the default footprint naming prefix and reference designator prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import ConstructionError

__all__ = ["FunctionalKind", "FunctionalType"]


class FunctionalKind(Enum):
    """Closed set of component functions."""

    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    INTEGRATED_CIRCUIT = "integrated_circuit"
    CONNECTOR = "connector"
    DIODE = "diode"
    MECHANICAL = "mechanical"
    OTHER = "other"


# (footprint name prefix, reference designator prefix)
_PREFIXES = {
    FunctionalKind.RESISTOR: ("R", "R"),
    FunctionalKind.CAPACITOR: ("C", "C"),
    FunctionalKind.INDUCTOR: ("L", "L"),
    FunctionalKind.INTEGRATED_CIRCUIT: ("U", "U"),
    FunctionalKind.CONNECTOR: ("J", "J"),
    FunctionalKind.DIODE: ("D", "D"),
    FunctionalKind.MECHANICAL: ("H", "H"),
}

_PASSIVE_KINDS = frozenset(
    {FunctionalKind.RESISTOR, FunctionalKind.CAPACITOR, FunctionalKind.INDUCTOR}
)

_CATEGORY_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class FunctionalType:
    """
    What a component does, with an optional value.

    ``category`` names the function of an ``OTHER`` component (e.g. "Fuse") and
    must be empty for every other kind.

    Example:
        >>> FunctionalType.capacitor("100nF").footprint_prefix
        'C'
        >>> FunctionalType.other("Fuse", "500mA").footprint_prefix
        'Fuse'
    """

    kind: FunctionalKind
    value: str | None = None
    category: str | None = None

    def __post_init__(self):
        if not isinstance(self.kind, FunctionalKind):
            raise ConstructionError(
                "Functional kind must be a FunctionalKind",
                context={"kind": self.kind},
            )
        if self.kind == FunctionalKind.OTHER:
            if not self.category or not _CATEGORY_RE.match(self.category):
                raise ConstructionError(
                    "Other functional types need a category name",
                    context={"category": self.category},
                    suggestions=["Use an identifier-like name such as 'Fuse' or 'Crystal'"],
                )
        elif self.category is not None:
            raise ConstructionError(
                "Only OTHER functional types carry a category",
                context={"kind": self.kind.value, "category": self.category},
            )
        if self.value is not None and not str(self.value).strip():
            raise ConstructionError(
                "Functional value must not be blank",
                context={"kind": self.kind.value},
            )

    @classmethod
    def resistor(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.RESISTOR, value)

    @classmethod
    def capacitor(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.CAPACITOR, value)

    @classmethod
    def inductor(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.INDUCTOR, value)

    @classmethod
    def integrated_circuit(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.INTEGRATED_CIRCUIT, value)

    @classmethod
    def connector(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.CONNECTOR, value)

    @classmethod
    def diode(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.DIODE, value)

    @classmethod
    def mechanical(cls, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.MECHANICAL, value)

    @classmethod
    def other(cls, category: str, value: str | None = None) -> FunctionalType:
        return cls(FunctionalKind.OTHER, value, category)

    @property
    def footprint_prefix(self) -> str:
        """Prefix used when deriving footprint names."""
        if self.kind == FunctionalKind.OTHER:
            return self.category
        return _PREFIXES[self.kind][0]

    @property
    def reference_prefix(self) -> str:
        """Reference designator prefix ("R" for R1, "U" for U3, ...)."""
        if self.kind == FunctionalKind.OTHER:
            return self.category[0].upper()
        return _PREFIXES[self.kind][1]

    @property
    def is_passive(self) -> bool:
        return self.kind in _PASSIVE_KINDS

    @property
    def is_electrical(self) -> bool:
        return self.kind != FunctionalKind.MECHANICAL

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "Capacitor" or "Fuse"."""
        if self.kind == FunctionalKind.OTHER:
            return self.category
        return self.kind.value.replace("_", " ").title()
