"""
KiCad S-expression tree, serializer and parser.

Exporters build :class:`SExp` trees and serialize them with
:meth:`SExp.to_string`, which produces KiCad-style text (tab indentation,
one structured child per line). :func:`parse_string` reads such text back,
which the test suite uses to check exported footprints structurally.

Usage:
    from copper_substrate.sexp import SExp, parse_string

    node = SExp.list("pad", "1", SExp.sym("smd"), SExp.sym("rect"),
                     SExp.list("at", 0, 0))
    text = node.to_string()
    assert parse_string(text)["at"].get_atoms() == [0, 0]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from ..exceptions import ParseError

__all__ = ["SExp", "Parser", "parse_string", "format_number", "BLOCK_NODES"]

AtomValue = Union[str, int, float]

# Nodes rendered with their structured children on separate lines
BLOCK_NODES = frozenset(
    {
        "footprint",
        "property",
        "effects",
        "font",
        "stroke",
        "fp_line",
        "fp_rect",
        "fp_circle",
        "fp_arc",
        "fp_poly",
        "fp_text",
        "pts",
        "pad",
        "model",
        "offset",
        "scale",
        "rotate",
    }
)

# Decimal places kept for numbers (KiCad's internal resolution is 1 nm)
NUMBER_PRECISION = 6


def format_number(value: Union[int, float]) -> str:
    """Format a number without trailing zeros, e.g. 1.50 -> "1.5", 2.0 -> "2"."""
    if isinstance(value, bool):
        raise TypeError("Booleans are not S-expression numbers")
    if isinstance(value, int):
        return str(value)
    rounded = round(value, NUMBER_PRECISION)
    if rounded == 0:
        return "0"
    text = f"{rounded:.{NUMBER_PRECISION}f}".rstrip("0").rstrip(".")
    return text


@dataclass
class SExp:
    """
    S-expression node.

    Can be either:
    - An atom (string, number, or bare symbol)
    - A list starting with a name followed by children

    Examples:
        (at 1.5 0)
        → SExp(name="at", children=[SExp(value=1.5), SExp(value=0)])

        "REF**"
        → SExp(value="REF**")
    """

    name: Optional[str] = None
    children: list[SExp] = field(default_factory=list)
    value: Optional[AtomValue] = None
    symbol: bool = False  # Render a string atom unquoted

    def __post_init__(self):
        if self.name is not None and self.value is not None:
            raise ValueError("SExp cannot have both name and value")

    @property
    def is_atom(self) -> bool:
        """True if this is a leaf node (string, number, symbol)."""
        return self.name is None and not self.children

    @property
    def is_list(self) -> bool:
        return self.name is not None or bool(self.children)

    def __getitem__(self, key: Union[str, int]) -> SExp:
        """
        Access children by name or index.

        Examples:
            node["layer"]    # First child named "layer"
            node[0]          # First child
        """
        if isinstance(key, int):
            return self.children[key]

        for child in self.children:
            if child.name == key:
                return child

        names = sorted({c.name for c in self.children if c.name})
        available = f"Available: {', '.join(names)}" if names else "No named children"
        node_desc = f"'{self.name}'" if self.name else "root"
        raise KeyError(f"No child named '{key}' in {node_desc}. {available}")

    def get(self, key: str, default: Any = None) -> Optional[SExp]:
        """Get child by name, returning default if not found."""
        try:
            return self[key]
        except KeyError:
            return default

    def find(self, name: str) -> Optional[SExp]:
        """Find first descendant (or self) with the given name."""
        for node in self.iter_all():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[SExp]:
        """Find all descendants (and self) with the given name."""
        return [node for node in self.iter_all() if node.name == name]

    def children_named(self, name: str) -> list[SExp]:
        """Direct children with the given name, in order."""
        return [c for c in self.children if c.name == name]

    def iter_all(self) -> Iterator[SExp]:
        """Iterate over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.iter_all()

    def append(self, child: Union[SExp, AtomValue]) -> SExp:
        """Add a child (atoms are wrapped) and return it."""
        if not isinstance(child, SExp):
            child = SExp(value=child)
        self.children.append(child)
        return child

    def get_atoms(self) -> list[AtomValue]:
        """Get all atom values from direct children."""
        return [c.value for c in self.children if c.is_atom]

    def get_first_atom(self) -> Optional[AtomValue]:
        """Get the first atom value from children."""
        for c in self.children:
            if c.is_atom:
                return c.value
        return None

    def to_string(self, indent: int = 0) -> str:
        """Serialize to KiCad-style S-expression text."""
        if self.is_atom:
            return self._format_atom()

        tabs = "\t" * indent
        if self.name not in BLOCK_NODES:
            return tabs + self._inline()

        head = [self.name] if self.name else []
        rest: list[SExp] = []
        for i, child in enumerate(self.children):
            if child.is_atom:
                head.append(child._format_atom())
            else:
                rest = self.children[i:]
                break

        if not rest:
            return f"{tabs}({' '.join(head)})"

        lines = [f"{tabs}({' '.join(head)}"]
        for child in rest:
            if child.is_atom:
                lines.append(f"{tabs}\t{child._format_atom()}")
            else:
                lines.append(child.to_string(indent + 1))
        lines.append(f"{tabs})")
        return "\n".join(lines)

    def _inline(self) -> str:
        parts = [self.name] if self.name else []
        for child in self.children:
            parts.append(child._format_atom() if child.is_atom else child._inline())
        return "(" + " ".join(parts) + ")"

    def _format_atom(self) -> str:
        """Format an atom value."""
        if self.value is None:
            return '""'
        if isinstance(self.value, str):
            if self.symbol:
                return self.value
            escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
            escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
            return f'"{escaped}"'
        return format_number(self.value)

    @staticmethod
    def _is_valid_name(s: str) -> bool:
        """Check if string is a valid unquoted S-expression name/identifier."""
        if not s:
            return False
        # Names can't start with a digit or dash (would look like number)
        if s[0].isdigit() or s[0] in "-+.":
            return False
        return not any(c in s for c in ' \t\n\r"()')

    def __repr__(self) -> str:
        if self.is_atom:
            return f"SExp(value={self.value!r})"
        if self.name:
            return f"SExp(name={self.name!r}, children=[{len(self.children)} items])"
        return f"SExp(children=[{len(self.children)} items])"

    # Convenience constructors
    @classmethod
    def atom(cls, value: AtomValue) -> SExp:
        """Create an atom node (strings are quoted on output)."""
        return cls(value=value)

    @classmethod
    def sym(cls, value: str) -> SExp:
        """Create a bare symbol atom such as ``smd`` or ``solid``."""
        return cls(value=value, symbol=True)

    @classmethod
    def list(cls, name: str, *children: Union[SExp, AtomValue]) -> SExp:
        """Create a list node."""
        node = cls(name=name)
        for child in children:
            node.append(child)
        return node


class Parser:
    """S-expression parser for KiCad text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def parse(self) -> SExp:
        """Parse the entire document."""
        self._skip_whitespace()
        result = self._parse_expr()
        self._skip_whitespace()
        if self.pos < self.length:
            raise ParseError("Unexpected content after expression", position=self.pos)
        return result

    def _parse_expr(self) -> SExp:
        self._skip_whitespace()

        if self.pos >= self.length:
            raise ParseError("Unexpected end of input", position=self.pos)

        char = self.text[self.pos]
        if char == "(":
            return self._parse_list()
        if char == ")":
            raise ParseError("Unexpected ')'", position=self.pos)
        if char == '"':
            return SExp(value=self._parse_string())
        return self._parse_atom()

    def _parse_list(self) -> SExp:
        """Parse a list (name children...)."""
        self.pos += 1
        self._skip_whitespace()

        if self.pos >= self.length:
            raise ParseError("Unexpected end of input in list", position=self.pos)

        if self.text[self.pos] == ")":
            self.pos += 1
            return SExp()

        first = self._parse_expr()
        if first.symbol and SExp._is_valid_name(first.value):
            node = SExp(name=first.value)
        else:
            node = SExp()
            node.children.append(first)

        while True:
            self._skip_whitespace()
            if self.pos >= self.length:
                raise ParseError("Unexpected end of input, expected ')'", position=self.pos)
            if self.text[self.pos] == ")":
                self.pos += 1
                return node
            node.children.append(self._parse_expr())

    def _parse_string(self) -> str:
        """Parse a quoted string."""
        start = self.pos
        self.pos += 1

        result = []
        while self.pos < self.length:
            char = self.text[self.pos]

            if char == '"':
                self.pos += 1
                return "".join(result)
            if char == "\\":
                self.pos += 1
                if self.pos >= self.length:
                    raise ParseError("Unexpected end of input in escape sequence", position=self.pos)
                escaped = self.text[self.pos]
                result.append({"n": "\n", "t": "\t", "r": "\r"}.get(escaped, escaped))
            else:
                result.append(char)
            self.pos += 1

        raise ParseError("Unterminated string", position=start)

    def _parse_atom(self) -> SExp:
        """Parse an unquoted atom (symbol or number)."""
        start = self.pos
        while self.pos < self.length and self.text[self.pos] not in ' \t\n\r()"':
            self.pos += 1

        token = self.text[start : self.pos]
        try:
            if any(c in token for c in ".eE"):
                return SExp(value=float(token))
            return SExp(value=int(token))
        except ValueError:
            return SExp(value=token, symbol=True)

    def _skip_whitespace(self):
        while self.pos < self.length and self.text[self.pos] in " \t\n\r":
            self.pos += 1


def parse_string(text: str) -> SExp:
    """Parse an S-expression string."""
    return Parser(text).parse()
