"""
S-expression support for the KiCad export target.

Usage:
    from copper_substrate.sexp import SExp, parse_string

    doc = parse_string(text)
    doc.name                     # "footprint"
    doc.children_named("pad")    # pad nodes in file order
"""

from .parser import BLOCK_NODES, Parser, SExp, format_number, parse_string

__all__ = [
    "SExp",
    "Parser",
    "parse_string",
    "format_number",
    "BLOCK_NODES",
]
