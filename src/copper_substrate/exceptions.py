"""
Custom exception hierarchy for copper-substrate.

Every error carries optional context and suggestions so callers get an
actionable message instead of a bare string.

Example::

    from copper_substrate.exceptions import ConstructionError, ExportValidationError

    raise ConstructionError(
        "Surface-mount pitch must be positive",
        context={"designator": "0603", "pitch": -1.0},
        suggestions=["Pass the pad pitch in millimetres"],
    )

    # Export validation collects every problem before failing
    raise ExportValidationError(
        ["Footprint name is empty", "Pad 1 is on layer F.CrtYd"],
        context={"format": "kicad"},
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class CopperSubstrateError(Exception):
    """
    Base exception for all copper-substrate errors.

    Attributes:
        context: Dictionary of contextual information (footprint, pad, key, ...)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ConstructionError(CopperSubstrateError):
    """
    A component value could not be built from the given parameters.

    Raised for invalid taxonomy or package parameters, malformed pads and
    components that author geometry they are not allowed to own (such as a
    courtyard outline). The failed value is never returned, so other
    components are unaffected.

    Example::

        raise ConstructionError(
            "Through-hole drill must be positive",
            context={"designator": "DIP-8", "drill": 0},
        )
    """

    pass


class ConfigurationError(CopperSubstrateError):
    """
    Configuration or policy values are invalid.

    Raised at load time, before any courtyard derivation runs.

    Example::

        raise ConfigurationError(
            "Courtyard margin must be positive",
            context={"key": "smt_margin", "value": 0},
        )
    """

    pass


class ExportValidationError(CopperSubstrateError):
    """
    Component data cannot be represented in the target format.

    Collects every problem instead of failing on the first one. No output is
    produced when this is raised.

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Export validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class ParseError(CopperSubstrateError):
    """
    S-expression text could not be parsed.

    Example::

        raise ParseError("Unterminated string", position=118)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        position: Optional[int] = None,
    ):
        ctx = context or {}
        if position is not None and "position" not in ctx:
            ctx["position"] = position
        super().__init__(message, ctx, suggestions)


__all__ = [
    "CopperSubstrateError",
    "ConstructionError",
    "ConfigurationError",
    "ExportValidationError",
    "ParseError",
]
