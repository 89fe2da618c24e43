"""
Exporter contract and registry.

An exporter turns any :class:`~copper_substrate.component.BoardComposableObject`
into the text of one footprint file. Exporters only use the public capability
interface, so new component variants never require exporter changes, and new
target formats plug in by subclassing :class:`FootprintExporter` and
registering themselves.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..component import BoardComposableObject
from ..exceptions import ConfigurationError, ExportValidationError

__all__ = [
    "FootprintExporter",
    "register_exporter",
    "get_exporter",
    "available_formats",
]

logger = logging.getLogger(__name__)

_EXPORTERS: dict[str, type[FootprintExporter]] = {}


class FootprintExporter(ABC):
    """
    Base class for footprint exporters.

    Subclasses implement :meth:`validate` and :meth:`render`; :meth:`export`
    runs validation first so that no text is produced for invalid input.
    """

    format_name: str = ""
    file_extension: str = ""

    @abstractmethod
    def validate(self, component: BoardComposableObject) -> list[str]:
        """Return every reason the component cannot be exported (empty if none)."""

    @abstractmethod
    def render(self, component: BoardComposableObject) -> str:
        """Render an already validated component."""

    def export(self, component: BoardComposableObject) -> str:
        """
        Export one footprint.

        Raises:
            ExportValidationError: If :meth:`validate` reports any problem
        """
        errors = self.validate(component)
        if errors:
            logger.warning(
                "Refusing to export %r as %s: %d problem(s)",
                _safe_name(component),
                self.format_name,
                len(errors),
            )
            raise ExportValidationError(
                errors,
                context={"format": self.format_name, "footprint": _safe_name(component)},
            )
        text = self.render(component)
        logger.debug("Exported %s as %s (%d bytes)", _safe_name(component), self.format_name, len(text))
        return text

    def filename(self, component: BoardComposableObject) -> str:
        """File name for the exported footprint, e.g. "C_0603.kicad_mod"."""
        return f"{component.footprint_name()}{self.file_extension}"


def _safe_name(component: BoardComposableObject) -> str:
    name = component.footprint_name()
    return name if isinstance(name, str) else repr(name)


def register_exporter(cls: type[FootprintExporter]) -> type[FootprintExporter]:
    """Class decorator registering an exporter under its ``format_name``."""
    if not cls.format_name:
        raise ConfigurationError(
            "Exporter classes need a format_name", context={"exporter": cls.__name__}
        )
    _EXPORTERS[cls.format_name] = cls
    return cls


def get_exporter(format_name: str, **kwargs: Any) -> FootprintExporter:
    """
    Instantiate the exporter registered for ``format_name``.

    Raises:
        ConfigurationError: If no exporter is registered under that name
    """
    try:
        exporter_cls = _EXPORTERS[format_name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown export format: {format_name}",
            context={"available": ", ".join(available_formats()) or "none"},
        ) from None
    return exporter_cls(**kwargs)


def available_formats() -> list[str]:
    """Names of all registered export formats."""
    return sorted(_EXPORTERS)
