"""
Configuration file support for copper-substrate.

Provides hierarchical configuration loading from:
1. Project config: .copper-substrate.toml or copper-substrate.toml in the project
2. User config: ~/.config/copper-substrate/config.toml

Project config overrides user config, which overrides the built-in defaults.
Values are validated as they are merged, so a bad margin fails at load time
rather than during export.
"""

from __future__ import annotations

import logging
import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .courtyard import COURTYARD_LINE_WIDTH, POLICY_KEYS, CourtyardPolicy
from .exceptions import ConfigurationError
from .units import parse_length

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

__all__ = [
    "Config",
    "ExportConfig",
    "CONFIG_FILENAMES",
    "USER_CONFIG_PATH",
    "generate_template",
    "get_config_paths",
]

logger = logging.getLogger(__name__)

# Config file names to search for in project directories
CONFIG_FILENAMES = [".copper-substrate.toml", "copper-substrate.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "copper-substrate" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "courtyard": set(POLICY_KEYS),
    "export": {"generator", "generator_version", "courtyard_line_width"},
}


def _package_version() -> str:
    from copper_substrate import __version__

    return __version__


@dataclass
class ExportConfig:
    """Export-specific configuration."""

    generator: str = "copper_substrate"
    generator_version: str = field(default_factory=_package_version)
    courtyard_line_width: float = COURTYARD_LINE_WIDTH


@dataclass
class Config:
    """Merged configuration from all sources."""

    courtyard: CourtyardPolicy = field(default_factory=CourtyardPolicy)
    export: ExportConfig = field(default_factory=ExportConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> Config:
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object

        Raises:
            ConfigurationError: If a config file is unreadable, is not valid
                TOML, or holds an invalid value
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.is_file():
            logger.debug("Loading user config %s", USER_CONFIG_PATH)
            _merge_config(config, _load_toml_file(USER_CONFIG_PATH), str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(Path(start_dir))
        if project_config:
            logger.debug("Loading project config %s", project_config)
            _merge_config(config, _load_toml_file(project_config), str(project_config), sources)

        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<dict>") -> Config:
        """Build a configuration from already parsed TOML data."""
        config = cls()
        sources: dict[str, str] = {}
        _merge_config(config, data, source, sources)
        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key such as "courtyard.smt_margin"."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at a .git directory or the filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            context={"error": str(e)},
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}", context={"error": str(e)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into a Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking and error messages)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "courtyard" in data:
        courtyard_data = _section(data, "courtyard", source)
        _warn_unknown_keys(courtyard_data, KNOWN_KEYS["courtyard"], "courtyard", source)

        updates = {k: v for k, v in courtyard_data.items() if k in KNOWN_KEYS["courtyard"]}
        if updates:
            merged = {**config.courtyard.model_dump(), **updates}
            try:
                config.courtyard = CourtyardPolicy.from_mapping(merged)
            except ConfigurationError as e:
                e.context["source"] = source
                raise
            for key in updates:
                sources[f"courtyard.{key}"] = source

    if "export" in data:
        export_data = _section(data, "export", source)
        _warn_unknown_keys(export_data, KNOWN_KEYS["export"], "export", source)

        for key in ("generator", "generator_version"):
            if key in export_data:
                value = export_data[key]
                if not isinstance(value, str) or not value.strip():
                    raise ConfigurationError(
                        f"export.{key} must be a non-empty string",
                        context={"value": value, "source": source},
                    )
                setattr(config.export, key, value)
                sources[f"export.{key}"] = source

        if "courtyard_line_width" in export_data:
            raw = export_data["courtyard_line_width"]
            try:
                width = parse_length(raw)
            except ValueError as e:
                raise ConfigurationError(
                    "export.courtyard_line_width is not a length",
                    context={"value": raw, "source": source},
                ) from e
            if not 0 < width < float("inf"):
                raise ConfigurationError(
                    "export.courtyard_line_width must be a positive finite length",
                    context={"value": raw, "source": source},
                )
            config.export.courtyard_line_width = width
            sources["export.courtyard_line_width"] = source


def _section(data: dict[str, Any], name: str, source: str) -> dict[str, Any]:
    section = data[name]
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Config key '{name}' must be a table",
            context={"source": source},
            suggestions=[f"Use a [{name}] section"],
        )
    return section


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# copper-substrate configuration file
# Place as .copper-substrate.toml in the project root or
# ~/.config/copper-substrate/config.toml for user defaults

[courtyard]
# Clearance around the pads of surface-mount packages (mm, or "10mil")
# smt_margin = 0.25

# Clearance around the pads of through-hole packages
# tht_margin = 0.5

# Clearance for custom packages
# default_margin = 0.25

# Grid the courtyard outline is rounded outward to
# grid_resolution = 0.01

[export]
# Generator name written into exported footprints
# generator = "copper_substrate"

# Generator version written into exported footprints
# generator_version = "0.1.0"

# Courtyard outline stroke width in mm
# courtyard_line_width = 0.05
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.is_file() else None,
        "project": project_config,
    }
