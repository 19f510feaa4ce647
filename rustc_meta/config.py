"""Configuration file loader for rustc-meta.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``rustc-meta.toml``: settings under ``[rustc-meta]`` table
- ``pyproject.toml``: settings under ``[tool.rustc-meta]`` table

Discovery order:

1. Explicit path from ``--config`` or ``RUSTC_META_CONFIG``
2. ``rustc-meta.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.rustc-meta]`` section

Configuration precedence: defaults < config file < environment < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``rustc-meta.toml``)::

    [rustc-meta]
    rustc = "/opt/rust/bin/rustc"
    min_banner_lines = 6
    max_banner_lines = 8
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from rustc_meta.exceptions import ConfigError
from rustc_meta.utils.logger import get_logger
from rustc_meta.core.parser import VersionBannerParser
from rustc_meta.constants import (
    DEFAULT_MAX_BANNER_LINES,
    DEFAULT_MIN_BANNER_LINES,
)

logger = get_logger("config")

#: Name of the configuration table and of the standalone config file stem.
CONFIG_SECTION = "rustc-meta"
CONFIG_FILE_NAME = f"{CONFIG_SECTION}.toml"


@dataclass
class RustcMetaConfig:
    """Parsed and validated rustc-meta configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        rustc: Compiler executable to run. ``None`` defers to ``$RUSTC``
            and then ``rustc``.
        min_banner_lines: Fewest lines accepted in a ``rustc -vV`` banner.
        max_banner_lines: Most lines accepted in a ``rustc -vV`` banner.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    rustc: Optional[str] = None
    min_banner_lines: int = DEFAULT_MIN_BANNER_LINES
    max_banner_lines: int = DEFAULT_MAX_BANNER_LINES

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "rustc": self.rustc,
            "min_banner_lines": self.min_banner_lines,
            "max_banner_lines": self.max_banner_lines,
        }

    def make_parser(self) -> VersionBannerParser:
        """Build a banner parser honoring the configured line range."""
        return VersionBannerParser(
            min_lines=self.min_banner_lines,
            max_lines=self.max_banner_lines,
        )


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``RUSTC_META_CONFIG``)
    2. ``rustc-meta.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.rustc-meta]`` section in current directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    standalone = cwd / CONFIG_FILE_NAME
    if standalone.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, standalone)
        return standalone

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file():
        if _pyproject_has_section(pyproject_toml):
            logger.debug(
                "Found [tool.%s] in pyproject.toml: %s", CONFIG_SECTION, pyproject_toml
            )
            return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.rustc-meta]`` section.

    An unreadable or invalid pyproject.toml is treated as having no
    section so discovery can fall back to defaults.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return CONFIG_SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> RustcMetaConfig:
    """Load and validate rustc-meta configuration.

    Discovers config file (or uses provided path), parses and validates it.
    Returns config with defaults if no file found.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`RustcMetaConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return RustcMetaConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(CONFIG_SECTION, {})
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no rustc-meta section, using defaults")
        return RustcMetaConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or contains invalid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
            original_error=exc,
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
            original_error=exc,
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> RustcMetaConfig:
    """Parse and validate the ``[rustc-meta]`` or ``[tool.rustc-meta]`` table.

    Rejects unknown keys, type mismatches and an empty line range.
    """
    config = RustcMetaConfig()

    known_top = {
        "rustc",
        "min_banner_lines",
        "max_banner_lines",
    }

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "rustc" in section:
        val = section["rustc"]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                "rustc must be a non-empty string",
                config_path=config_path,
                option="rustc",
            )
        config.rustc = val

    for option in ("min_banner_lines", "max_banner_lines"):
        if option in section:
            val = section[option]
            # bool is a subclass of int
            if isinstance(val, bool) or not isinstance(val, int):
                raise ConfigError(
                    f"{option} must be an integer, got {type(val).__name__}",
                    config_path=config_path,
                    option=option,
                )
            setattr(config, option, val)

    if config.min_banner_lines < 1:
        raise ConfigError(
            "min_banner_lines must be at least 1",
            config_path=config_path,
            option="min_banner_lines",
        )
    if config.max_banner_lines < config.min_banner_lines:
        raise ConfigError(
            "max_banner_lines must not be less than min_banner_lines",
            config_path=config_path,
            option="max_banner_lines",
        )

    return config
