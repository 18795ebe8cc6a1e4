"""Configuration file loader for pepver.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``pepver.toml``: settings under ``[pepver]`` table
- ``pyproject.toml``: settings under ``[tool.pepver]`` table

Discovery order:

1. Explicit path from ``--config`` or ``PEPVER_CONFIG``
2. ``pepver.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.pepver]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``pepver.toml``)::

    [pepver]
    allow_prereleases = true
    strict = false
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from pepver.exceptions import ConfigError
from pepver.utils.logger import get_logger
from pepver.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ALLOW_PRERELEASES,
    DEFAULT_STRICT,
)

logger = get_logger("config")

_SECTION = "pepver"


@dataclass
class PepverConfig:
    """Parsed and validated pepver configuration.

    Attributes:
        allow_prereleases: Default pre-release policy for ``check`` and
            ``filter``. ``None`` keeps the automatic policy derived from
            the specifiers themselves.
        strict: Reject strings that are not PEP 440 versions instead of
            falling back to legacy ordering.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    allow_prereleases: Optional[bool] = DEFAULT_ALLOW_PRERELEASES
    strict: bool = DEFAULT_STRICT

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options for debug logging."""
        return {
            "allow_prereleases": self.allow_prereleases,
            "strict": self.strict,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

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
    if pyproject_toml.is_file() and _pyproject_has_pepver_section(pyproject_toml):
        logger.debug("Found [tool.pepver] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_pepver_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.pepver]`` section.

    An unreadable or malformed pyproject.toml is treated as having no
    section, so discovery falls back to defaults instead of failing.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return _SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> PepverConfig:
    """Load and validate pepver configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`PepverConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return PepverConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(_SECTION, {})
    else:
        section = raw.get(_SECTION, {})

    if not section:
        logger.debug("Config file found but no pepver section, using defaults")
        return PepverConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> PepverConfig:
    """Validate a ``[pepver]`` / ``[tool.pepver]`` table.

    Raises:
        ConfigError: Unknown keys or values of the wrong type.
    """
    config = PepverConfig()

    unknown = set(section.keys()) - {"allow_prereleases", "strict"}
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    if "allow_prereleases" in section:
        config.allow_prereleases = _expect_bool(
            section, "allow_prereleases", config_path
        )

    if "strict" in section:
        config.strict = _expect_bool(section, "strict", config_path)

    return config


def _expect_bool(section: Dict[str, Any], option: str, config_path: str) -> bool:
    value = section[option]
    if not isinstance(value, bool):
        raise ConfigError(
            f"{option} must be a boolean, got {type(value).__name__}",
            config_path=config_path,
            option=option,
        )
    return value
