"""Configuration file loader for lockstep.

Supports two formats:

- ``lockstep.toml`` — settings under a ``[lockstep]`` table
- ``pyproject.toml`` — settings under a ``[tool.lockstep]`` table

Discovery order:

1. Explicit path from ``--config`` or ``LOCKSTEP_CONFIG``
2. ``lockstep.toml`` in the search directory
3. ``pyproject.toml`` with a ``[tool.lockstep]`` section

Example (``lockstep.toml``)::

    [lockstep]
    muted = false
    host_arch = "os.linux.x86_64"
    programs_dir = "programs"
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from lockstep.exceptions import ConfigError
from lockstep.utils.logger import get_logger
from lockstep.constants import CONFIG_FILE_NAME, DEFAULT_MUTED, DEFAULT_PROGRAMS_DIR

logger = get_logger("config")


@dataclass
class LockstepConfig:
    """Parsed and validated lockstep configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        muted: Suppress non-error output such as the change report.
        host_arch: Host architecture to materialize packages for. ``None``
            means detect it from the running platform.
        programs_dir: Directory (relative to the project root) holding
            sub-programs.
        source_path: Path to the loaded config file, or ``None``.
    """

    muted: bool = DEFAULT_MUTED
    host_arch: Optional[str] = None
    programs_dir: str = DEFAULT_PROGRAMS_DIR

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return the user-facing options for debug logging."""
        return {
            "muted": self.muted,
            "host_arch": self.host_arch,
            "programs_dir": self.programs_dir,
        }


_OPTION_TYPES: Dict[str, type] = {
    "muted": bool,
    "host_arch": str,
    "programs_dir": str,
}


def discover_config_file(
    explicit_path: Optional[Path] = None,
    *,
    search_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.
        search_dir: Directory searched for implicit config files; defaults
            to the current directory.

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

    directory = search_dir or Path.cwd()

    lockstep_toml = directory / CONFIG_FILE_NAME
    if lockstep_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, lockstep_toml)
        return lockstep_toml

    pyproject_toml = directory / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_lockstep_section(pyproject_toml):
        logger.debug("Found [tool.lockstep] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_lockstep_section(path: Path) -> bool:
    """Check for a ``[tool.lockstep]`` table; unreadable files count as no."""
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "lockstep" in raw.get("tool", {})


def load_config(
    config_path: Optional[Path] = None,
    *,
    search_dir: Optional[Path] = None,
) -> LockstepConfig:
    """Load and validate lockstep configuration.

    Returns the defaults when no file is found.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path, search_dir=search_dir)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return LockstepConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("lockstep", {})
    else:
        section = raw.get("lockstep", {})

    if not section:
        logger.debug("Config file found but no lockstep section; using defaults")
        return LockstepConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is invalid TOML.
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
) -> LockstepConfig:
    """Validate a ``[lockstep]`` table, rejecting unknown keys and bad types."""
    unknown = set(section) - set(_OPTION_TYPES)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = LockstepConfig()
    for option, expected in _OPTION_TYPES.items():
        if option not in section:
            continue
        value = section[option]
        if not isinstance(value, expected):
            raise ConfigError(
                f"{option} must be a {'boolean' if expected is bool else 'string'}, "
                f"got {type(value).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, value)

    if not config.programs_dir.strip():
        raise ConfigError(
            "programs_dir must not be empty",
            config_path=config_path,
            option="programs_dir",
        )

    return config
