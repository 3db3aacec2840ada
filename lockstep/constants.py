"""
Centralized constants for lockstep.

This module defines immutable values used across lockstep: the on-disk
project layout, architecture identifiers, ledger headers and logging
formats. All values are intended to be treated as read-only.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

#: Directory (relative to the project root) holding all project metadata.
PROJECT_METADATA_DIR: Final[str] = ".lockstep"

#: The project's own package constraints.
CONSTRAINTS_FILE: Final[str] = "packages"

#: Resolved versions of every package the project uses.
VERSIONS_FILE: Final[str] = "versions"

#: Release the project is pinned to.
RELEASE_FILE: Final[str] = "release"

#: Opaque app identifier, generated once per project.
IDENTIFIER_FILE: Final[str] = "identifier"

#: Upgraders that have already been applied to the project.
FINISHED_UPGRADERS_FILE: Final[str] = "finished-upgraders"

#: Default name of the directory holding sub-programs.
DEFAULT_PROGRAMS_DIR: Final[str] = "programs"

#: Release-pin marker for projects not pinned to any release.
NO_RELEASE: Final[str] = "none"

# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

#: Control package every project implicitly depends on when the catalog
#: knows about it.
CONTROL_PACKAGE: Final[str] = "ctl"

#: Architecture that must always be materialized besides the host one.
BROWSER_ARCH: Final[str] = "browser"

#: Separator between a package name and its constraint or version.
CONSTRAINT_SEPARATOR: Final[str] = "@"

#: Start of a trailing comment in any project file.
COMMENT_CHAR: Final[str] = "#"

# ---------------------------------------------------------------------------
# Ledgers
# ---------------------------------------------------------------------------

#: Header written the first time the upgrade ledger is created.
FINISHED_UPGRADERS_HEADER: Final[str] = (
    "# This file contains information which helps lockstep properly upgrade\n"
    "# your app when you run 'lockstep update'. You should check it into\n"
    "# version control with your project.\n"
    "\n"
)

#: Number of random tokens concatenated into an app identifier.
IDENTIFIER_TOKEN_COUNT: Final[int] = 3

#: Bytes of randomness per identifier token.
IDENTIFIER_TOKEN_BYTES: Final[int] = 8

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading project files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Name of the standalone configuration file.
CONFIG_FILE_NAME: Final[str] = "lockstep.toml"

#: Whether projects print non-error output by default.
DEFAULT_MUTED: Final[bool] = False

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
