"""
Utility helpers for lockstep.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Line-oriented filesystem helpers
- Version comparison and host architecture detection

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from lockstep.utils.filesystem import (
    append_file,
    find_project_root,
    get_lines,
    get_lines_or_empty,
    safe_read_file,
    safe_write_file,
    trim_line,
    write_lines,
)
from lockstep.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)
from lockstep.utils.console import (
    print_error,
    print_message,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)
from lockstep.utils.version_utils import get_update_type

__all__ = [
    # Console
    "print_error",
    "print_message",
    "print_table",
    "print_success",
    "print_warning",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "append_file",
    "find_project_root",
    "get_lines",
    "get_lines_or_empty",
    "safe_read_file",
    "safe_write_file",
    "trim_line",
    "write_lines",
    # Versions
    "get_update_type",
]
