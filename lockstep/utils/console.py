"""
Console output utilities for lockstep using Rich.

User-facing output (change reports, tables, status lines) goes through
this module. Diagnostics go through :mod:`lockstep.utils.logger`.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

LOCKSTEP_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
    }
)

_console: Optional[Console] = None
_error_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _make_console(*, stderr: bool) -> Console:
    use_color = _should_use_color()
    return Console(
        theme=LOCKSTEP_THEME,
        no_color=not use_color,
        highlight=use_color,
        stderr=stderr,
    )


def _get_console() -> Console:
    """Return the shared stdout console."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = _make_console(stderr=False)
    return _console


def _get_error_console() -> Console:
    """Return the shared stderr console."""
    global _error_console

    if _error_console is None:
        with _console_lock:
            if _error_console is None:
                _error_console = _make_console(stderr=True)
    return _error_console


def reconfigure_console() -> None:
    """Drop the cached consoles so the next print re-reads the environment."""
    global _console, _error_console
    with _console_lock:
        _console = None
        _error_console = None


def print_message(message: str, *, style: Optional[str] = None) -> None:
    """Print a plain line of user-facing output."""
    _get_console().print(message, style=style, markup=False, highlight=False)


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_console().print(f"{prefix} {message}", style="success", markup=False)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message to stderr."""
    _get_error_console().print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _get_console().print(f"{prefix} {message}", style="warning", markup=False)


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
) -> None:
    """Render rows of dictionaries as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        caption: Optional table caption.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(
        title=title,
        caption=caption,
        show_header=True,
        header_style="bold",
    )
    for header in headers:
        table.add_column(header, overflow="fold")

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)
