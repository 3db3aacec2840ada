"""
Executable module for lockstep.

Running ``python -m lockstep`` is equivalent to running ``lockstep``.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be imported."""
    sys.stderr.write("lockstep CLI could not be loaded.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from lockstep.__version__ import __version__

        sys.stderr.write(f"lockstep version: {__version__}\n")
    except ImportError:
        sys.stderr.write("lockstep version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entry point for ``python -m lockstep``; returns the CLI exit code."""
    try:
        from lockstep.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
