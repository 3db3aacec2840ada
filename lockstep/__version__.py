"""
lockstep version information.

Single source of truth for the package version, read by packaging
metadata and by ``lockstep --version``.
"""

from __future__ import annotations

__version__ = "0.1.0.dev0"
