"""
Shared context object for lockstep CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from lockstep.config import LockstepConfig


class LockstepContext:
    """Global context object for lockstep CLI commands.

    Created once per CLI invocation and handed to subcommands through
    Click's context mechanism.

    Attributes:
        config_path: Path to the lockstep configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration.
        project_dir: Explicit project root from ``--project``, if given.
    """

    __slots__ = ("config_path", "verbose", "color", "config", "project_dir")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[LockstepConfig] = None
        self.project_dir: Optional[Path] = None


#: Click decorator for injecting :class:`LockstepContext` into commands.
pass_context = click.make_pass_decorator(LockstepContext, ensure=True)
