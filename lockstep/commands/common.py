"""Helpers shared by lockstep CLI commands."""

from __future__ import annotations

from pathlib import Path

from lockstep.context import LockstepContext
from lockstep.config import LockstepConfig
from lockstep.exceptions import LockstepError
from lockstep.core.project import DependencyStateManager
from lockstep.utils.filesystem import find_project_root, is_project_root


def open_project(ctx: LockstepContext) -> DependencyStateManager:
    """Bind a manager to the project selected by ``--project`` or the cwd.

    The CLI has no resolver or package store, so only operations that do
    not recompute dependencies are available on the returned manager.

    Raises:
        LockstepError: No lockstep project was found.
    """
    config = ctx.config or LockstepConfig()

    if ctx.project_dir is not None:
        root = ctx.project_dir.resolve()
        if not is_project_root(root):
            raise LockstepError(f"Not a lockstep project: {root}")
    else:
        root = find_project_root(Path.cwd())
        if root is None:
            raise LockstepError(
                "Not inside a lockstep project (no .lockstep/packages found)"
            )

    manager = DependencyStateManager(
        host_arch=config.host_arch,
        programs_dir=config.programs_dir,
        muted=config.muted,
    )
    manager.bind(root)
    return manager
