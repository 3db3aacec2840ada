"""Force-edit commands: ``force-add`` and ``force-remove``.

These edit ``.lockstep/packages`` without running the resolver, the same
way upgraders do. Versions are recomputed the next time the project's
dependencies are needed.

Typical usage::

    $ lockstep force-add http email
    $ lockstep force-remove autopublish
"""

from __future__ import annotations

from typing import Tuple

import click

from lockstep.commands.common import open_project
from lockstep.context import pass_context, LockstepContext
from lockstep.utils import get_logger, print_success, print_warning

logger = get_logger("commands.edit")


@click.command("force-add")
@click.argument("names", nargs=-1, required=True)
@pass_context
def force_add(ctx: LockstepContext, names: Tuple[str, ...]) -> None:
    """Add packages to the constraints file without resolving them."""
    names = tuple(dict.fromkeys(names))
    manager = open_project(ctx)
    already = [name for name in names if name in manager.get_constraints()]

    manager.force_edit_packages(names, "add")
    logger.info("Force-added %s", ", ".join(names))

    for name in already:
        print_warning(f"{name} is already a dependency of this project")
    added = [name for name in names if name not in already]
    if added:
        print_success(f"Added {', '.join(added)}")


@click.command("force-remove")
@click.argument("names", nargs=-1, required=True)
@pass_context
def force_remove(ctx: LockstepContext, names: Tuple[str, ...]) -> None:
    """Remove packages from the constraints file without resolving."""
    names = tuple(dict.fromkeys(names))
    manager = open_project(ctx)
    missing = [name for name in names if name not in manager.get_constraints()]

    manager.force_edit_packages(names, "remove")
    logger.info("Force-removed %s", ", ".join(names))

    for name in missing:
        print_warning(f"{name} is not a dependency of this project")
    removed = [name for name in names if name not in missing]
    if removed:
        print_success(f"Removed {', '.join(removed)}")
