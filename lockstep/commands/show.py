"""Read-only commands: ``constraints``, ``versions`` and ``info``.

Typical usage::

    $ lockstep constraints
    $ lockstep versions
    $ lockstep --project ../other-app info
"""

from __future__ import annotations

import click

from lockstep.constants import NO_RELEASE
from lockstep.commands.common import open_project
from lockstep.context import pass_context, LockstepContext
from lockstep.core.version_ledger import VersionLedger
from lockstep.utils import get_logger, print_message, print_table, print_warning

logger = get_logger("commands.show")


@click.command()
@pass_context
def constraints(ctx: LockstepContext) -> None:
    """List the packages this project explicitly requires."""
    manager = open_project(ctx)
    entries = manager.get_constraints()

    if not entries:
        print_warning("This project has no package constraints")
        return

    print_table(
        [
            {
                "Package": constraint.package_name,
                "Constraint": constraint.expression or "*",
                "Type": constraint.exactness.value,
            }
            for constraint in entries.values()
        ],
        title=f"Constraints ({manager.paths.constraints_file})",
    )


@click.command()
@pass_context
def versions(ctx: LockstepContext) -> None:
    """Show the committed version ledger without recomputing it."""
    manager = open_project(ctx)
    committed = VersionLedger(manager.paths.versions_file).read()

    if not committed:
        print_warning("No versions have been recorded for this project yet")
        return

    print_table(
        [{"Package": name, "Version": committed[name]} for name in sorted(committed)],
        title=f"Versions ({manager.paths.versions_file})",
    )


@click.command()
@pass_context
def info(ctx: LockstepContext) -> None:
    """Show the release pin, app identifier and finished upgraders."""
    manager = open_project(ctx)

    release = manager.get_release_pin()
    if release is None:
        release_text = "<no release file>"
    elif release == "":
        release_text = "<empty release file>"
    elif release == NO_RELEASE:
        release_text = "none (not pinned)"
    else:
        release_text = release

    print_message(f"Project:    {manager.state.root_dir}")
    print_message(f"Release:    {release_text}")
    print_message(f"Identifier: {manager.get_app_identifier()}")

    upgraders = manager.get_finished_upgraders()
    print_message(f"Upgraders:  {len(upgraders)} finished")
    for upgrader in upgraders:
        print_message(f"  {upgrader}")
