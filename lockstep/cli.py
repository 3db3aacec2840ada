"""
Command-line interface for lockstep.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from lockstep.config import load_config
from lockstep.__version__ import __version__
from lockstep.context import LockstepContext
from lockstep.exceptions import ConfigError, LockstepError
from lockstep.utils.logger import get_logger, setup_logging
from lockstep.utils.console import print_error, print_warning, reconfigure_console
from lockstep.commands.edit import force_add, force_remove
from lockstep.commands.show import constraints, info, versions

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="LOCKSTEP_CONFIG",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root directory (default: discovered from the cwd).",
    envvar="LOCKSTEP_PROJECT",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="LOCKSTEP_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="lockstep",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    project: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """lockstep — keep a project's package versions in step with its constraints.

    \b
    Available commands:
      lockstep constraints         List the project's own constraints
      lockstep versions            Show the committed version ledger
      lockstep info                Show release pin, identifier, upgraders
      lockstep force-add NAME...   Add constraints without resolving
      lockstep force-remove NAME.. Remove constraints without resolving
    """
    _configure_logging(verbose)

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config, search_dir=project)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    lockstep_ctx = LockstepContext()
    lockstep_ctx.config_path = config or loaded_config.source_path
    lockstep_ctx.color = color
    lockstep_ctx.verbose = verbose
    lockstep_ctx.config = loaded_config
    lockstep_ctx.project_dir = project
    ctx.obj = lockstep_ctx

    logger.debug("lockstep v%s", __version__)
    logger.debug("Config path: %s", lockstep_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


cli.add_command(constraints)
cli.add_command(versions)
cli.add_command(info)
cli.add_command(force_add)
cli.add_command(force_remove)


def main() -> int:
    """Main entry point for the lockstep CLI.

    Returns:
        Exit code:
            0   Success
            1   Application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.exceptions.Abort:
        print_warning("Operation cancelled by user")
        return 130

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except LockstepError as exc:
        print_error(str(exc))
        logger.debug(
            "LockstepError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("Operation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
