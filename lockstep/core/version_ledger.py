"""Version ledger (``.lockstep/versions``), the project's lock file.

One ``name@version`` line per resolved package. Lines are sorted as whole
strings, not by package name, so ``foo-bar@1.0.0`` sorts before
``foo@1.0.0``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Union

from lockstep.utils.logger import get_logger
from lockstep.constants import CONSTRAINT_SEPARATOR
from lockstep.core.constraint_store import parse_constraint_lines
from lockstep.utils.filesystem import get_lines_or_empty, safe_write_file

logger = get_logger("version_ledger")


def format_versions(versions: Mapping[str, str]) -> str:
    """Serialize a version map in ledger order."""
    lines = sorted(
        f"{name}{CONSTRAINT_SEPARATOR}{version}\n" for name, version in versions.items()
    )
    return "".join(lines)


class VersionLedger:
    """Reads and writes the resolved version map of a project."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def read(self) -> Dict[str, str]:
        """Return the committed version map; empty if there is no ledger."""
        versions: Dict[str, str] = {}
        for name, constraint in parse_constraint_lines(get_lines_or_empty(self.path)).items():
            if constraint.expression is None:
                logger.debug("Ignoring ledger entry without a version: %s", name)
                continue
            versions[name] = constraint.expression
        return versions

    def write(
        self,
        versions: Mapping[str, str],
        *,
        explicit_release: bool = False,
        always_record: bool = False,
    ) -> bool:
        """Persist ``versions``.

        When the project runs against an explicitly requested release the
        user's checked-in ledger is left alone unless ``always_record`` is
        set (as an explicit update does).

        Returns:
            ``True`` if the file was written.
        """
        if explicit_release and not always_record:
            logger.debug("Explicit release in use; not recording %s", self.path)
            return False

        safe_write_file(self.path, format_versions(versions))
        logger.debug("Recorded %d version(s) to %s", len(versions), self.path)
        return True
