"""Upgrade ledger (``.lockstep/finished-upgraders``).

Append-only list of one-time project migrations that have already run.
Callers check :meth:`UpgradeLedger.has_run` before recording; the ledger
itself does not deduplicate.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from lockstep.utils.logger import get_logger
from lockstep.constants import FINISHED_UPGRADERS_HEADER
from lockstep.utils.filesystem import (
    append_file,
    get_lines_or_empty,
    read_text_or_none,
    trim_line,
)

logger = get_logger("upgrade_ledger")


class UpgradeLedger:
    """Tracks which upgraders a project has already applied."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def finished(self) -> List[str]:
        """Upgrader identifiers in the order they were recorded."""
        return [
            line for line in (trim_line(raw) for raw in get_lines_or_empty(self.path))
            if line
        ]

    def has_run(self, upgrader: str) -> bool:
        return upgrader in self.finished()

    def record_run(self, upgrader: str) -> None:
        """Append ``upgrader`` to the ledger.

        A new ledger starts with an explanatory header, and an unterminated
        last line is terminated before appending.
        """
        current = read_text_or_none(self.path)

        text = ""
        if current is None:
            text = FINISHED_UPGRADERS_HEADER
        elif current and not current.endswith("\n"):
            text = "\n"

        append_file(self.path, f"{text}{upgrader}\n")
        logger.debug("Recorded upgrader %s in %s", upgrader, self.path)
