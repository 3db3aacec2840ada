"""Release pin (``.lockstep/release``).

Records the release a project is locked to. This is not the release the
tool happens to be running; see
:class:`~lockstep.core.interfaces.ReleaseContext` for that.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from lockstep.utils.filesystem import get_lines_or_empty, safe_write_file, trim_line


class ReleasePin:
    """Reads and writes a project's release-pin file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        """Return the pinned release.

        Returns:
            ``None`` if the file does not exist, ``""`` if it exists but has
            no lines, otherwise its first line without comments. A project
            created from a checkout is pinned to ``"none"``.
        """
        if not self.path.exists():
            return None

        lines = get_lines_or_empty(self.path)
        if not lines:
            return ""
        return trim_line(lines[0])

    def write(self, release: str) -> None:
        safe_write_file(self.path, f"{release}\n")
