"""
Filesystem utilities for lockstep.

Line-oriented helpers shared by every project file (constraints, versions,
release pin, identifier, upgrade ledger). Writes are atomic (temporary file
plus ``replace``) and every filesystem error except "optional file does not
exist" is normalized to ``FileOperationError``.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from lockstep.utils.logger import get_logger
from lockstep.exceptions import FileOperationError
from lockstep.constants import (
    COMMENT_CHAR,
    CONSTRAINTS_FILE,
    MAX_FILE_SIZE,
    PROJECT_METADATA_DIR,
)

logger = get_logger("filesystem")

PathLike = Union[str, Path]

_LINE_BREAK = re.compile(r"\r*\n\r*")


def trim_line(line: str) -> str:
    """Drop a trailing ``#`` comment and surrounding whitespace."""
    comment_at = line.find(COMMENT_CHAR)
    if comment_at != -1:
        line = line[:comment_at]
    return line.strip()


def split_lines(content: str) -> List[str]:
    """Split file content into lines, ignoring one terminating newline."""
    lines = _LINE_BREAK.split(content)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Read a text file, enforcing an optional size limit.

    Raises:
        FileOperationError: The file is missing, not a regular file, too
            large or unreadable.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )

    try:
        size = path.stat().st_size
        if max_size is not None and size > max_size:
            raise FileOperationError(
                f"File too large: {size} bytes (max {max_size})",
                file_path=str(path),
                operation="read",
            )
        return path.read_text(encoding=encoding)
    except FileOperationError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_text_or_none(file_path: PathLike) -> Optional[str]:
    """Return the file's content, or ``None`` when it does not exist."""
    path = Path(file_path)
    if not path.exists():
        return None
    return safe_read_file(path)


def get_lines(file_path: PathLike) -> List[str]:
    """Return the raw lines of an existing file.

    Raises:
        FileOperationError: The file does not exist or cannot be read.
    """
    return split_lines(safe_read_file(file_path))


def get_lines_or_empty(file_path: PathLike) -> List[str]:
    """Return the raw lines of a file, or ``[]`` if it does not exist."""
    content = read_text_or_none(file_path)
    if content is None:
        return []
    return split_lines(content)


def _atomic_write(target: Path, content: str) -> None:
    """Atomically write text to a file using a temporary file + replace."""
    temp_path: Optional[Path] = None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=str(target.parent),
            delete=False,
            prefix=f".{target.name}.",
            suffix=".tmp",
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())

        temp_path.replace(target)

    except OSError as exc:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
                logger.debug("Cleaned up temporary file: %s", temp_path)
            except OSError as cleanup_exc:
                logger.warning(
                    "Failed to clean up temporary file %s: %s",
                    temp_path,
                    cleanup_exc,
                )

        raise FileOperationError(
            f"Atomic write failed: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def safe_write_file(file_path: PathLike, content: str) -> None:
    """Replace a file's content atomically."""
    _atomic_write(Path(file_path), content)


def write_lines(file_path: PathLike, lines: List[str]) -> None:
    """Write ``lines`` joined by newlines, always ending with one."""
    safe_write_file(file_path, "\n".join(lines) + "\n")


def append_file(file_path: PathLike, content: str) -> None:
    """Append text to a file, creating it if needed."""
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to append to file: {exc}",
            file_path=str(path),
            operation="append",
            original_error=exc,
        ) from exc


def is_project_root(directory: PathLike) -> bool:
    """Return True if ``directory`` holds a lockstep constraints file."""
    return (Path(directory) / PROJECT_METADATA_DIR / CONSTRAINTS_FILE).is_file()


def find_project_root(start: PathLike = ".") -> Optional[Path]:
    """Walk upward from ``start`` to the nearest project root.

    Returns:
        The project root directory, or ``None`` when ``start`` is not inside
        a lockstep project.
    """
    current = Path(start).expanduser().resolve()
    for candidate in (current, *current.parents):
        if is_project_root(candidate):
            logger.debug("Found project root: %s", candidate)
            return candidate
    return None
