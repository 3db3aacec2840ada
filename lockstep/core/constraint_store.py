"""Project constraints file (``.lockstep/packages``).

Each non-blank, non-comment line is ``name`` or ``name@expression``::

    # Packages this app uses.
    standard-app-packages
    router@=1.2.0     # pinned for the release
    http

Edits keep every untouched line verbatim, comments included. Comments on
a removed line go away with the line; an edited entry is written back
without its old comment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Union

from lockstep.models.constraint import Constraint
from lockstep.utils.logger import get_logger
from lockstep.constants import CONSTRAINT_SEPARATOR
from lockstep.utils.filesystem import get_lines_or_empty, trim_line, write_lines

logger = get_logger("constraint_store")

ConstraintSet = Dict[str, Constraint]


def parse_constraint_lines(lines: Iterable[str]) -> ConstraintSet:
    """Parse constraint lines into a name → :class:`Constraint` map.

    Later lines win over earlier ones for the same package. Lines without
    a package name are ignored.
    """
    constraints: ConstraintSet = {}

    for number, raw in enumerate(lines, start=1):
        line = trim_line(raw)
        if not line:
            continue

        constraint = Constraint.parse(line)
        if not constraint.package_name:
            logger.debug("Ignoring line %d without a package name: %r", number, raw)
            continue

        constraints[constraint.package_name] = constraint

    return constraints


def _line_package(line: str) -> str:
    return trim_line(line).split(CONSTRAINT_SEPARATOR)[0].strip()


class ConstraintStore:
    """Reads and rewrites one constraints file.

    The store keeps the last loaded :data:`ConstraintSet` in
    :attr:`constraints`. Every mutating call rewrites the file and, only
    once the write succeeded, replaces :attr:`constraints` with a new set
    that it also returns. A failed write leaves the previous set intact.

    Example::

        >>> store = ConstraintStore(".lockstep/packages")
        >>> store.load()
        {'http': Constraint(package_name='http', ...)}
        >>> store.add_force(["email"])
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.constraints: ConstraintSet = {}

    def load(self) -> ConstraintSet:
        """Re-read the file; a missing file is an empty constraint set."""
        self.constraints = parse_constraint_lines(get_lines_or_empty(self.path))
        logger.debug("Loaded %d constraint(s) from %s", len(self.constraints), self.path)
        return self.constraints

    def write(self, constraints: ConstraintSet) -> None:
        """Rewrite the file canonically from ``constraints``.

        Existing comments are lost; use the edit operations to keep them.
        """
        write_lines(self.path, [constraint.to_line() for constraint in constraints.values()])
        self.constraints = dict(constraints)

    def add_force(self, names: Iterable[str]) -> ConstraintSet:
        """Append unconstrained entries for names not already present.

        No validation or resolution is performed. This is the path used by
        upgraders and throwaway apps that deliberately skip the safety
        checks of a normal add.
        """
        updated = dict(self.constraints)
        lines = get_lines_or_empty(self.path)
        for name in names:
            if name in updated:
                continue
            lines.append(name)
            updated[name] = Constraint(package_name=name)

        return self._commit(lines, updated)

    def remove_force(self, names: Iterable[str]) -> ConstraintSet:
        """Drop every line for the given packages and forget them."""
        doomed = set(names)
        updated = {
            name: constraint
            for name, constraint in self.constraints.items()
            if name not in doomed
        }

        lines = [
            line for line in get_lines_or_empty(self.path)
            if _line_package(line) not in doomed
        ]
        return self._commit(lines, updated)

    def add_constraints(self, constraints: Iterable[Constraint]) -> ConstraintSet:
        """Record constraints, replacing any existing lines for them."""
        constraints = list(constraints)
        replaced = {constraint.package_name for constraint in constraints}
        updated = dict(self.constraints)

        lines: List[str] = [
            line for line in get_lines_or_empty(self.path)
            if _line_package(line) not in replaced
        ]
        for constraint in constraints:
            lines.append(constraint.to_line())
            updated[constraint.package_name] = constraint

        return self._commit(lines, updated)

    def _commit(self, lines: List[str], updated: ConstraintSet) -> ConstraintSet:
        write_lines(self.path, lines)
        self.constraints = updated
        return updated
