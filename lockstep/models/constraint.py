"""
Constraint data model for lockstep.

A constraint names a package and optionally restricts the versions the
resolver may pick for it. Expressions use the package manager's own
syntax: ``1.2.0`` means "compatible with 1.2.0" and ``=1.2.0`` means
"exactly 1.2.0".
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple

from lockstep.constants import CONSTRAINT_SEPARATOR


class Exactness(Enum):
    """How strictly a constraint's version must be honoured."""

    ANY_REASONABLE = "any-reasonable"
    COMPATIBLE_WITH = "compatible-with"
    EXACTLY = "exactly"


def parse_version_constraint(expression: Optional[str]) -> Tuple[Optional[str], Exactness]:
    """Split a constraint expression into its version and exactness.

    Examples:
        >>> parse_version_constraint(None)
        (None, <Exactness.ANY_REASONABLE: 'any-reasonable'>)
        >>> parse_version_constraint("=1.0.0")
        ('1.0.0', <Exactness.EXACTLY: 'exactly'>)
    """
    if not expression:
        return None, Exactness.ANY_REASONABLE
    if expression.startswith("="):
        return expression[1:], Exactness.EXACTLY
    return expression, Exactness.COMPATIBLE_WITH


def split_constraint(line: str) -> Tuple[str, Optional[str]]:
    """Split a trimmed ``name[@expression]`` line.

    An empty expression (``name@``) counts as no expression.
    """
    name, _, expression = line.partition(CONSTRAINT_SEPARATOR)
    return name.strip(), expression.strip() or None


@dataclass(frozen=True)
class Constraint:
    """One package constraint fed to the resolver.

    Attributes:
        package_name: Name of the constrained package.
        expression: Raw version expression, or ``None`` when unconstrained.
        weak: Only steer the resolver; never force the package in or
            cause a conflict.
        exactness: Parsed from ``expression`` unless given explicitly.
    """

    package_name: str
    expression: Optional[str] = None
    weak: bool = False
    exactness: Optional[Exactness] = None

    def __post_init__(self) -> None:
        if self.exactness is None:
            _, exactness = parse_version_constraint(self.expression)
            object.__setattr__(self, "exactness", exactness)

    @classmethod
    def parse(cls, line: str) -> "Constraint":
        """Build a constraint from a trimmed ``name[@expression]`` line."""
        name, expression = split_constraint(line)
        return cls(package_name=name, expression=expression)

    @classmethod
    def exact(cls, package_name: str, version: str, *, weak: bool = False) -> "Constraint":
        """Build an exact-version constraint."""
        return cls(
            package_name=package_name,
            expression=f"={version}",
            weak=weak,
            exactness=Exactness.EXACTLY,
        )

    @property
    def version(self) -> Optional[str]:
        """The bare version named by the expression, if any."""
        version, _ = parse_version_constraint(self.expression)
        return version

    @property
    def is_unconstrained(self) -> bool:
        return self.expression is None

    def to_line(self) -> str:
        """Render the constraint as a constraints-file line."""
        if self.expression is None:
            return self.package_name
        return f"{self.package_name}{CONSTRAINT_SEPARATOR}{self.expression}"

    def __str__(self) -> str:
        return self.to_line()
