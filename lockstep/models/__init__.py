"""
Unified data model exports for lockstep.

Example:
    >>> from lockstep.models import Constraint, ChangeReport
"""

from __future__ import annotations

from lockstep.models.constraint import (
    Constraint,
    Exactness,
    parse_version_constraint,
    split_constraint,
)
from lockstep.models.change import (
    ChangeEntry,
    ChangeKind,
    ChangeReport,
    MaterializationResult,
)

__all__ = [
    "Constraint",
    "Exactness",
    "parse_version_constraint",
    "split_constraint",
    "ChangeEntry",
    "ChangeKind",
    "ChangeReport",
    "MaterializationResult",
]
