"""
Core functionality exports for lockstep.

    from lockstep.core import DependencyStateManager, ConstraintStore
"""

from __future__ import annotations

from lockstep.core.loader import PackageLoader
from lockstep.core.release_pin import ReleasePin
from lockstep.core.app_identity import AppIdentity
from lockstep.core.upgrade_ledger import UpgradeLedger
from lockstep.core.version_ledger import VersionLedger
from lockstep.core.reporter import diff_versions, print_changes
from lockstep.core.constraint_store import ConstraintStore, parse_constraint_lines
from lockstep.core.project import (
    DependencyStateManager,
    DepsState,
    ProjectPaths,
    ProjectState,
)

__all__ = [
    "AppIdentity",
    "ConstraintStore",
    "DependencyStateManager",
    "DepsState",
    "PackageLoader",
    "ProjectPaths",
    "ProjectState",
    "ReleasePin",
    "UpgradeLedger",
    "VersionLedger",
    "diff_versions",
    "parse_constraint_lines",
    "print_changes",
]
