"""
Change and materialization result models for lockstep.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class ChangeKind(Enum):
    """Classification of one package between two version maps."""

    ADDED = "added"
    UPGRADED = "upgraded"
    REMOVED = "removed"


@dataclass(frozen=True)
class ChangeEntry:
    """One reported package change.

    Attributes:
        kind: What happened to the package.
        package_name: Affected package.
        old_version: Version before the change (``None`` when added).
        new_version: Version after the change (``None`` when removed).
        update_type: For upgrades, ``major``/``minor``/``patch``/
            ``downgrade``/``update``/``unknown``.
    """

    kind: ChangeKind
    package_name: str
    old_version: Optional[str] = None
    new_version: Optional[str] = None
    update_type: Optional[str] = None

    def to_message(self) -> str:
        """Render the user-facing line for this change."""
        if self.kind is ChangeKind.REMOVED:
            return f"removed dependency on {self.package_name}"
        if self.kind is ChangeKind.UPGRADED:
            return (
                f"  upgraded {self.package_name} from version "
                f"{self.old_version} to version {self.new_version}"
            )
        return f"  added {self.package_name} at version {self.new_version}"


@dataclass
class ChangeReport:
    """Outcome of diffing two version maps.

    When ``failed`` is set, the resolver picked a version that has no
    materialized build (``failed_package`` at ``failed_version``) and
    ``entries`` only holds what was classified before the failure.
    """

    entries: List[ChangeEntry] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    failed: bool = False
    failed_package: Optional[str] = None
    failed_version: Optional[str] = None

    def of_kind(self, kind: ChangeKind) -> List[ChangeEntry]:
        return [entry for entry in self.entries if entry.kind is kind]

    @property
    def has_changes(self) -> bool:
        return bool(self.entries)

    def messages(self) -> List[str]:
        """User-facing lines, in report order."""
        return [entry.to_message() for entry in self.entries]

    def failure_message(self) -> Optional[str]:
        if not self.failed:
            return None
        return (
            f"Package {self.failed_package} has no compatible build for "
            f"version {self.failed_version}"
        )


@dataclass
class MaterializationResult:
    """Outcome of putting a resolved version map on disk.

    Attributes:
        success: Every requested package was materialized.
        downloaded: Packages (name → version) now available on disk.
        requested: The full version map that was asked for.
    """

    success: bool
    downloaded: Dict[str, str] = field(default_factory=dict)
    requested: Dict[str, str] = field(default_factory=dict)

    @property
    def missing(self) -> List[str]:
        """Names requested but not materialized, sorted."""
        return sorted(
            name
            for name, version in self.requested.items()
            if self.downloaded.get(name) != version
        )
