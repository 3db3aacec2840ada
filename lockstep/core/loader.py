"""Package loader handle.

The handle downstream package loading receives once dependencies are
fresh. It is a read-only view of one committed version map; a recompute
replaces the handle instead of mutating it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional


class PackageLoader:
    """Answers "which version of X does this project load?"."""

    def __init__(self, versions: Mapping[str, str]) -> None:
        self._versions = MappingProxyType(dict(versions))

    @property
    def versions(self) -> Mapping[str, str]:
        return self._versions

    def get_version(self, package_name: str) -> Optional[str]:
        return self._versions.get(package_name)

    def __contains__(self, package_name: object) -> bool:
        return package_name in self._versions

    def __iter__(self) -> Iterator[str]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f"PackageLoader(packages={len(self._versions)})"
