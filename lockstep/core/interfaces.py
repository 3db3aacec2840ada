"""Collaborator interfaces consumed by the dependency-state manager.

lockstep does not solve constraints, download packages, parse program
sources or resolve release descriptors. It talks to those subsystems
through the protocols below; any object with matching methods works.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from lockstep.models.constraint import Constraint


@dataclass(frozen=True)
class Release:
    """A release the tool is running against.

    Attributes:
        name: Release identifier, e.g. ``"LOCKSTEP@1.0"``.
        is_proper_release: ``False`` for development checkouts, which carry
            no package manifest.
        packages: Package name → version shipped with the release.
    """

    name: str
    is_proper_release: bool = True
    packages: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProgramDependency:
    package: str
    expression: Optional[str] = None


@dataclass(frozen=True)
class ProgramInfo:
    """A sub-program found under the project's programs directory."""

    name: str
    dependencies: List[ProgramDependency] = field(default_factory=list)


@runtime_checkable
class Resolver(Protocol):
    def resolve(
        self,
        constraints: Sequence[Constraint],
        previous_solution: Optional[Mapping[str, str]],
        ignore_project_deps: bool,
    ) -> Dict[str, str]:
        """Pick one version per package satisfying ``constraints``.

        Raises:
            ResolutionError: The constraints cannot be satisfied.
        """
        ...


@runtime_checkable
class PackageStore(Protocol):
    def ensure_available(
        self,
        name: str,
        version: str,
        architectures: Sequence[str],
    ) -> bool:
        """Make sure builds of ``name@version`` exist for ``architectures``.

        Returns ``False`` (or raises) when no suitable build can be had.
        """
        ...


@runtime_checkable
class ReleaseContext(Protocol):
    @property
    def current(self) -> Optional[Release]:
        """The release in use, or ``None`` before one is determined."""
        ...

    @property
    def explicit(self) -> bool:
        """Whether the user asked for the current release explicitly."""
        ...


@runtime_checkable
class ProgramSource(Protocol):
    def discover(self, programs_dir: Path) -> List[ProgramInfo]:
        ...


@runtime_checkable
class Catalog(Protocol):
    def has_package(self, name: str) -> bool:
        ...


@dataclass
class StaticReleaseContext:
    """A :class:`ReleaseContext` fixed at construction time."""

    current: Optional[Release] = None
    explicit: bool = False


class NoPrograms:
    """A :class:`ProgramSource` for projects without sub-programs."""

    def discover(self, programs_dir: Path) -> List[ProgramInfo]:
        return []
