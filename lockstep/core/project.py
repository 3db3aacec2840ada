"""Dependency state of a project.

:class:`DependencyStateManager` owns one :class:`ProjectState` at a time
and keeps its derived values (combined constraints, resolved versions and
the package loader) in step with the project's files.

Derived values are computed lazily. Editing constraints or binding a new
root only marks the state :attr:`DepsState.STALE`; the next accessor runs
one full recompute:

1. **Combine** the project's own constraints, the dependencies of every
   sub-program and the packages of the current release.
2. **Resolve** them with the external resolver, seeding it with the
   previously committed versions.
3. **Materialize** every chosen version through the package store.
4. **Commit** the new versions to the ledger, but only if step 3
   succeeded for every package. Otherwise nothing in memory or on disk
   changes and the state stays stale.

Typical usage::

    manager = DependencyStateManager(
        resolver=resolver,
        package_store=store,
        release_context=releases,
        program_source=programs,
        catalog=catalog,
    )
    manager.bind("/path/to/app")

    manager.force_edit_packages(["http"], "add")
    result = manager.ensure_up_to_date()
    if not result.success:
        print("missing:", result.missing)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Union

from lockstep.core.loader import PackageLoader
from lockstep.core.release_pin import ReleasePin
from lockstep.core.app_identity import AppIdentity
from lockstep.core.upgrade_ledger import UpgradeLedger
from lockstep.core.version_ledger import VersionLedger
from lockstep.core.reporter import diff_versions, print_changes
from lockstep.core.constraint_store import ConstraintSet, ConstraintStore
from lockstep.core.interfaces import (
    Catalog,
    NoPrograms,
    PackageStore,
    ProgramSource,
    Release,
    ReleaseContext,
    Resolver,
)
from lockstep.models.constraint import Constraint
from lockstep.models.change import ChangeReport, MaterializationResult
from lockstep.exceptions import (
    ContextMissingError,
    LockstepError,
    MaterializationError,
    NotBoundError,
)
from lockstep.constants import (
    BROWSER_ARCH,
    CONSTRAINTS_FILE,
    CONTROL_PACKAGE,
    DEFAULT_PROGRAMS_DIR,
    FINISHED_UPGRADERS_FILE,
    IDENTIFIER_FILE,
    PROJECT_METADATA_DIR,
    RELEASE_FILE,
    VERSIONS_FILE,
)
from lockstep.utils import archinfo
from lockstep.utils.logger import get_logger

logger = get_logger("project")

PathLike = Union[str, Path]

# Public API
__all__ = [
    "DependencyStateManager",
    "DepsState",
    "ProjectPaths",
    "ProjectState",
]


class DepsState(Enum):
    """Whether a project's derived dependency values can be trusted."""

    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class ProjectPaths:
    """Locations of every project file, derived from the root directory."""

    root_dir: Path
    programs_dir_name: str = DEFAULT_PROGRAMS_DIR

    @property
    def metadata_dir(self) -> Path:
        return self.root_dir / PROJECT_METADATA_DIR

    @property
    def constraints_file(self) -> Path:
        return self.metadata_dir / CONSTRAINTS_FILE

    @property
    def versions_file(self) -> Path:
        return self.metadata_dir / VERSIONS_FILE

    @property
    def release_file(self) -> Path:
        return self.metadata_dir / RELEASE_FILE

    @property
    def identifier_file(self) -> Path:
        return self.metadata_dir / IDENTIFIER_FILE

    @property
    def finished_upgraders_file(self) -> Path:
        return self.metadata_dir / FINISHED_UPGRADERS_FILE

    @property
    def programs_dir(self) -> Path:
        return self.root_dir / self.programs_dir_name


@dataclass
class ProjectState:
    """Everything known about one bound project.

    Attributes:
        root_dir: Project root directory.
        constraints: The project's own constraints, always current.
        combined_constraints: Everything fed to the resolver on the last
            successful recompute.
        resolved_versions: Last committed version map. Replaced as a
            whole, never edited in place.
        loader: Package loader over ``resolved_versions``.
        app_id: Opaque project identifier.
        deps_state: Whether the derived values above are current.
        viable_as_solution_seed: Whether this project's ledger may be used
            as a prior solution by the resolver.
    """

    root_dir: Path
    constraints: ConstraintSet = field(default_factory=dict)
    combined_constraints: Optional[List[Constraint]] = None
    resolved_versions: Optional[Dict[str, str]] = None
    loader: Optional[PackageLoader] = None
    app_id: Optional[str] = None
    deps_state: DepsState = DepsState.STALE
    viable_as_solution_seed: bool = False

    @property
    def stale(self) -> bool:
        return self.deps_state is DepsState.STALE

    def invalidate(self) -> None:
        self.deps_state = DepsState.STALE


class DependencyStateManager:
    """Coordinates a project's constraints, resolution and lock file.

    Args:
        resolver: Picks concrete versions for the combined constraints.
        package_store: Puts package builds on disk.
        release_context: Supplies the release currently in use.
        program_source: Reports the sub-programs of a project.
        catalog: Global package catalog (consulted for the control package).
        host_arch: Host architecture to materialize for; detected when
            omitted.
        programs_dir: Name of the sub-program directory under the root.
        muted: Suppress non-error output.
    """

    def __init__(
        self,
        *,
        resolver: Optional[Resolver] = None,
        package_store: Optional[PackageStore] = None,
        release_context: Optional[ReleaseContext] = None,
        program_source: Optional[ProgramSource] = None,
        catalog: Optional[Catalog] = None,
        host_arch: Optional[str] = None,
        programs_dir: str = DEFAULT_PROGRAMS_DIR,
        muted: bool = False,
    ) -> None:
        self.resolver = resolver
        self.package_store = package_store
        self.release_context = release_context
        self.program_source: ProgramSource = program_source or NoPrograms()
        self.catalog = catalog
        self.host_arch = host_arch or archinfo.host()
        self.programs_dir_name = programs_dir
        self.muted = muted

        self.state: Optional[ProjectState] = None
        self.paths: Optional[ProjectPaths] = None
        self._constraint_store: Optional[ConstraintStore] = None
        self._version_ledger: Optional[VersionLedger] = None
        self._upgrade_ledger: Optional[UpgradeLedger] = None
        self._release_pin: Optional[ReleasePin] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind(self, root_dir: PathLike) -> ProjectState:
        """Make ``root_dir`` the current project and load its files.

        Reads the constraints and the previously committed versions (the
        resolver's seed), makes sure the project has an identifier, and
        leaves every derived value stale.
        """
        paths = ProjectPaths(Path(root_dir), self.programs_dir_name)
        logger.debug("Binding project at %s", paths.root_dir)

        constraint_store = ConstraintStore(paths.constraints_file)
        version_ledger = VersionLedger(paths.versions_file)

        state = ProjectState(
            root_dir=paths.root_dir,
            constraints=constraint_store.load(),
            resolved_versions=version_ledger.read(),
            app_id=AppIdentity(paths.identifier_file).ensure(),
        )
        state.viable_as_solution_seed = True

        self.paths = paths
        self.state = state
        self._constraint_store = constraint_store
        self._version_ledger = version_ledger
        self._upgrade_ledger = UpgradeLedger(paths.finished_upgraders_file)
        self._release_pin = ReleasePin(paths.release_file)
        return state

    def rebind(self, root_dir: PathLike) -> ProjectState:
        """Replace the current project with the one at ``root_dir``."""
        self.discard()
        return self.bind(root_dir)

    def reload(self) -> ProjectState:
        """Re-read every project file, e.g. after the app restarts."""
        return self.rebind(self._require_state().root_dir)

    def discard(self) -> None:
        """Forget the current project."""
        self.state = None
        self.paths = None
        self._constraint_store = None
        self._version_ledger = None
        self._upgrade_ledger = None
        self._release_pin = None

    def set_muted(self, muted: bool) -> None:
        """Muted projects print nothing but errors."""
        self.muted = muted

    def _require_state(self) -> ProjectState:
        if self.state is None:
            raise NotBoundError("No project root directory has been set")
        return self.state

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def ensure_up_to_date(self, *, always_record: bool = False) -> MaterializationResult:
        """Recompute derived dependency values if they are stale.

        This WILL REWRITE THE VERSIONS FILE when the resolution changed.

        Args:
            always_record: Write the ledger even if the versions did not
                change or an explicit release is in use.

        Returns:
            The materialization result. On failure nothing was committed
            and the state is still stale.

        Raises:
            NotBoundError: No project is bound.
            ContextMissingError: No release is available yet.
            ResolutionError: The resolver could not satisfy the constraints.
        """
        state = self._require_state()
        if not state.stale:
            versions = dict(state.resolved_versions or {})
            return MaterializationResult(True, downloaded=versions, requested=versions)

        release = self._current_release()

        # A project must not seed its own recompute.
        state.viable_as_solution_seed = False
        try:
            release_packages = release.packages if release.is_proper_release else {}
            combined = self.calculate_combined_constraints(release_packages)

            resolver = self._require(self.resolver, "resolver")
            new_versions = resolver.resolve(
                combined,
                previous_solution=state.resolved_versions,
                ignore_project_deps=True,
            )
            logger.debug("Resolver picked %d package(s)", len(new_versions))

            old_versions = dict(state.resolved_versions or {})
            result = self.set_versions(new_versions, always_record=always_record)
            self.show_package_changes(old_versions, new_versions, available=result.downloaded)

            if not result.success:
                logger.warning(
                    "Could not install all the requested packages: %s",
                    ", ".join(result.missing),
                )
                return result

            state.combined_constraints = combined
            state.loader = PackageLoader(new_versions)
            state.deps_state = DepsState.FRESH
            return result
        finally:
            state.viable_as_solution_seed = True

    def _current_release(self) -> Release:
        release = self.release_context.current if self.release_context else None
        if release is None:
            raise ContextMissingError(
                "Need to compute the release before computing project dependencies"
            )
        return release

    @staticmethod
    def _require(collaborator, role: str):
        if collaborator is None:
            raise LockstepError(f"No {role} configured for this project")
        return collaborator

    def calculate_combined_constraints(
        self,
        release_packages: Mapping[str, str],
    ) -> List[Constraint]:
        """Return every constraint on the project.

        Combines the project's own constraints, those of its sub-programs
        and one weak exact constraint per release package. This has no
        side effects.
        """
        state = self._require_state()
        combined: List[Constraint] = list(state.constraints.values())

        for program in self.program_source.discover(self.get_programs_directory()):
            logger.debug("Initializing program %s", program.name)
            for dependency in program.dependencies:
                combined.append(
                    Constraint(package_name=dependency.package, expression=dependency.expression)
                )

        for name, version in release_packages.items():
            combined.append(Constraint.exact(name, version, weak=True))

        # Every app gets the control package when the catalog has one,
        # whether or not it deploys anywhere that needs it.
        if (
            CONTROL_PACKAGE not in state.constraints
            and self.catalog is not None
            and self.catalog.has_package(CONTROL_PACKAGE)
        ):
            combined.append(Constraint(package_name=CONTROL_PACKAGE))

        return combined

    def materialize(self, versions: Mapping[str, str]) -> Dict[str, str]:
        """Put a build of every package on disk for the browser and the host.

        A package that cannot be materialized is logged and left out; it
        does not stop the others.

        Returns:
            The subset of ``versions`` now available on disk.
        """
        store = self._require(self.package_store, "package store")
        architectures = [BROWSER_ARCH, self.host_arch]
        downloaded: Dict[str, str] = {}

        for name, version in versions.items():
            try:
                available = store.ensure_available(name, version, architectures)
            except Exception as exc:
                logger.error("Failed to materialize %s@%s: %s", name, version, exc)
                continue

            if available:
                downloaded[name] = version
            else:
                logger.error("No build of %s@%s for %s", name, version, ", ".join(architectures))

        return downloaded

    def set_versions(
        self,
        new_versions: Mapping[str, str],
        *,
        always_record: bool = False,
    ) -> MaterializationResult:
        """Materialize ``new_versions`` and, if all succeeded, commit them.

        The ledger is only rewritten when the versions changed, unless
        ``always_record`` is set (an explicit update always records).
        """
        state = self._require_state()
        requested = dict(new_versions)
        downloaded = self.materialize(requested)

        if len(downloaded) != len(requested):
            return MaterializationResult(False, downloaded=downloaded, requested=requested)

        if always_record or requested != state.resolved_versions:
            # Ledger first: a failed write must not leave memory ahead of disk.
            self._record_versions(requested, always_record=always_record)
            state.resolved_versions = requested

        return MaterializationResult(True, downloaded=downloaded, requested=requested)

    def _record_versions(
        self,
        versions: Mapping[str, str],
        *,
        always_record: bool = False,
    ) -> bool:
        explicit = bool(self.release_context and self.release_context.explicit)
        return self._version_ledger.write(
            versions,
            explicit_release=explicit,
            always_record=always_record,
        )

    def show_package_changes(
        self,
        old_versions: Mapping[str, str],
        new_versions: Mapping[str, str],
        *,
        skip: Optional[Iterable[str]] = None,
        available: Optional[Mapping[str, str]] = None,
    ) -> ChangeReport:
        """Diff two version maps and tell the user what changed."""
        report = diff_versions(old_versions, new_versions, skip=skip, available=available)
        print_changes(report, muted=self.muted)
        return report

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_constraints(self) -> ConstraintSet:
        """The project's own constraints; never triggers a recompute."""
        return dict(self._require_state().constraints)

    def get_combined_constraints(self) -> List[Constraint]:
        """All constraints on the project, using the current release."""
        self._ensure_or_raise()
        return list(self.state.combined_constraints or [])

    def get_versions(self) -> Dict[str, str]:
        """Resolved versions, recomputing (and rewriting the ledger) if stale."""
        self._ensure_or_raise()
        return dict(self.state.resolved_versions or {})

    def get_package_loader(self) -> PackageLoader:
        """Loader pre-loaded with the project's transitive dependencies."""
        self._ensure_or_raise()
        return self.state.loader

    def _ensure_or_raise(self) -> None:
        result = self.ensure_up_to_date()
        if not result.success:
            raise MaterializationError(result)

    def get_programs_directory(self) -> Path:
        return self._require_paths().programs_dir

    def get_programs_subdirs(self) -> List[str]:
        """Names of the non-hidden sub-directories of the programs directory."""
        programs_dir = self.get_programs_directory()
        if not programs_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in programs_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )

    def _require_paths(self) -> ProjectPaths:
        self._require_state()
        return self.paths

    # ------------------------------------------------------------------
    # Modifications
    # ------------------------------------------------------------------

    def force_edit_packages(self, names: Iterable[str], operation: str) -> ConstraintSet:
        """Add or remove packages without resolving anything.

        THIS AVOIDS THE NORMAL SAFETY CHECKS OF AN ADD. Upgraders and
        throwaway test apps use it to edit constraints unconditionally;
        the next accessor recomputes everything.

        Args:
            names: Package names to edit.
            operation: ``"add"`` or ``"remove"``.
        """
        state = self._require_state()
        if operation == "add":
            constraints = self._constraint_store.add_force(names)
        elif operation == "remove":
            constraints = self._constraint_store.remove_force(names)
        else:
            raise ValueError(f"Unknown constraint operation: {operation!r}")

        state.constraints = constraints
        state.invalidate()
        return constraints

    def remove_packages(self, names: Iterable[str]) -> MaterializationResult:
        """Remove packages, recompute, and record the result.

        Removing packages should not fail resolution; a materialization
        shortfall is still reported and leaves the ledger alone.
        """
        state = self._require_state()
        state.constraints = self._constraint_store.remove_force(names)
        state.invalidate()

        result = self.ensure_up_to_date()
        if result.success:
            self._record_versions(state.resolved_versions or {})
        return result

    def add_packages(
        self,
        more_deps: Iterable[Constraint],
        new_versions: Mapping[str, str],
    ) -> Dict[str, str]:
        """Adopt an already-resolved version map along with new constraints.

        ``new_versions`` must already satisfy the full set of constraints
        including ``more_deps``; the resolver is not run. Nothing is
        recorded unless every package in ``new_versions`` materializes.

        Returns:
            Packages available on disk. If this lacks any key of
            ``new_versions`` the operation did not happen.
        """
        state = self._require_state()
        more_deps = list(more_deps)
        downloaded = self.materialize(new_versions)
        if len(downloaded) != len(new_versions):
            return downloaded

        state.constraints = self._constraint_store.add_constraints(more_deps)
        state.invalidate()

        committed = dict(new_versions)
        self._record_versions(committed)
        state.resolved_versions = committed
        return downloaded

    # ------------------------------------------------------------------
    # Release pin, identifier and upgraders
    # ------------------------------------------------------------------

    def get_release_pin(self) -> Optional[str]:
        """The release this project is pinned to (see :class:`ReleasePin`)."""
        self._require_state()
        return self._release_pin.read()

    def write_release_pin(self, release: str) -> None:
        """Pin the project to ``release`` (``"none"`` for no release)."""
        self._require_state()
        self._release_pin.write(release)

    def get_app_identifier(self) -> str:
        return self._require_state().app_id

    def get_finished_upgraders(self) -> List[str]:
        self._require_state()
        return self._upgrade_ledger.finished()

    def has_run_upgrader(self, upgrader: str) -> bool:
        self._require_state()
        return self._upgrade_ledger.has_run(upgrader)

    def append_finished_upgrader(self, upgrader: str) -> None:
        self._require_state()
        self._upgrade_ledger.record_run(upgrader)
