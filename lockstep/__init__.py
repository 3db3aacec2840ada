"""
lockstep — dependency-state coordination for source-based package projects.

lockstep tracks the packages a project explicitly requires, combines them
with the constraints of its sub-programs and of the release it runs against,
drives a constraint resolver and keeps the project's lock file in step with
the result.

Typical usage::

    from lockstep import DependencyStateManager

    manager = DependencyStateManager(
        resolver=resolver,
        package_store=store,
        release_context=releases,
    )
    manager.bind("/path/to/app")
    versions = manager.get_versions()
"""

from __future__ import annotations

from lockstep.__version__ import __version__
from lockstep.core.project import DependencyStateManager, ProjectState

__author__ = "lockstep Contributors"
__license__ = "Apache-2.0"
__description__ = "Invalidation-driven dependency state and lock file management."

__all__ = [
    "__version__",
    "DependencyStateManager",
    "ProjectState",
]
