"""
Custom exception hierarchy for lockstep.

All exceptions inherit from :class:`LockstepError` and carry optional
structured metadata via the ``details`` attribute for diagnostics and
logging.

A recompute that cannot materialize every resolved package is *not* an
exception: it is reported as a failed
:class:`~lockstep.models.change.MaterializationResult`.
:class:`MaterializationError` only wraps such a result for accessors that
must hand back a value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping, MutableMapping, Optional

if TYPE_CHECKING:
    from lockstep.models.change import MaterializationResult


class LockstepError(Exception):
    """Base exception for all lockstep errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


class ConfigError(LockstepError):
    """Raised when a configuration file is unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path of the offending configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class NotBoundError(LockstepError):
    """Raised when a project operation runs before a root is bound."""


class ContextMissingError(LockstepError):
    """Raised when dependencies are recomputed without an active release.

    The project state is left stale and untouched.
    """


class ResolutionError(LockstepError):
    """Raised by resolvers when the combined constraints are unsatisfiable.

    Args:
        message: Error description.
        packages: Names of the packages involved in the failure.
    """

    __slots__ = ("packages",)

    def __init__(
        self,
        message: str,
        *,
        packages: Optional[Iterable[str]] = None,
    ) -> None:
        names = sorted(packages) if packages else []
        details: MutableMapping[str, Any] = {}
        if names:
            details["packages"] = ", ".join(names)

        super().__init__(message, details)

        self.packages = names


class MaterializationError(LockstepError):
    """Raised when resolved packages could not all be put on disk.

    Args:
        result: The failed materialization result.
    """

    __slots__ = ("result",)

    def __init__(self, result: "MaterializationResult") -> None:
        super().__init__(
            "Could not install all the requested packages",
            {"missing": ", ".join(result.missing)},
        )
        self.result = result


class FileOperationError(LockstepError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/append).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class MissingIdentifierError(FileOperationError):
    """Raised when the app identifier file is absent right after writing it."""
