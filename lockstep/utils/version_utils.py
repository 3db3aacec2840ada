"""
Version comparison utilities for lockstep.

Used by the change reporter to label upgrades. Versions that are not
PEP 440 compatible are reported as ``"unknown"`` rather than rejected:
the resolver, not lockstep, owns version semantics.
"""

from __future__ import annotations

from typing import Optional, Tuple

from packaging.version import InvalidVersion, Version, parse


def get_update_type(
    current_version: Optional[str],
    target_version: Optional[str],
) -> str:
    """Classify the change from ``current_version`` to ``target_version``.

    Returns:
        ``"new"``, ``"same"``, ``"downgrade"``, ``"major"``, ``"minor"``,
        ``"patch"``, ``"update"`` (pre-release or metadata-only change) or
        ``"unknown"``.

    Examples:
        >>> get_update_type("1.0.0", "2.0.0")
        'major'
        >>> get_update_type(None, "1.0.0")
        'new'
        >>> get_update_type("1.0.0", "1.0.0_1")
        'unknown'
    """
    if target_version is None:
        return "unknown"

    if current_version is None:
        return "new"

    try:
        current = _parse_version(current_version)
        target = _parse_version(target_version)
    except InvalidVersion:
        return "unknown"

    if target == current:
        return "same"

    if target < current:
        return "downgrade"

    return _classify_upgrade(current, target)


def _parse_version(value: str) -> Version:
    """Parse a version string into a PEP 440 Version object."""
    parsed = parse(value)
    if not isinstance(parsed, Version):
        raise InvalidVersion(value)
    return parsed


def _classify_upgrade(current: Version, target: Version) -> str:
    current_release = _normalize_release(current)
    target_release = _normalize_release(target)

    for label, old, new in zip(("major", "minor", "patch"), current_release, target_release):
        if old != new:
            return label

    return "update"


def _normalize_release(version: Version) -> Tuple[int, int, int]:
    """Pad or truncate a release segment to (major, minor, patch)."""
    padded = tuple(version.release) + (0, 0, 0)
    return padded[0], padded[1], padded[2]
