"""Change reporting between two resolved version maps.

:func:`diff_versions` is pure; :func:`print_changes` is the optional side
channel that shows the result to the user.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from lockstep.utils.logger import get_logger
from lockstep.utils.version_utils import get_update_type
from lockstep.utils.console import print_error, print_message
from lockstep.models.change import ChangeEntry, ChangeKind, ChangeReport

logger = get_logger("reporter")


def diff_versions(
    old: Mapping[str, str],
    new: Mapping[str, str],
    *,
    skip: Optional[Iterable[str]] = None,
    available: Optional[Mapping[str, str]] = None,
) -> ChangeReport:
    """Classify every package between ``old`` and ``new``.

    Removals come first (in ``old`` order), then additions and upgrades
    (in ``new`` order).

    Args:
        old: Previously committed versions.
        new: Newly resolved versions.
        skip: Packages the caller reports separately. They are left out of
            the entries but still checked against ``available``.
        available: Versions actually materialized on disk. A changed
            package missing here fails the whole report.

    Example::

        >>> report = diff_versions({"a": "1", "b": "1"}, {"a": "2", "c": "1"})
        >>> report.messages()
        ['removed dependency on b', '  upgraded a from version 1 to version 2',
         '  added c at version 1']
    """
    skipped = set(skip or ())
    report = ChangeReport()

    for name, version in old.items():
        if name in new or name in skipped:
            continue
        report.entries.append(
            ChangeEntry(ChangeKind.REMOVED, name, old_version=version)
        )

    for name, version in new.items():
        previous = old.get(name)
        if name in old and previous == version:
            report.unchanged.append(name)
            continue

        if available is not None and available.get(name) != version:
            report.failed = True
            report.failed_package = name
            report.failed_version = version
            break

        if name in skipped:
            continue

        if name in old:
            report.entries.append(
                ChangeEntry(
                    ChangeKind.UPGRADED,
                    name,
                    old_version=previous,
                    new_version=version,
                    update_type=get_update_type(previous, version),
                )
            )
        else:
            report.entries.append(
                ChangeEntry(ChangeKind.ADDED, name, new_version=version)
            )

    return report


def print_changes(report: ChangeReport, *, muted: bool = False) -> int:
    """Show a change report.

    Nothing but the failure line is printed for a failed report, so the
    user never sees a partial list of changes that were not applied.

    Returns:
        ``0`` if the report succeeded, ``1`` if it failed.
    """
    if report.failed:
        message = report.failure_message()
        logger.debug("Change report failed: %s", message)
        print_error(message)
        return 1

    if not muted:
        for message in report.messages():
            print_message(message)
    return 0
