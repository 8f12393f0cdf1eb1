"""Read-only inspection of the local projects directory."""

import logging
import os
from pathlib import Path

from memorybridge.models.core import EntryKind, StatusEntry, StatusReport

logger = logging.getLogger(__name__)


def inspect_status(target_root: Path) -> StatusReport:
    """Classify every entry of *target_root*.

    Symlinks are reported with their raw target and whether that target
    currently exists; plain directories are reported as local projects. Other
    entries are ignored. A missing *target_root* is not an error: the report
    comes back with ``exists=False``.

    Args:
        target_root: Local projects directory.

    Returns:
        StatusReport with entries sorted by name.
    """
    report = StatusReport(root=target_root)
    if not target_root.is_dir():
        report.exists = False
        return report

    for path in sorted(target_root.iterdir(), key=lambda p: p.name):
        if path.is_symlink():
            target = os.readlink(path)
            report.entries.append(
                StatusEntry(
                    name=path.name,
                    kind=EntryKind.SYMLINK,
                    target=target,
                    healthy=path.exists(),
                )
            )
            report.symlinks += 1
        elif path.is_dir():
            report.entries.append(StatusEntry(name=path.name, kind=EntryKind.DIRECTORY))
            report.local_dirs += 1

    logger.debug(
        "Status of %s: %d symlink(s), %d local dir(s)",
        target_root,
        report.symlinks,
        report.local_dirs,
    )
    return report
