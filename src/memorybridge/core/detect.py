"""Discovery of remote ``.claude/projects`` directories on mounted filesystems.

Looks a few levels below the usual mount roots (``/mnt/wsl2``,
``/mnt/disk/home/user``, ``/run/media/user/disk`` ...) for a ``.claude/projects``
directory containing encoded project entries. Unreadable candidates are
skipped; a slow mount simply makes the scan slow.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from memorybridge.core.codec import is_encoded_absolute
from memorybridge.models.core import DetectedSource

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_ROOTS = ("/mnt", "/media", "/run/media", "/Volumes")
MAX_DEPTH = 3


def _safe_subdirs(path: Path) -> Iterator[Path]:
    try:
        children = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Skipping unreadable %s: %s", path, e)
        return
    for child in children:
        try:
            if child.is_dir() and not child.is_symlink():
                yield child
        except OSError:
            continue


def check_candidate(base: Path, exclude: Optional[Path] = None) -> Optional[DetectedSource]:
    """Return a DetectedSource if *base* holds a usable ``.claude/projects``.

    Args:
        base: Directory that might contain ``.claude``.
        exclude: Projects directory to ignore (normally the local one).
    """
    projects = base / ".claude" / "projects"
    try:
        if not projects.is_dir():
            return None
        if exclude is not None and os.path.realpath(projects) == os.path.realpath(
            exclude
        ):
            return None
        count = len([p for p in projects.iterdir() if is_encoded_absolute(p.name)])
    except OSError as e:
        logger.debug("Skipping candidate %s: %s", projects, e)
        return None
    if count == 0:
        return None
    return DetectedSource(
        projects_path=projects,
        local_home=Path(os.path.realpath(base)),
        project_count=count,
    )


def scan_for_sources(
    search_roots: Sequence[str] = DEFAULT_SEARCH_ROOTS,
    exclude: Optional[Path] = None,
    max_depth: int = MAX_DEPTH,
) -> List[DetectedSource]:
    """Scan *search_roots* for remote Claude installations.

    Args:
        search_roots: Mount roots to search.
        exclude: Local projects directory, never reported.
        max_depth: How many directory levels below each root to check.

    Returns:
        Detected sources in scan order.
    """
    results: List[DetectedSource] = []

    def walk(path: Path, depth: int) -> None:
        for child in _safe_subdirs(path):
            found = check_candidate(child, exclude)
            if found is not None:
                logger.debug("Found remote projects at %s", found.projects_path)
                results.append(found)
            if depth < max_depth:
                walk(child, depth + 1)

    for root in search_roots:
        root_path = Path(root)
        if not root_path.is_dir():
            continue
        walk(root_path, 1)
    return results
