"""Mapping discovery.

Pairs every remote project entry whose name starts with the encoded remote
prefix with the local entry name it should have, and classifies what currently
sits at that local location. Nothing is cached: each call re-derives the full
picture from the filesystem.
"""

import logging
import os
from pathlib import Path
from typing import List

from memorybridge.exceptions import SourceNotFoundError
from memorybridge.models.core import LinkState, Mapping, PrefixMap

logger = logging.getLogger(__name__)


def classify_local_state(local_path: Path, source_path: Path) -> LinkState:
    """Classify the entry at *local_path* relative to *source_path*.

    A symlink counts as correct when its fully resolved target is the resolved
    source path; any other symlink (including a dangling one) is wrong. Any
    non-symlink is treated as real local data. Inspection errors fall back to
    ``MISSING`` so the caller is offered a (non-destructive) create.

    Args:
        local_path: Location under the local projects directory.
        source_path: Remote project entry the link should point to.

    Returns:
        The classified LinkState.
    """
    try:
        if not os.path.lexists(local_path):
            return LinkState.MISSING
        if not local_path.is_symlink():
            return LinkState.DIRECTORY_EXISTS
        resolved = Path(os.path.realpath(local_path))
        expected = Path(os.path.realpath(source_path))
    except OSError as e:
        logger.debug("Cannot inspect %s, treating as missing: %s", local_path, e)
        return LinkState.MISSING
    if resolved == expected:
        return LinkState.LINK_CORRECT
    return LinkState.LINK_WRONG


def _is_candidate(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink() or entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def discover_mappings(
    source_dir: Path, prefix_map: PrefixMap, target_root: Path
) -> List[Mapping]:
    """Discover all remote entries covered by *prefix_map*.

    Args:
        source_dir: Remote projects directory (e.g. a mounted
            ``.../.claude/projects``).
        prefix_map: Remote -> local prefix rewrite rule.
        target_root: Local projects directory the links live in.

    Returns:
        Mappings in directory enumeration order. The order is platform
        defined; sort by ``source_name`` when determinism matters.

    Raises:
        SourceNotFoundError: If *source_dir* does not exist or is not a
            directory. No partial result is returned.
    """
    if not source_dir.is_dir():
        raise SourceNotFoundError(source_dir)

    source_dir = source_dir.absolute()
    target_root = target_root.absolute()

    mappings: List[Mapping] = []
    with os.scandir(source_dir) as entries:
        for entry in entries:
            if not _is_candidate(entry):
                continue
            local_name = prefix_map.rewrite(entry.name)
            if local_name is None:
                continue
            source_path = source_dir / entry.name
            local_path = target_root / local_name
            mappings.append(
                Mapping(
                    source_name=entry.name,
                    source_path=source_path,
                    local_name=local_name,
                    local_path=local_path,
                    state=classify_local_state(local_path, source_path),
                )
            )

    logger.debug(
        "Discovered %d mapping(s) in %s for %s",
        len(mappings),
        source_dir,
        prefix_map.remote_encoded,
    )
    return mappings
