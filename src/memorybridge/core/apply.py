"""Link reconciliation engine.

This module converges the local projects directory onto a list of discovered
mappings.
- Creates missing links, repairs links pointing elsewhere, and leaves correct
  links and real local directories untouched.
- Safe to re-run: a second run with the same inputs only skips.
- There is no rollback. Each link mutation is a single filesystem operation;
  when one fails, the mutations before it stay in place and the failure is
  raised with the mapping that caused it.
"""

import logging
import time as time_mod
from pathlib import Path
from typing import Iterable

from memorybridge.exceptions import LinkOperationError
from memorybridge.fs.operations import create_symlink, remove_symlink, replace_symlink
from memorybridge.models.core import LinkResult, LinkState, Mapping, UnlinkResult

logger = logging.getLogger(__name__)


def apply_links(
    mappings: Iterable[Mapping], target_root: Path, *, dry_run: bool = False
) -> LinkResult:
    """Create or repair the symlinks for *mappings*.

    Args:
        mappings: Mappings as returned by ``discover_mappings``.
        target_root: Local projects directory; created (with parents) if absent.
        dry_run: If True, report what would change without touching anything.

    Returns:
        LinkResult with created/updated/skipped counts.

    Raises:
        OSError: If *target_root* cannot be created.
        LinkOperationError: If creating or replacing a link fails.
    """
    start = time_mod.time()
    if not dry_run:
        target_root.mkdir(parents=True, exist_ok=True)

    result = LinkResult(dry_run=dry_run)
    for mapping in mappings:
        if mapping.state in (LinkState.LINK_CORRECT, LinkState.DIRECTORY_EXISTS):
            result.skipped += 1
            continue
        if mapping.state == LinkState.LINK_WRONG:
            action = "update"
            op = replace_symlink
        else:
            action = "create"
            op = create_symlink
        try:
            op(mapping.local_path, mapping.source_path, dry_run=dry_run)
        except OSError as e:
            logger.error("Failed to %s link for %s: %s", action, mapping.local_name, e)
            raise LinkOperationError(mapping, action, e) from e
        if action == "update":
            result.updated += 1
        else:
            result.created += 1

    result.duration = time_mod.time() - start
    logger.info(
        "Link run: %d created, %d updated, %d skipped",
        result.created,
        result.updated,
        result.skipped,
    )
    return result


def remove_links(mappings: Iterable[Mapping], *, dry_run: bool = False) -> UnlinkResult:
    """Remove the symlinks of *mappings* that currently are symlinks.

    Mappings in ``MISSING`` or ``DIRECTORY_EXISTS`` state are left alone.

    Raises:
        LinkOperationError: If removing a link fails.
    """
    result = UnlinkResult(dry_run=dry_run)
    for mapping in mappings:
        if not mapping.is_link:
            continue
        try:
            remove_symlink(mapping.local_path, dry_run=dry_run)
        except OSError as e:
            logger.error("Failed to remove link %s: %s", mapping.local_name, e)
            raise LinkOperationError(mapping, "remove", e) from e
        result.removed += 1
    logger.info("Unlink run: %d removed", result.removed)
    return result


__all__ = ["apply_links", "remove_links", "LinkResult", "UnlinkResult"]
