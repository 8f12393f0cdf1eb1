"""Symlink operations for memorybridge.

Provides the individual filesystem mutations that underpin link/unlink:
create a link, replace a link atomically, remove a link. Each helper supports
dry-run and refuses to touch anything that is not a symlink, so real project
data can never be overwritten or deleted.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_TMP_SUFFIX = ".memorybridge-tmp"


def _dry_run(msg: str) -> None:
    # The CLI renderer reports dry-run outcomes; here they only go to the log.
    logger.info("[dry run] %s", msg)


def create_symlink(link: Path, target: Path, *, dry_run: bool = False) -> None:
    """Create the symlink *link* pointing at *target*.

    Args:
        link: Location of the new symlink.
        target: Path the link should point to.
        dry_run: If True, log intended action and do nothing.

    Raises:
        FileExistsError: If anything already exists at *link*.
        OSError: For other filesystem errors (e.g. permission denied).

    Example:
        >>> from pathlib import Path
        >>> from memorybridge.fs.operations import create_symlink
        >>> create_symlink(Path('/tmp/link'), Path('/tmp'))
    """
    if dry_run:
        _dry_run(f"Would link {link} -> {target}")
        return
    link.symlink_to(target, target_is_directory=True)
    logger.debug("Linked %s -> %s", link, target)


def replace_symlink(link: Path, target: Path, *, dry_run: bool = False) -> None:
    """Atomically repoint the existing symlink *link* at *target*.

    The new link is created beside the old one and renamed over it, so *link*
    is never observed missing.

    Raises:
        IsADirectoryError: If *link* exists but is not a symlink.
        OSError: For other filesystem errors.
    """
    if link.exists() and not link.is_symlink():
        raise IsADirectoryError(f"Refusing to replace non-symlink {link}")
    if dry_run:
        _dry_run(f"Would relink {link} -> {target}")
        return
    tmp = link.with_name(link.name + _TMP_SUFFIX)
    if tmp.is_symlink():
        tmp.unlink()
    tmp.symlink_to(target, target_is_directory=True)
    try:
        os.replace(tmp, link)
    except OSError:
        tmp.unlink()
        raise
    logger.debug("Relinked %s -> %s", link, target)


def remove_symlink(link: Path, *, dry_run: bool = False) -> None:
    """Remove the symlink *link* (never its target).

    Raises:
        IsADirectoryError: If *link* exists but is not a symlink.
        FileNotFoundError: If *link* does not exist.
    """
    if not link.is_symlink():
        if link.exists():
            raise IsADirectoryError(f"Refusing to remove non-symlink {link}")
        raise FileNotFoundError(f"No symlink at {link}")
    if dry_run:
        _dry_run(f"Would unlink {link}")
        return
    link.unlink()
    logger.debug("Unlinked %s", link)
