"""Remote prefix inference.

All project directories created on one machine share the encoded home path of
that machine (``-home-lambert-...``). Given the entry names of a remote
projects directory, the longest common prefix trimmed to a whole segment is a
good guess for that remote prefix.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from memorybridge.core.codec import RESERVED_CHAR, is_encoded_absolute

logger = logging.getLogger(__name__)

# "-ab" is the shortest prefix that still names one segment.
MIN_PREFIX_LENGTH = 3


def longest_common_prefix(names: Iterable[str]) -> str:
    """Return the character-wise longest common prefix of *names*.

    An empty input yields an empty string; a single name is its own prefix.
    """
    iterator = iter(names)
    try:
        prefix = next(iterator)
    except StopIteration:
        return ""
    for name in iterator:
        i = 0
        limit = min(len(prefix), len(name))
        while i < limit and prefix[i] == name[i]:
            i += 1
        prefix = prefix[:i]
        if not prefix:
            break
    return prefix


def infer_common_prefix(names: Iterable[str]) -> Optional[str]:
    """Infer the shared encoded path prefix of a set of project names.

    Only names encoding absolute paths (leading ``-``) are considered. The
    common prefix is cut back to its last ``-`` so it never ends inside a
    segment, e.g. ``-home-user-pro`` becomes ``-home-user``.

    Args:
        names: Encoded directory names.

    Returns:
        The encoded prefix, or None when no confident prefix exists (no
        candidate names, or the trimmed result is shorter than one segment).

    Example:
        >>> infer_common_prefix(["-home-user-proj-a", "-home-user-work"])
        '-home-user'
        >>> infer_common_prefix(["-home-a", "-work-b"]) is None
        True
    """
    candidates = [name for name in names if is_encoded_absolute(name)]
    if not candidates:
        return None

    candidate = longest_common_prefix(candidates)
    cut = candidate.rfind(RESERVED_CHAR)
    prefix = candidate[:cut] if cut >= 0 else ""

    if len(prefix) < MIN_PREFIX_LENGTH:
        logger.debug("No confident prefix in %d name(s)", len(candidates))
        return None
    return prefix


def detect_remote_prefix(projects_path: Path) -> Optional[str]:
    """Infer the encoded remote prefix from the entries of *projects_path*.

    Returns None if the directory cannot be read or no prefix is confident.
    """
    try:
        names = [entry.name for entry in projects_path.iterdir()]
    except OSError as e:
        logger.debug("Cannot read %s: %s", projects_path, e)
        return None
    return infer_common_prefix(names)
