"""Exception hierarchy for memorybridge.

Every error raised by the core derives from :class:`BridgeError` and also from
the closest built-in exception, so callers can catch either the project type or
the familiar ``ValueError`` / ``FileNotFoundError`` / ``OSError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memorybridge.models.core import Mapping


class BridgeError(Exception):
    """Base exception for memorybridge."""


class InvalidInputError(BridgeError, ValueError):
    """A prefix mapping was malformed (e.g. ``--map`` without ``=``)."""


class SourceNotFoundError(BridgeError, FileNotFoundError):
    """The remote projects directory does not exist."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Source path does not exist: {path}")
        self.path = path


class LinkOperationError(BridgeError, OSError):
    """A symlink mutation failed for a specific mapping.

    Earlier mutations in the same run are left in place.
    """

    def __init__(self, mapping: "Mapping", action: str, cause: OSError) -> None:
        super().__init__(
            f"Failed to {action} {mapping.local_path} -> {mapping.source_path}: "
            f"{cause.strerror or cause}"
        )
        self.mapping = mapping
        self.action = action
        self.cause = cause
