"""Domain models for the memorybridge application."""

from memorybridge.models.core import (
    DetectedSource,
    EntryKind,
    LinkResult,
    LinkState,
    Mapping,
    PrefixMap,
    StatusEntry,
    StatusReport,
    UnlinkResult,
)

__all__ = [
    "DetectedSource",
    "EntryKind",
    "LinkResult",
    "LinkState",
    "Mapping",
    "PrefixMap",
    "StatusEntry",
    "StatusReport",
    "UnlinkResult",
]
