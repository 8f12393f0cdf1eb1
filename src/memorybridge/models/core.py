"""Core domain models for memorybridge.

This module defines the data structures shared by discovery, reconciliation and
status inspection.
- Mapping is the unit of reconciliation: one remote project entry paired with
  the local entry name it should appear under.
- LinkState is recomputed on every discovery pass; nothing here is persisted.
- Result models are plain return values for a single run.

Design:
- Paths on Mapping are validated as absolute so a link can never be created
  relative to the current working directory.
- PrefixMap carries the *encoded* prefixes used for name rewriting, plus the raw
  inputs for display. Building it from an already-encoded remote prefix bypasses
  the lossy decode heuristic in ``memorybridge.core.codec``.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from memorybridge.core.codec import encode_prefix
from memorybridge.exceptions import InvalidInputError


class LinkState(str, Enum):
    """Current state of the local entry for a mapping."""

    MISSING = "missing"
    LINK_CORRECT = "symlink-correct"
    LINK_WRONG = "symlink-wrong"
    DIRECTORY_EXISTS = "directory-exists"


class EntryKind(str, Enum):
    """Kind of entry found in the local projects directory."""

    SYMLINK = "symlink"
    DIRECTORY = "directory"


class PrefixMap(BaseModel):
    """A remote -> local prefix rewrite rule in encoded form."""

    remote: str
    """Remote prefix as supplied by the user (path or encoded form)."""

    local: str
    """Local prefix path as supplied by the user."""

    remote_encoded: str
    """Encoded remote prefix matched against source entry names."""

    local_encoded: str
    """Encoded local prefix substituted into local entry names."""

    remote_is_encoded: bool = False
    """Whether ``remote`` was given in encoded form."""

    @classmethod
    def from_paths(cls, remote: str, local: str) -> "PrefixMap":
        """Build a map from two filesystem path prefixes."""
        _require_prefix(remote, "remote")
        _require_prefix(local, "local")
        return cls(
            remote=remote,
            local=local,
            remote_encoded=encode_prefix(remote),
            local_encoded=encode_prefix(local),
        )

    @classmethod
    def from_encoded_remote(cls, remote_encoded: str, local: str) -> "PrefixMap":
        """Build a map whose remote prefix is already encoded.

        Used when the remote prefix was inferred from entry names, or when the
        user wants to sidestep the ``-`` -> ``/`` decode ambiguity entirely.
        """
        _require_prefix(remote_encoded, "remote")
        _require_prefix(local, "local")
        return cls(
            remote=remote_encoded,
            local=local,
            remote_encoded=remote_encoded,
            local_encoded=encode_prefix(local),
            remote_is_encoded=True,
        )

    @classmethod
    def parse(cls, spec: str, *, encoded_remote: bool = False) -> "PrefixMap":
        """Parse a ``REMOTE=LOCAL`` mapping specification.

        Args:
            spec: Mapping text, split at the first ``=``.
            encoded_remote: Treat REMOTE as an already encoded prefix.

        Raises:
            InvalidInputError: If *spec* has no ``=`` or either side is empty.
        """
        if "=" not in spec:
            raise InvalidInputError(
                f"Invalid mapping {spec!r}: expected remote_prefix=local_prefix"
            )
        remote, local = spec.split("=", 1)
        if encoded_remote:
            return cls.from_encoded_remote(remote, local)
        return cls.from_paths(remote, local)

    @property
    def spec(self: "PrefixMap") -> str:
        """The ``REMOTE=LOCAL`` text that parses back to this map."""
        return f"{self.remote}={self.local}"

    def rewrite(self: "PrefixMap", source_name: str) -> Optional[str]:
        """Return the local entry name for *source_name*, or None if unmatched."""
        if not source_name.startswith(self.remote_encoded):
            return None
        return self.local_encoded + source_name[len(self.remote_encoded) :]


def _require_prefix(value: str, which: str) -> None:
    if not value:
        raise InvalidInputError(f"The {which} prefix must not be empty")


class Mapping(BaseModel):
    """One remote project entry and the local entry it maps to."""

    source_name: str
    """Encoded directory name as found under the source directory."""

    source_path: Path
    """Absolute path to the source entry."""

    local_name: str
    """Encoded directory name under the local projects directory."""

    local_path: Path
    """Absolute path of the local entry (link location)."""

    state: LinkState = LinkState.MISSING
    """Classified state of ``local_path`` at discovery time."""

    @property
    def label(self: "Mapping") -> str:
        """Short display name: the last ``-`` separated piece of the name."""
        return self.source_name.rsplit("-", 1)[-1] or self.source_name

    @property
    def linkable(self: "Mapping") -> bool:
        """Whether ``link`` would mutate the filesystem for this mapping."""
        return self.state in (LinkState.MISSING, LinkState.LINK_WRONG)

    @property
    def is_link(self: "Mapping") -> bool:
        """Whether the local entry is a symlink that ``unlink`` would remove."""
        return self.state in (LinkState.LINK_CORRECT, LinkState.LINK_WRONG)

    @model_validator(mode="after")
    def validate_paths(self: "Mapping") -> "Mapping":
        """Ensure both paths are absolute.

        Raises:
            ValueError: If either path is relative.
        """
        if not self.source_path.is_absolute():
            raise ValueError(f"Source path must be absolute: {self.source_path}")
        if not self.local_path.is_absolute():
            raise ValueError(f"Local path must be absolute: {self.local_path}")
        return self


class LinkResult(BaseModel):
    """Counters produced by one ``link`` run."""

    created: int = 0
    updated: int = 0
    skipped: int = 0
    dry_run: bool = False
    duration: float = 0.0


class UnlinkResult(BaseModel):
    """Counters produced by one ``unlink`` run."""

    removed: int = 0
    dry_run: bool = False


class StatusEntry(BaseModel):
    """A single entry of the local projects directory."""

    name: str
    kind: EntryKind
    target: Optional[str] = None
    """Raw symlink target text (symlinks only)."""

    healthy: Optional[bool] = None
    """Whether the symlink target currently exists (symlinks only)."""


class StatusReport(BaseModel):
    """Summary of the local projects directory."""

    root: Path
    exists: bool = True
    """False when the projects directory has not been created yet."""

    entries: List[StatusEntry] = Field(default_factory=list)
    symlinks: int = 0
    local_dirs: int = 0

    @property
    def broken(self: "StatusReport") -> int:
        """Number of symlinks whose target is missing."""
        return len(
            [e for e in self.entries if e.kind == EntryKind.SYMLINK and not e.healthy]
        )


class DetectedSource(BaseModel):
    """A remote ``.claude/projects`` directory found on a mounted filesystem."""

    projects_path: Path
    """Full path to the remote projects directory."""

    local_home: Path
    """Directory holding the remote ``.claude`` (the remote home as seen locally)."""

    project_count: int
    """Number of encoded project entries found."""
