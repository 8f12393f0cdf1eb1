"""Filesystem operations for memorybridge."""

from memorybridge.fs.operations import create_symlink, remove_symlink, replace_symlink

__all__ = [
    "create_symlink",
    "replace_symlink",
    "remove_symlink",
]
