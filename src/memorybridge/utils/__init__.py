"""Utility modules for memorybridge."""

from memorybridge.utils.config import (
    default_projects_dir,
    resolve_projects_dir,
    resolve_setting,
    save_bridge,
)
from memorybridge.utils.json import PathEncoder

__all__ = [
    "PathEncoder",
    "default_projects_dir",
    "resolve_projects_dir",
    "resolve_setting",
    "save_bridge",
]
