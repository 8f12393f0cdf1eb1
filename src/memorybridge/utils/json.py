"""JSON serialization helpers for memorybridge.

Used by the ``--json`` output of scan/link/unlink/status. Pydantic models are
dumped with ``model_dump()`` and encoded with :class:`PathEncoder`, which turns
``Path`` objects into strings and enums into their values.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Self


class PathEncoder(json.JSONEncoder):
    """Custom JSON encoder for memorybridge output."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (may be Path, Enum, or other types)

        Returns:
            - Path: string (cross-platform compatibility)
            - Enum: its value
            - Otherwise: falls back to base class
        """
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def dumps(data: Any) -> str:
    """Serialize *data* as indented JSON using :class:`PathEncoder`."""
    return json.dumps(data, cls=PathEncoder, indent=2)
