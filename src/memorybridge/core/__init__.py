"""Core functionality for memorybridge.

This package exposes the pure name-handling helpers at package level:
- encode_prefix / decode_prefix: path <-> encoded project name conversion.
- infer_common_prefix / detect_remote_prefix: guess the remote prefix shared
  by a set of project names.

The filesystem-facing engines live in their own modules and are imported from
there: ``core.discover`` (mapping discovery), ``core.apply`` (link/unlink),
``core.status`` (status inspection) and ``core.detect`` (mount discovery).
"""

from memorybridge.core.codec import decode_prefix, encode_prefix
from memorybridge.core.prefix import detect_remote_prefix, infer_common_prefix

__all__ = [
    "decode_prefix",
    "detect_remote_prefix",
    "encode_prefix",
    "infer_common_prefix",
]
