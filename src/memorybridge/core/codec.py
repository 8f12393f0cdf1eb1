"""Path <-> encoded project name conversion.

Claude stores per-project state under a directory whose name is the project's
absolute path with every separator replaced by ``-``::

    /home/user/projects/app  ->  -home-user-projects-app

Encoding is a pure string transform. There is no general inverse: a segment
such as ``my-app`` is indistinguishable from two segments ``my/app`` once
encoded. Everything that rewrites names therefore works on encoded prefixes by
substring operations, and :func:`decode_prefix` is only a display/guessing aid.
"""

RESERVED_CHAR = "-"
PATH_SEPARATOR = "/"


def encode_prefix(path: str) -> str:
    """Encode a filesystem path into its project-name form.

    Args:
        path: Path or path prefix, e.g. ``/home/user``.

    Returns:
        The encoded name, e.g. ``-home-user``.

    Example:
        >>> encode_prefix("/mnt/x/home/user")
        '-mnt-x-home-user'
    """
    return path.replace(PATH_SEPARATOR, RESERVED_CHAR)


def decode_prefix(encoded: str) -> str:
    """Best-effort conversion of an encoded prefix back to a path.

    Every ``-`` becomes ``/``, so ``-home-jane-doe`` decodes to
    ``/home/jane/doe`` even when the real path was ``/home/jane-doe``. Callers
    that already hold the encoded prefix should use it directly (see
    :meth:`memorybridge.models.core.PrefixMap.from_encoded_remote`).

    Example:
        >>> decode_prefix("-home-user")
        '/home/user'
    """
    return encoded.replace(RESERVED_CHAR, PATH_SEPARATOR)


def is_encoded_absolute(name: str) -> bool:
    """Return True if *name* encodes an absolute path (starts with ``-``)."""
    return name.startswith(RESERVED_CHAR)
