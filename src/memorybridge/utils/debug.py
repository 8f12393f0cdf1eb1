"""Logging setup for memorybridge.

Every module logs through ``logging.getLogger(__name__)``; ``setup_logger``
attaches one stream handler to the ``memorybridge`` package logger so those
records reach the terminal. Debug output is controlled by the
MEMORYBRIDGE_DEBUG environment variable.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("MEMORYBRIDGE_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("memorybridge")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.WARNING)
    _logger = logger
    return logger
