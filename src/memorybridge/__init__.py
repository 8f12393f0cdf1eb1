# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""memorybridge - Share Claude project state across mounted filesystems."""

from memorybridge.__about__ import __version__

__all__ = ["__version__"]
