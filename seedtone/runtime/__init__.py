# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Runtime helpers for callers that convert many colors at once.
"""

from seedtone.runtime.cache import (
    ColorCache,
    ReadWriteLock,
    batch_convert,
    convert_palette,
)

__all__ = [
    "ColorCache",
    "ReadWriteLock",
    "batch_convert",
    "convert_palette",
]
