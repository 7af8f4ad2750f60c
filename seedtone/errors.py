# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""Typed failures raised by seedtone."""

from __future__ import annotations


class SeedtoneError(Exception):
    """Base class for all seedtone errors."""


class InvalidColorError(SeedtoneError, ValueError):
    """Raised when a color cannot be parsed or holds out-of-range channels."""


class InvalidImageError(SeedtoneError, ValueError):
    """Raised when a raster is absent or not a pixel-addressable RGB(A) grid."""
