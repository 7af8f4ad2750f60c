# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Schema definitions for colors, palettes and schemes.

All types in this module are immutable (frozen dataclasses).
Once a palette or scheme is produced it is a value and cannot be altered.
"""

from seedtone.schema.color import HSL, LAB, XYZ, Color
from seedtone.schema.theme import (
    PALETTE_NAMES,
    SCHEME_ROLES,
    TONE_STOPS,
    Palette,
    Scheme,
    ScoredColor,
    Theme,
    TonalPalette,
    nearest_tone,
)

__all__ = [
    # Color values
    "Color",
    "HSL",
    "LAB",
    "XYZ",
    # Seed scoring
    "ScoredColor",
    # Palettes
    "TONE_STOPS",
    "PALETTE_NAMES",
    "TonalPalette",
    "Palette",
    "nearest_tone",
    # Schemes
    "SCHEME_ROLES",
    "Scheme",
    # Top-level container
    "Theme",
]
