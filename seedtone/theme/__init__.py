# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Palette and scheme generation.

Turns a seed color into six tonal palettes, and palettes into light and
dark role schemes.
"""

from seedtone.theme.generator import extract_theme, palette_from_color, palette_from_image
from seedtone.theme.palette import generate_palette, generate_tonal_palette
from seedtone.theme.scheme import build_scheme, generate_scheme

__all__ = [
    "extract_theme",
    "palette_from_color",
    "palette_from_image",
    "generate_palette",
    "generate_tonal_palette",
    "build_scheme",
    "generate_scheme",
]
