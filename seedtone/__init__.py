# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Seedtone -- Material-style color themes from images.

Picks a seed color from a decoded image and expands it into tonal
palettes and light/dark role schemes.

Quick start::

    from PIL import Image
    from seedtone import extract_theme

    theme = extract_theme(Image.open("wallpaper.png"))
    theme.seed.hex          # Chosen seed, e.g. "#6750A4"
    theme.dark.to_dict()    # {"primary": "#...", "on_primary": "#...", ...}
"""

from __future__ import annotations

__version__ = "1.0.0"

from seedtone.errors import InvalidColorError, InvalidImageError, SeedtoneError
from seedtone.measure import (
    DEFAULT_SEED_COLOR,
    ScorerConfig,
    analyze,
    extract_colors,
    find_seed_color,
    quantize,
    score_colors,
)
from seedtone.schema import (
    Color,
    Palette,
    Scheme,
    ScoredColor,
    Theme,
    TonalPalette,
)
from seedtone.theme import (
    build_scheme,
    extract_theme,
    generate_palette,
    generate_scheme,
    palette_from_color,
    palette_from_image,
)

__all__ = [
    # Core API
    "extract_theme",
    "palette_from_image",
    "palette_from_color",
    "generate_palette",
    "generate_scheme",
    "build_scheme",
    # Measurement
    "quantize",
    "score_colors",
    "find_seed_color",
    "extract_colors",
    "analyze",
    "ScorerConfig",
    "DEFAULT_SEED_COLOR",
    # Types (commonly needed)
    "Color",
    "ScoredColor",
    "TonalPalette",
    "Palette",
    "Scheme",
    "Theme",
    # Errors
    "SeedtoneError",
    "InvalidColorError",
    "InvalidImageError",
    # Version
    "__version__",
]
