# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Scheme building.

Each scheme role reads one fixed tone from one tonal palette. The two
tables below are the whole mapping: the same seed and mode always produce
the same role → color assignments.
"""

from __future__ import annotations

from seedtone.schema import Color, Palette, Scheme
from seedtone.theme.palette import generate_palette


# Opaque black for shadow and scrim in both modes
BLACK = Color(r=0, g=0, b=0)

# role → (palette name, tone)
DARK_TONES: dict[str, tuple[str, int]] = {
    "primary": ("primary", 80),
    "on_primary": ("primary", 20),
    "primary_container": ("primary", 30),
    "on_primary_container": ("primary", 90),

    "secondary": ("secondary", 80),
    "on_secondary": ("secondary", 20),
    "secondary_container": ("secondary", 30),
    "on_secondary_container": ("secondary", 90),

    "tertiary": ("tertiary", 80),
    "on_tertiary": ("tertiary", 20),
    "tertiary_container": ("tertiary", 30),
    "on_tertiary_container": ("tertiary", 90),

    "error": ("error", 80),
    "on_error": ("error", 20),
    "error_container": ("error", 30),
    "on_error_container": ("error", 90),

    "background": ("neutral", 10),
    "on_background": ("neutral", 90),
    "surface": ("neutral", 10),
    "on_surface": ("neutral", 90),
    "surface_variant": ("neutral_variant", 30),
    "on_surface_variant": ("neutral_variant", 80),

    "outline": ("neutral_variant", 60),
    "outline_variant": ("neutral_variant", 30),

    "inverse_surface": ("neutral", 90),
    "inverse_on_surface": ("neutral", 20),
    "inverse_primary": ("primary", 40),
}

LIGHT_TONES: dict[str, tuple[str, int]] = {
    "primary": ("primary", 40),
    "on_primary": ("primary", 100),
    "primary_container": ("primary", 90),
    "on_primary_container": ("primary", 10),

    "secondary": ("secondary", 40),
    "on_secondary": ("secondary", 100),
    "secondary_container": ("secondary", 90),
    "on_secondary_container": ("secondary", 10),

    "tertiary": ("tertiary", 40),
    "on_tertiary": ("tertiary", 100),
    "tertiary_container": ("tertiary", 90),
    "on_tertiary_container": ("tertiary", 10),

    "error": ("error", 40),
    "on_error": ("error", 100),
    "error_container": ("error", 90),
    "on_error_container": ("error", 10),

    "background": ("neutral", 99),
    "on_background": ("neutral", 10),
    "surface": ("neutral", 99),
    "on_surface": ("neutral", 10),
    "surface_variant": ("neutral_variant", 90),
    "on_surface_variant": ("neutral_variant", 30),

    "outline": ("neutral_variant", 50),
    "outline_variant": ("neutral_variant", 80),

    "inverse_surface": ("neutral", 20),
    "inverse_on_surface": ("neutral", 95),
    "inverse_primary": ("primary", 80),
}

FIXED_ROLES: dict[str, Color] = {
    "shadow": BLACK,
    "scrim": BLACK,
}


def tone_table(is_dark: bool) -> dict[str, tuple[str, int]]:
    """The role → (palette, tone) table for a mode."""
    return DARK_TONES if is_dark else LIGHT_TONES


def build_scheme(palette: Palette, is_dark: bool) -> Scheme:
    """
    Read a scheme off an existing palette.

    Args:
        palette: Tonal palettes to sample
        is_dark: Dark (True) or light (False) tone table

    Returns:
        Scheme with every role filled
    """
    roles = {
        role: palette.get(name).tone(tone)
        for role, (name, tone) in tone_table(is_dark).items()
    }
    roles.update(FIXED_ROLES)
    return Scheme(seed=palette.seed, is_dark=is_dark, palette=palette, **roles)


def generate_scheme(seed: Color | int | str, is_dark: bool) -> Scheme:
    """
    Generate a complete scheme from a seed color.

    Builds the seed's palette, then samples the tone table for the mode.
    """
    return build_scheme(generate_palette(seed), is_dark)
