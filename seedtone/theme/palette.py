# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Tonal palette generation.

A seed color's HSL hue and saturation are swept across the 13 canonical
tone stops, with lightness equal to the tone. Saturation fades linearly
to zero at both ends of the ramp so that tone 0 is black and tone 100 is
white regardless of hue.

Six palettes are derived from one seed:
- primary: seed hue, full saturation
- secondary: hue +60°, saturation ×0.7
- tertiary: hue +120°, saturation ×0.5
- neutral: seed hue, saturation fixed at 2
- neutral_variant: seed hue, saturation fixed at 8
- error: fixed red (H 0, S 84), independent of the seed
"""

from __future__ import annotations

import numpy as np

from seedtone.measure.colorspace import hsl_to_rgb
from seedtone.schema import HSL, TONE_STOPS, Color, Palette, TonalPalette


SECONDARY_HUE_SHIFT = 60.0
SECONDARY_SATURATION = 0.7
TERTIARY_HUE_SHIFT = 120.0
TERTIARY_SATURATION = 0.5

NEUTRAL_SATURATION = 2.0
NEUTRAL_VARIANT_SATURATION = 8.0

ERROR_HSL = HSL(H=0.0, S=84.0, L=50.0)

# Saturation ramps to zero below LOW_RAMP and above HIGH_RAMP
_LOW_RAMP = 20
_HIGH_RAMP = 80


def _ramp_factor(tone: int) -> float:
    if tone < _LOW_RAMP:
        return tone / 20.0
    if tone > _HIGH_RAMP:
        return (100 - tone) / 20.0
    return 1.0


def _palette_from_hsl(hsl: np.ndarray) -> TonalPalette:
    """Build a TonalPalette from a (13, 3) array of HSL rows, one per stop."""
    rgb = hsl_to_rgb(hsl)
    return TonalPalette(tones=tuple(
        (tone, Color(r=int(r), g=int(g), b=int(b)))
        for tone, (r, g, b) in zip(TONE_STOPS, rgb)
    ))


def generate_tonal_palette(base_hsl: HSL, hue_shift: float = 0.0) -> TonalPalette:
    """
    Sweep a hue across the canonical tone stops.

    For each stop t:
    - lightness = t
    - saturation = base S, scaled by t/20 below 20 and (100-t)/20 above 80
    - hue = (base H + hue_shift) mod 360

    Args:
        base_hsl: Hue and saturation source (its lightness is ignored)
        hue_shift: Degrees added to the base hue

    Returns:
        TonalPalette with exactly the 13 canonical stops
    """
    hue = (base_hsl.H + hue_shift) % 360.0
    hsl = np.array([
        [hue, base_hsl.S * _ramp_factor(tone), float(tone)]
        for tone in TONE_STOPS
    ], dtype=np.float64)
    return _palette_from_hsl(hsl)


def generate_neutral_palette(seed_hsl: HSL, saturation: float = NEUTRAL_SATURATION) -> TonalPalette:
    """
    Near-gray ramp tinted with the seed hue.

    Saturation is constant across all stops (no ramp).
    """
    hsl = np.array([
        [seed_hsl.H, saturation, float(tone)]
        for tone in TONE_STOPS
    ], dtype=np.float64)
    return _palette_from_hsl(hsl)


def generate_error_palette() -> TonalPalette:
    """Fixed red ramp used for error roles."""
    return generate_tonal_palette(ERROR_HSL)


def generate_palette(seed: Color | int | str) -> Palette:
    """
    Expand a seed color into the six tonal palettes.

    Args:
        seed: Color, packed ARGB int or hex string

    Returns:
        Palette keyed by role family
    """
    seed = Color.coerce(seed)
    hsl = seed.hsl

    return Palette(
        seed=seed,
        primary=generate_tonal_palette(hsl),
        secondary=generate_tonal_palette(
            HSL(H=hsl.H, S=hsl.S * SECONDARY_SATURATION, L=hsl.L),
            SECONDARY_HUE_SHIFT,
        ),
        tertiary=generate_tonal_palette(
            HSL(H=hsl.H, S=hsl.S * TERTIARY_SATURATION, L=hsl.L),
            TERTIARY_HUE_SHIFT,
        ),
        neutral=generate_neutral_palette(hsl, NEUTRAL_SATURATION),
        neutral_variant=generate_neutral_palette(hsl, NEUTRAL_VARIANT_SATURATION),
        error=generate_error_palette(),
    )
