# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Main theme generation API.

This is the primary entry point for seedtone: raster in, palette or full
light/dark theme out.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from seedtone.errors import InvalidImageError
from seedtone.measure.quantizer import DEFAULT_MAX_COLORS, Quantizer, QuantizerResult
from seedtone.measure.score import ScorerConfig, find_seed_color, score_colors
from seedtone.schema import Color, Palette, Theme
from seedtone.theme.palette import generate_palette
from seedtone.theme.scheme import build_scheme

logger = logging.getLogger(__name__)


def _quantize(image: Any, max_colors: int) -> QuantizerResult:
    if image is None:
        raise InvalidImageError("Image is None")
    return Quantizer(max_colors).quantize(image)


def palette_from_color(seed: Color | int | str) -> Palette:
    """
    Generate a palette from a seed color.

    Args:
        seed: Color, packed ARGB int or hex string

    Raises:
        InvalidColorError: If a hex string cannot be parsed
    """
    return generate_palette(seed)


def palette_from_image(
    image: Any,
    *,
    max_colors: int = DEFAULT_MAX_COLORS,
    scorer: Optional[ScorerConfig] = None,
) -> Palette:
    """
    Generate a palette from an image.

    The image is quantized, the best seed color is chosen from the result
    and expanded into tonal palettes.

    Args:
        image: (H, W, 3|4) uint8 array or decoded PIL image
        max_colors: Quantizer color budget (default: 128)
        scorer: Seed scoring weights (default: ScorerConfig())

    Returns:
        Palette for the chosen seed

    Raises:
        InvalidImageError: If the image is None or malformed
    """
    result = _quantize(image, max_colors)
    seed = find_seed_color(result, scorer)
    logger.debug("Seed color %08X from %d quantized colors", seed, len(result))
    return generate_palette(seed)


def extract_theme(
    image: Any,
    *,
    max_colors: int = DEFAULT_MAX_COLORS,
    scorer: Optional[ScorerConfig] = None,
) -> Theme:
    """
    Extract a complete theme from an image.

    Runs one quantization pass, picks the seed, and builds the palette
    plus both schemes from it.

    Args:
        image: (H, W, 3|4) uint8 array or decoded PIL image
        max_colors: Quantizer color budget (default: 128)
        scorer: Seed scoring weights (default: ScorerConfig())

    Returns:
        Theme with seed, palette, light and dark schemes, and the ranked
        seed candidates

    Raises:
        InvalidImageError: If the image is None or malformed

    Example:
        >>> import numpy as np
        >>> from seedtone import extract_theme
        >>> image = np.full((8, 8, 3), (103, 80, 164), dtype=np.uint8)
        >>> theme = extract_theme(image)
        >>> theme.seed.hex
        '#6750A4'
    """
    result = _quantize(image, max_colors)
    scores = score_colors(result, scorer)
    seed = Color.from_argb(find_seed_color(result, scorer))
    logger.debug(
        "Seed %s chosen from %d candidates (%d quantized colors)",
        seed.hex, len(scores), len(result),
    )

    palette = generate_palette(seed)
    return Theme(
        seed=seed,
        palette=palette,
        light=build_scheme(palette, is_dark=False),
        dark=build_scheme(palette, is_dark=True),
        scores=tuple(scores),
    )
