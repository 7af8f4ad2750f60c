# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Wallpaper analysis.

Whole-image statistics used to decide how a wallpaper should be themed:
- Colourfulness (Hasler & Süsstrunk, 2003)
- Preferred scheme mode from mean luminance
- Coarse dominant colors (5 bits per channel)

Fully transparent pixels are ignored. Large images are subsampled on a
regular grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from seedtone.errors import InvalidImageError
from seedtone.measure.colorspace import argb_to_rgb
from seedtone.measure.raster import load_pixels, pack_argb, raster_size


# Subsampling kicks in above these pixel counts
COLOURFULNESS_LARGE = 1_000_000
MODE_LARGE = 1_000_000
DOMINANT_LARGE = 500_000

COLOURFULNESS_STEP = 2
MODE_STEP = 3
DOMINANT_STEP = 2

# Mean luma below this suits a light scheme
MODE_THRESHOLD = 128.0

# Keep the top 5 bits of each channel
_COARSE_MASK = 0xF8


@dataclass(frozen=True, slots=True)
class ImageAnalysis:
    """
    Summary of a wallpaper.

    Attributes:
        width, height: Raster dimensions in pixels
        colourfulness: Hasler & Süsstrunk metric (0 for grayscale, ~100+ for vivid)
        mode: "light" for dark images, "dark" for bright ones
    """
    width: int
    height: int
    colourfulness: float
    mode: str

    def __post_init__(self) -> None:
        if self.mode not in ("light", "dark"):
            raise ValueError(f"Mode must be 'light' or 'dark', got '{self.mode}'")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "colourfulness": round(self.colourfulness, 4),
            "mode": self.mode,
        }


def _sample_rgb(pixels: NDArray[np.uint8], step: int) -> NDArray[np.float64]:
    """RGB rows of every ``step``-th pixel on both axes, transparent pixels dropped."""
    sampled = pixels[::step, ::step]
    argb = pack_argb(sampled)
    visible = ((argb >> 24) & 0xFF) != 0
    return argb_to_rgb(argb[visible]).astype(np.float64)


def _checked_rgb(pixels: NDArray[np.uint8], large: int, step: int) -> NDArray[np.float64]:
    width, height = raster_size(pixels)
    if width == 0 or height == 0:
        raise InvalidImageError(f"Invalid image dimensions {width}x{height}")

    rgb = _sample_rgb(pixels, step if width * height > large else 1)
    if len(rgb) == 0:
        raise InvalidImageError("No visible pixels found")
    return rgb


def colourfulness(image: Any) -> float:
    """
    Hasler & Süsstrunk colourfulness.

    With rg = R - G and yb = (R + G) / 2 - B over the visible pixels:
        sqrt(σrg² + σyb²) + 0.3 × sqrt(μrg² + μyb²)

    Raises:
        InvalidImageError: If the image is malformed, empty or fully
            transparent
    """
    pixels = load_pixels(image)
    rgb = _checked_rgb(pixels, COLOURFULNESS_LARGE, COLOURFULNESS_STEP)

    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    rg = r - g
    yb = 0.5 * (r + g) - b

    std_root = math.sqrt(float(np.var(rg)) + float(np.var(yb)))
    mean_root = math.hypot(float(np.mean(rg)), float(np.mean(yb)))
    return std_root + 0.3 * mean_root


def determine_mode(image: Any) -> str:
    """
    Scheme mode that suits an image.

    Dark images (mean BT.709 luma < 128) get "light", bright ones "dark".

    Raises:
        InvalidImageError: If the image is malformed, empty or fully
            transparent
    """
    pixels = load_pixels(image)
    rgb = _checked_rgb(pixels, MODE_LARGE, MODE_STEP)

    luma = 0.2126 * rgb[:, 0] + 0.7152 * rgb[:, 1] + 0.0722 * rgb[:, 2]
    return "light" if float(np.mean(luma)) < MODE_THRESHOLD else "dark"


def dominant_colors(image: Any, n: int) -> list[int]:
    """
    Most frequent colors at 5-bit precision.

    Each channel keeps its top 5 bits; results are opaque ARGB, most
    frequent first (ties by ascending value). Empty or fully transparent
    images return an empty list.
    """
    pixels = load_pixels(image)
    width, height = raster_size(pixels)
    if width == 0 or height == 0 or n <= 0:
        return []

    step = DOMINANT_STEP if width * height > DOMINANT_LARGE else 1
    rgb = _sample_rgb(pixels, step).astype(np.int64) & _COARSE_MASK
    if len(rgb) == 0:
        return []

    argb = 0xFF000000 | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    values, counts = np.unique(argb, return_counts=True)
    order = np.lexsort((values, -counts))
    return [int(v) for v in values[order[:n]]]


def analyze(image: Any) -> ImageAnalysis:
    """
    Complete analysis of a wallpaper.

    Raises:
        InvalidImageError: If the image is None, malformed, empty or
            fully transparent
    """
    pixels = load_pixels(image)
    width, height = raster_size(pixels)
    return ImageAnalysis(
        width=width,
        height=height,
        colourfulness=colourfulness(pixels),
        mode=determine_mode(pixels),
    )
