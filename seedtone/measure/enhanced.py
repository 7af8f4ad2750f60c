# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Multi-pass wallpaper color extraction.

Where the quantizer answers "which colors cover the most area", this
module looks at an image from four angles:

1. Dominant: quantized colors ranked by population
2. Accents: saturated, mid-luminance colors (sampled every 2nd pixel)
3. Background: most common color in the four corners
4. Edges: colors sitting on sharp transitions (sampled every 3rd pixel)

The results feed an alternative seed choice that favors vivid accents
over large flat areas.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable

import numpy as np
from numpy.typing import NDArray

from seedtone.measure.colorspace import argb_to_rgb
from seedtone.measure.quantizer import Quantizer
from seedtone.measure.raster import load_pixels, pack_argb
from seedtone.measure.score import DEFAULT_SEED_COLOR


DOMINANT_QUANTIZER_COLORS = 256
MAX_DOMINANT = 10
MAX_ACCENTS = 5
MAX_EDGE_COLORS = 5

ACCENT_SAMPLE_STEP = 2
EDGE_SAMPLE_STEP = 3
LUMINANCE_SAMPLE_STEP = 4

MIN_ACCENT_VIBRANCY = 0.6
MIN_ACCENT_SATURATION = 0.5
EDGE_DISTANCE_THRESHOLD = 50.0
MAX_CORNER_SIDE = 50


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorInfo:
    """
    One extracted color with its perceptual attributes.

    Attributes:
        color: Packed ARGB color
        population: Pixels (or samples) carrying this color
        vibrancy: Saturation, damped for very dark or very light colors [0, 1]
        saturation: HSL saturation [0, 1]
        luminance: BT.709 luma of the gamma-encoded channels [0, 1]
        is_accent: Found by the accent pass
        is_background: Found by the background pass
    """
    color: int
    population: int
    vibrancy: float
    saturation: float
    luminance: float
    is_accent: bool = False
    is_background: bool = False

    @property
    def hex(self) -> str:
        r, g, b = (int(c) for c in argb_to_rgb(self.color))
        return f"#{r:02X}{g:02X}{b:02X}"

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "color": self.hex,
            "population": self.population,
            "vibrancy": round(self.vibrancy, 4),
            "saturation": round(self.saturation, 4),
            "luminance": round(self.luminance, 4),
            "is_accent": self.is_accent,
            "is_background": self.is_background,
        }


@dataclass(frozen=True, slots=True)
class ExtractedColors:
    """
    Result of a multi-pass extraction.

    Attributes:
        dominant: Up to 10 quantized colors, most populous first
        accents: Up to 5 vivid colors, best vibrancy × population first
        background: Most common corner color
        edge_colors: Up to 5 colors found on sharp transitions
        all_colors: dominant, accents and edge colors merged by ARGB value
        is_dark: True if avg_luminance < 0.5
        avg_luminance: Mean luma over sampled pixels [0, 1]
    """
    dominant: tuple[ColorInfo, ...]
    accents: tuple[ColorInfo, ...]
    background: ColorInfo
    edge_colors: tuple[ColorInfo, ...]
    all_colors: tuple[ColorInfo, ...]
    is_dark: bool
    avg_luminance: float

    def best_seed_color(self) -> int:
        """
        Choose a seed color from the extraction.

        Preference:
        1. The top accent color
        2. The dominant color with the highest (non-zero) vibrancy
        3. DEFAULT_SEED_COLOR
        """
        if self.accents:
            return self.accents[0].color

        best_vibrancy = 0.0
        best_color = DEFAULT_SEED_COLOR
        for info in self.dominant:
            if info.vibrancy > best_vibrancy:
                best_vibrancy = info.vibrancy
                best_color = info.color
        return best_color


# =============================================================================
# Color attributes
# =============================================================================


def _color_attributes(
    rgb: NDArray[np.int64],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Vectorized (vibrancy, saturation, luminance) for (N, 3) RGB rows."""
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    luminance = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0

    mx = np.max(rgb, axis=-1)
    mn = np.min(rgb, axis=-1)
    delta = mx - mn
    lightness = (mx + mn) / 2.0 / 255.0

    with np.errstate(divide="ignore", invalid="ignore"):
        saturation = np.where(
            lightness < 0.5,
            delta / (mx + mn),
            delta / (510.0 - mx - mn),
        )
    saturation = np.where(delta != 0, saturation, 0.0)

    extreme = (luminance < 0.2) | (luminance > 0.8)
    vibrancy = np.where(
        extreme,
        saturation * (1.0 - np.abs(0.5 - luminance) * 2.0),
        saturation,
    )
    return vibrancy, saturation, luminance


def analyze_color(argb: int, population: int) -> ColorInfo:
    """Describe one packed ARGB color."""
    vibrancy, saturation, luminance = _color_attributes(argb_to_rgb(argb))
    return ColorInfo(
        color=int(argb),
        population=int(population),
        vibrancy=float(vibrancy),
        saturation=float(saturation),
        luminance=float(luminance),
    )


def _infos(
    argbs: NDArray[np.int64],
    counts: NDArray[np.int64],
    **flags: bool,
) -> list[ColorInfo]:
    if len(argbs) == 0:
        return []
    vibrancy, saturation, luminance = _color_attributes(argb_to_rgb(argbs))
    return [
        ColorInfo(
            color=int(argbs[i]),
            population=int(counts[i]),
            vibrancy=float(vibrancy[i]),
            saturation=float(saturation[i]),
            luminance=float(luminance[i]),
            **flags,
        )
        for i in range(len(argbs))
    ]


def _by_population(infos: list[ColorInfo]) -> list[ColorInfo]:
    return sorted(infos, key=lambda info: (-info.population, info.color))


def _packed_grid(pixels: NDArray[np.uint8]) -> NDArray[np.int64]:
    """(H, W) grid of packed ARGB values."""
    height, width = pixels.shape[:2]
    return pack_argb(pixels).reshape(height, width)


# =============================================================================
# Passes
# =============================================================================


def extract_dominant_colors(
    pixels: NDArray[np.uint8],
    limit: int = MAX_DOMINANT,
) -> list[ColorInfo]:
    """Most populous colors after 256-color quantization."""
    result = Quantizer(DOMINANT_QUANTIZER_COLORS).quantize(pixels)
    infos = [analyze_color(argb, count) for argb, count in result.colors.items()]
    return _by_population(infos)[:limit]


def extract_accent_colors(
    grid: NDArray[np.int64],
    limit: int = MAX_ACCENTS,
) -> list[ColorInfo]:
    """
    Vivid colors, ranked by vibrancy × sample count.

    Samples every 2nd pixel on both axes and keeps colors with vibrancy
    above 0.6 and saturation above 0.5.
    """
    samples = grid[::ACCENT_SAMPLE_STEP, ::ACCENT_SAMPLE_STEP].ravel()
    if samples.size == 0:
        return []

    values, counts = np.unique(samples, return_counts=True)
    vibrancy, saturation, _ = _color_attributes(argb_to_rgb(values))
    keep = (vibrancy > MIN_ACCENT_VIBRANCY) & (saturation > MIN_ACCENT_SATURATION)

    infos = _infos(values[keep], counts[keep], is_accent=True)
    infos.sort(key=lambda info: (-info.vibrancy * info.population, info.color))
    return infos[:limit]


def extract_background_color(grid: NDArray[np.int64]) -> ColorInfo:
    """
    Most common color across the four corner squares.

    Corner side is width // 10, capped at 50. Overlapping corners on small
    images count their shared pixels once per corner. An image too narrow
    to have corners yields color 0 with population 0.
    """
    height, width = grid.shape
    side = min(width // 10, MAX_CORNER_SIDE)

    if side <= 0 or height == 0:
        return replace(analyze_color(0, 0), is_background=True)

    top = slice(0, side)
    bottom = slice(max(height - side, 0), height)
    left = slice(0, side)
    right = slice(max(width - side, 0), width)

    corners = np.concatenate([
        grid[top, left].ravel(),
        grid[top, right].ravel(),
        grid[bottom, left].ravel(),
        grid[bottom, right].ravel(),
    ])

    values, counts = np.unique(corners, return_counts=True)
    # np.unique sorts values, so argmax picks the lowest ARGB among ties
    best = int(np.argmax(counts))
    return replace(analyze_color(values[best], counts[best]), is_background=True)


def extract_edge_colors(
    grid: NDArray[np.int64],
    limit: int = MAX_EDGE_COLORS,
) -> list[ColorInfo]:
    """
    Colors on sharp transitions.

    Samples every 3rd interior pixel on both axes; a sample counts when its
    RGB distance to any of its four neighbours exceeds 50.
    """
    height, width = grid.shape
    if height < 3 or width < 3:
        return []

    ys = np.arange(1, height - 1, EDGE_SAMPLE_STEP)
    xs = np.arange(1, width - 1, EDGE_SAMPLE_STEP)
    yy, xx = np.meshgrid(ys, xs, indexing="ij")

    center = grid[yy, xx]
    center_rgb = argb_to_rgb(center).astype(np.float64)

    edge = np.zeros(center.shape, dtype=bool)
    for dy, dx in ((0, -1), (0, 1), (-1, 0), (1, 0)):
        neighbour_rgb = argb_to_rgb(grid[yy + dy, xx + dx]).astype(np.float64)
        dist = np.sqrt(np.sum((center_rgb - neighbour_rgb) ** 2, axis=-1))
        edge |= dist > EDGE_DISTANCE_THRESHOLD

    if not edge.any():
        return []

    values, counts = np.unique(center[edge], return_counts=True)
    return _by_population(_infos(values, counts))[:limit]


def average_luminance(grid: NDArray[np.int64]) -> float:
    """
    Mean BT.709 luma over every 4th pixel on both axes, in [0, 1].

    Returns 0.5 for an empty image.
    """
    samples = grid[::LUMINANCE_SAMPLE_STEP, ::LUMINANCE_SAMPLE_STEP].ravel()
    if samples.size == 0:
        return 0.5
    _, _, luminance = _color_attributes(argb_to_rgb(samples))
    return float(np.mean(luminance))


def combine_colors(*color_lists: Iterable[ColorInfo]) -> list[ColorInfo]:
    """
    Merge color lists, one entry per ARGB value.

    When a color appears more than once the entry with the larger
    population wins; on equal population the first one seen is kept.
    Output keeps first-seen order.
    """
    merged: dict[int, ColorInfo] = {}
    for infos in color_lists:
        for info in infos:
            existing = merged.get(info.color)
            if existing is None or info.population > existing.population:
                merged[info.color] = info
    return list(merged.values())


# =============================================================================
# Entry point
# =============================================================================


def extract_colors(image: Any) -> ExtractedColors:
    """
    Run all extraction passes over an image.

    Args:
        image: (H, W, 3|4) uint8 array or decoded PIL image

    Returns:
        ExtractedColors

    Raises:
        InvalidImageError: If the image is None or malformed
    """
    pixels = load_pixels(image)
    grid = _packed_grid(pixels)

    dominant = extract_dominant_colors(pixels)
    accents = extract_accent_colors(grid)
    background = extract_background_color(grid)
    edges = extract_edge_colors(grid)
    avg_luminance = average_luminance(grid)

    return ExtractedColors(
        dominant=tuple(dominant),
        accents=tuple(accents),
        background=background,
        edge_colors=tuple(edges),
        all_colors=tuple(combine_colors(dominant, accents, edges)),
        is_dark=avg_luminance < 0.5,
        avg_luminance=avg_luminance,
    )
