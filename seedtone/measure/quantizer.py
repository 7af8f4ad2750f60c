# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Variance-guided box-splitting color quantization.

A simplified analogue of Wu's quantizer (Graphics Gems II, 1991):

1. Count every exact pixel color.
2. If there are few enough distinct colors, return the counts as-is.
3. Otherwise bin the colors into a 32×32×32 cube (5 bits per channel),
   accumulating per-cell weight and first moments.
4. Starting from one box spanning the cube, repeatedly split the box with
   the largest variance along its longest axis, at the midpoint index.
5. Each final box contributes its weighted average color, keyed with the
   box's total pixel count.

Boxes live in a flat list (an arena); splitting replaces the parent in
place with its lower half and appends the upper half. There is no
recursion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from seedtone.measure.raster import load_pixels, pack_argb

logger = logging.getLogger(__name__)


DEFAULT_MAX_COLORS = 128

INDEX_BITS = 5
SIDE_LENGTH = 1 << INDEX_BITS  # 32 cells per channel
_SHIFT = 8 - INDEX_BITS

# Longest-axis tie-break order
AXIS_RED = 0
AXIS_GREEN = 1
AXIS_BLUE = 2


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True)
class QuantizerResult:
    """
    Quantized color histogram.

    Attributes:
        colors: Mapping of packed ARGB color → pixel count. Counts sum to
            the number of pixels in the source raster.
    """
    colors: dict[int, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        """Total pixel count."""
        return sum(self.colors.values())

    def top_colors(self, n: int) -> list[int]:
        """
        Return the ``n`` most populous colors.

        Ties are broken by ascending ARGB value so the order is stable.
        """
        ranked = sorted(self.colors.items(), key=lambda item: (-item[1], item[0]))
        return [argb for argb, _ in ranked[:max(n, 0)]]

    def __len__(self) -> int:
        return len(self.colors)

    def __bool__(self) -> bool:
        return bool(self.colors)


# =============================================================================
# Moment cube
# =============================================================================


class ColorCube:
    """
    32×32×32 histogram with per-cell weight and moments.

    Attributes:
        weights: Pixel count per cell
        moments_r, moments_g, moments_b: Σ count × channel per cell
        moments: Per-cell second moment (mR² + mG² + mB²) / weight
    """

    def __init__(self) -> None:
        shape = (SIDE_LENGTH, SIDE_LENGTH, SIDE_LENGTH)
        self.weights = np.zeros(shape, dtype=np.int64)
        self.moments_r = np.zeros(shape, dtype=np.int64)
        self.moments_g = np.zeros(shape, dtype=np.int64)
        self.moments_b = np.zeros(shape, dtype=np.int64)
        self.moments = np.zeros(shape, dtype=np.float64)

    @classmethod
    def from_histogram(cls, histogram: dict[int, int]) -> ColorCube:
        """Bin an exact-color histogram into the cube."""
        cube = cls()
        argb = np.fromiter(histogram.keys(), dtype=np.int64, count=len(histogram))
        counts = np.fromiter(histogram.values(), dtype=np.int64, count=len(histogram))
        cube.add_colors(argb, counts)
        cube.compute_moments()
        return cube

    def add_colors(self, argb: NDArray[np.int64], counts: NDArray[np.int64]) -> None:
        """Accumulate colors with their counts into the cube cells."""
        r = (argb >> 16) & 0xFF
        g = (argb >> 8) & 0xFF
        b = argb & 0xFF
        index = (r >> _SHIFT, g >> _SHIFT, b >> _SHIFT)

        np.add.at(self.weights, index, counts)
        np.add.at(self.moments_r, index, counts * r)
        np.add.at(self.moments_g, index, counts * g)
        np.add.at(self.moments_b, index, counts * b)

    def compute_moments(self) -> None:
        """Fill the per-cell second moments from the first moments."""
        w = self.weights.astype(np.float64)
        mr = self.moments_r.astype(np.float64)
        mg = self.moments_g.astype(np.float64)
        mb = self.moments_b.astype(np.float64)
        occupied = w > 0
        self.moments = np.zeros_like(w)
        self.moments[occupied] = (
            mr[occupied] ** 2 + mg[occupied] ** 2 + mb[occupied] ** 2
        ) / w[occupied]

    def box(self, r0: int, g0: int, b0: int, r1: int, g1: int, b1: int) -> ColorBox:
        """Create a box over the inclusive index ranges, with its statistics."""
        sl = (slice(r0, r1 + 1), slice(g0, g1 + 1), slice(b0, b1 + 1))
        return ColorBox(
            r0=r0, r1=r1, g0=g0, g1=g1, b0=b0, b1=b1,
            weight=int(self.weights[sl].sum()),
            sum_r=int(self.moments_r[sl].sum()),
            sum_g=int(self.moments_g[sl].sum()),
            sum_b=int(self.moments_b[sl].sum()),
            sum_moments=float(self.moments[sl].sum()),
        )


# =============================================================================
# Boxes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorBox:
    """
    Axis-aligned region of the cube (inclusive index bounds).

    Weight and moments are computed once when the box is created, so the
    variance and average color never need another pass over the cells.
    """
    r0: int
    r1: int
    g0: int
    g1: int
    b0: int
    b1: int
    weight: int = 0
    sum_r: int = 0
    sum_g: int = 0
    sum_b: int = 0
    sum_moments: float = 0.0

    @property
    def volume(self) -> int:
        return (self.r1 - self.r0 + 1) * (self.g1 - self.g0 + 1) * (self.b1 - self.b0 + 1)

    @property
    def can_split(self) -> bool:
        return self.r1 > self.r0 or self.g1 > self.g0 or self.b1 > self.b0

    @property
    def variance(self) -> float:
        """
        Σ over R, G, B of (Σ w·c² − (Σ w·c)² / Σ w), at cell resolution.

        Zero for boxes that cannot be split or hold no pixels.
        """
        if not self.can_split or self.weight == 0:
            return 0.0
        w = float(self.weight)
        return self.sum_moments - (
            float(self.sum_r) ** 2 + float(self.sum_g) ** 2 + float(self.sum_b) ** 2
        ) / w

    @property
    def longest_axis(self) -> int:
        """Longest side; ties favor red, then green, then blue."""
        dr = self.r1 - self.r0
        dg = self.g1 - self.g0
        db = self.b1 - self.b0
        if dr >= dg and dr >= db:
            return AXIS_RED
        if dg >= db:
            return AXIS_GREEN
        return AXIS_BLUE

    def average_argb(self) -> int:
        """Weighted average color (integer-truncated) as opaque ARGB."""
        if self.weight == 0:
            return 0
        r = self.sum_r // self.weight
        g = self.sum_g // self.weight
        b = self.sum_b // self.weight
        return 0xFF000000 | (r << 16) | (g << 8) | b

    def split(self, cube: ColorCube) -> tuple[ColorBox, ColorBox]:
        """Cut at the midpoint of the longest axis into (lower, upper)."""
        axis = self.longest_axis
        if axis == AXIS_RED:
            mid = (self.r0 + self.r1) // 2
            return (
                cube.box(self.r0, self.g0, self.b0, mid, self.g1, self.b1),
                cube.box(mid + 1, self.g0, self.b0, self.r1, self.g1, self.b1),
            )
        if axis == AXIS_GREEN:
            mid = (self.g0 + self.g1) // 2
            return (
                cube.box(self.r0, self.g0, self.b0, self.r1, mid, self.b1),
                cube.box(self.r0, mid + 1, self.b0, self.r1, self.g1, self.b1),
            )
        mid = (self.b0 + self.b1) // 2
        return (
            cube.box(self.r0, self.g0, self.b0, self.r1, self.g1, mid),
            cube.box(self.r0, self.g0, mid + 1, self.r1, self.g1, self.b1),
        )


# =============================================================================
# Quantizer
# =============================================================================


def build_histogram(image: Any) -> dict[int, int]:
    """
    Count every exact pixel color of a raster.

    Returns:
        Mapping of packed ARGB → count. Empty for zero-pixel rasters.

    Raises:
        InvalidImageError: If the image is None or malformed
    """
    pixels = load_pixels(image)
    if pixels.size == 0:
        return {}
    argb = pack_argb(pixels)
    values, counts = np.unique(argb, return_counts=True)
    return {int(v): int(c) for v, c in zip(values, counts)}


class Quantizer:
    """
    Reduces an image to at most ``max_colors`` representative colors.

    Args:
        max_colors: Upper bound on output colors. Values <= 0 fall back to
            the default of 128.
    """

    def __init__(self, max_colors: int = DEFAULT_MAX_COLORS) -> None:
        self.max_colors = max_colors if max_colors > 0 else DEFAULT_MAX_COLORS

    def quantize(self, image: Any) -> QuantizerResult:
        """
        Quantize a raster.

        Args:
            image: (H, W, 3|4) uint8 array or decoded PIL image

        Returns:
            QuantizerResult whose counts sum to width × height
        """
        histogram = build_histogram(image)
        return self.quantize_histogram(histogram)

    def quantize_histogram(self, histogram: dict[int, int]) -> QuantizerResult:
        """Quantize an exact-color histogram."""
        if len(histogram) <= self.max_colors:
            logger.debug(
                "%d distinct colors <= %d, skipping box splitting",
                len(histogram), self.max_colors,
            )
            return QuantizerResult(colors=dict(histogram))

        cube = ColorCube.from_histogram(histogram)
        boxes = self._split_boxes(cube, limit=min(self.max_colors, len(histogram)))

        colors: dict[int, int] = {}
        for box in boxes:
            if box.weight == 0:
                continue
            argb = box.average_argb()
            # Distinct boxes can average to the same color; keep both counts
            colors[argb] = colors.get(argb, 0) + box.weight

        logger.debug(
            "Quantized %d distinct colors into %d boxes (%d colors)",
            len(histogram), len(boxes), len(colors),
        )
        return QuantizerResult(colors=colors)

    @staticmethod
    def _split_boxes(cube: ColorCube, limit: int) -> list[ColorBox]:
        """Split the max-variance box until ``limit`` boxes or none qualify."""
        last = SIDE_LENGTH - 1
        boxes = [cube.box(0, 0, 0, last, last, last)]

        while len(boxes) < limit:
            max_variance = 0.0
            max_index = -1
            for i, box in enumerate(boxes):
                if not box.can_split:
                    continue
                variance = box.variance
                if variance > max_variance:
                    max_variance = variance
                    max_index = i

            if max_index == -1:
                break

            lower, upper = boxes[max_index].split(cube)
            boxes[max_index] = lower
            boxes.append(upper)

        return boxes


def quantize(image: Any, max_colors: int = DEFAULT_MAX_COLORS) -> QuantizerResult:
    """
    Quantize a raster to at most ``max_colors`` colors.

    Convenience wrapper around ``Quantizer(max_colors).quantize(image)``.
    An empty raster yields an empty result.
    """
    return Quantizer(max_colors).quantize(image)
