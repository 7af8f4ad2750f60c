# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Seed color scoring.

Ranks quantized colors by how well they would drive a theme:
- Chroma score: Gaussian closeness of LAB chroma to a target (48)
- Population score: share of the image the color covers

Colors that are too dark, too light or nearly gray are never scored.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from numpy.typing import NDArray

from seedtone.measure.colorspace import argb_to_rgb, lab_chroma, rgb_to_lab
from seedtone.measure.quantizer import QuantizerResult
from seedtone.schema import ScoredColor

logger = logging.getLogger(__name__)


# Material blue, used when an image offers nothing to score
DEFAULT_SEED_COLOR = 0xFF4285F4


@dataclass(frozen=True)
class ScorerConfig:
    """Weights and targets for seed scoring."""

    # LAB chroma that earns the full chroma score
    target_chroma: float = 48.0

    # Final score = chroma_weight × chroma + population_weight × population
    chroma_weight: float = 0.7
    population_weight: float = 0.3

    # Gaussian falloff: exp(-(chroma - target)² / chroma_falloff)
    chroma_falloff: float = 1000.0

    # Suitability bounds on 0.299R + 0.587G + 0.114B (0-255)
    min_luminance: float = 25.5
    max_luminance: float = 229.5

    # Minimum max(R,G,B) - min(R,G,B) for a color to count as chromatic
    min_channel_spread: int = 15

    def __post_init__(self) -> None:
        for name in ("chroma_weight", "population_weight"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a finite value >= 0, got {value}")
        if not math.isfinite(self.chroma_falloff) or self.chroma_falloff <= 0.0:
            raise ValueError(f"chroma_falloff must be a finite value > 0, got {self.chroma_falloff}")



def is_color_suitable(argb: int, config: Optional[ScorerConfig] = None) -> bool:
    """
    Check whether a color can serve as a seed.

    Rejects colors with luma below 10% or above 90%, and near-grays whose
    channel spread is under 15.
    """
    cfg = config or ScorerConfig()
    r = float((argb >> 16) & 0xFF)
    g = float((argb >> 8) & 0xFF)
    b = float(argb & 0xFF)

    luma = 0.299 * r + 0.587 * g + 0.114 * b
    if luma < cfg.min_luminance or luma > cfg.max_luminance:
        return False

    return max(r, g, b) - min(r, g, b) >= cfg.min_channel_spread


def _gaussian_chroma_scores(chroma: NDArray[np.float64], cfg: ScorerConfig) -> NDArray[np.float64]:
    """100 × exp(-(chroma - target)² / falloff), elementwise."""
    distance = chroma - cfg.target_chroma
    return 100.0 * np.exp(-(distance ** 2) / cfg.chroma_falloff)


def chroma_score(argb: int, config: Optional[ScorerConfig] = None) -> float:
    """Score 0-100 for how close a color's LAB chroma is to the target."""
    cfg = config or ScorerConfig()
    return float(_gaussian_chroma_scores(lab_chroma(argb_to_rgb(argb)), cfg))


def score_colors(
    colors: dict[int, int] | QuantizerResult,
    config: Optional[ScorerConfig] = None,
) -> list[ScoredColor]:
    """
    Score colors for seed suitability.

    Args:
        colors: Mapping of ARGB → pixel count, or a QuantizerResult
        config: Scoring weights (uses defaults if None)

    Returns:
        ScoredColor list sorted by descending score. Ties go to the more
        populous color, then the lower ARGB value. Unsuitable colors are
        left out entirely.
    """
    cfg = config or ScorerConfig()
    if isinstance(colors, QuantizerResult):
        colors = colors.colors
    if not colors:
        return []

    total = sum(colors.values())
    if total == 0:
        return []

    candidates = [(argb, count) for argb, count in colors.items() if is_color_suitable(argb, cfg)]
    if not candidates:
        return []

    # Vectorized chroma for all candidates at once
    argbs = np.array([argb for argb, _ in candidates], dtype=np.int64)
    chroma_scores = _gaussian_chroma_scores(lab_chroma(argb_to_rgb(argbs)), cfg)

    ranked = []
    for (argb, count), c_score in zip(candidates, chroma_scores):
        population_score = 100.0 * count / total
        score = cfg.chroma_weight * float(c_score) + cfg.population_weight * population_score
        ranked.append((score, count, argb))

    ranked.sort(key=lambda item: (-item[0], -item[1], item[2]))
    return [ScoredColor(color=argb, score=score) for score, _, argb in ranked]


def find_seed_color(
    result: Optional[QuantizerResult | dict[int, int]],
    config: Optional[ScorerConfig] = None,
) -> int:
    """
    Pick the seed color for theme generation.

    Fallback chain, never raises:
    1. Highest-scoring suitable color
    2. Most populous color, if nothing is suitable
    3. DEFAULT_SEED_COLOR, if there are no colors at all

    Returns:
        Packed ARGB seed color
    """
    if isinstance(result, dict):
        result = QuantizerResult(colors=result)
    if result is None or not result.colors:
        logger.debug("No colors to score, using default seed %08X", DEFAULT_SEED_COLOR)
        return DEFAULT_SEED_COLOR

    scores = score_colors(result, config)
    if scores:
        return scores[0].color

    top = result.top_colors(1)
    if top:
        logger.debug("No suitable seed candidates, using most populous color %08X", top[0])
        return top[0]
    return DEFAULT_SEED_COLOR


def filter_similar_colors(colors: Iterable[int], min_distance: float) -> list[int]:
    """
    Drop colors that are perceptually close to an earlier one.

    Keeps input order. A color is dropped when its LAB distance to any
    already-kept color is below ``min_distance``.
    """
    colors = list(colors)
    if len(colors) <= 1:
        return colors

    labs = rgb_to_lab(argb_to_rgb(np.array(colors, dtype=np.int64)))
    kept: list[int] = []
    kept_idx: list[int] = []

    for i, argb in enumerate(colors):
        if kept_idx:
            dists = np.sqrt(np.sum((labs[kept_idx] - labs[i]) ** 2, axis=1))
            if np.any(dists < min_distance):
                continue
        kept.append(argb)
        kept_idx.append(i)

    return kept
