# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Measurement core for seedtone.

Pixel-level work: quantization, seed scoring, multi-pass extraction and
wallpaper analysis. Everything here is deterministic.
"""

from seedtone.measure.analyzer import ImageAnalysis, analyze
from seedtone.measure.enhanced import ColorInfo, ExtractedColors, extract_colors
from seedtone.measure.quantizer import Quantizer, QuantizerResult, quantize
from seedtone.measure.score import (
    DEFAULT_SEED_COLOR,
    ScorerConfig,
    find_seed_color,
    score_colors,
)

__all__ = [
    "quantize",
    "Quantizer",
    "QuantizerResult",
    "score_colors",
    "find_seed_color",
    "ScorerConfig",
    "DEFAULT_SEED_COLOR",
    "extract_colors",
    "ColorInfo",
    "ExtractedColors",
    "analyze",
    "ImageAnalysis",
]
