# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Color space conversions and color metrics.

Conversion chains:
- sRGB [0,255] → HSL (H degrees, S/L percent) and back
- sRGB [0,255] → Linear RGB → XYZ (D65) → CIE LAB

The array functions accept any array of shape (..., 3) and are pure NumPy.
The Color-level helpers at the bottom (luminance, contrast, distance,
blend, lightness/saturation adjustment) operate on ``Color`` values.
"""

from __future__ import annotations

import dataclasses

import numpy as np
from numpy.typing import ArrayLike, NDArray

from seedtone.schema.color import Color


# =============================================================================
# Constants
# =============================================================================

# Linear sRGB → XYZ (observer 2°, illuminant D65)
_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
], dtype=np.float64)

# D65 reference white on the 0-100 scale
_D65_WHITE = np.array([95.047, 100.000, 108.883], dtype=np.float64)

# ITU-R BT.709 luma weights
_BT709 = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

# sRGB linearization thresholds. LAB uses the IEC value; relative
# luminance uses the WCAG 2.0 value.
SRGB_THRESHOLD = 0.04045
WCAG_THRESHOLD = 0.03928

_LAB_DELTA = 6.0 / 29.0


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(
    srgb: ArrayLike,
    threshold: float = SRGB_THRESHOLD,
) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    - For values <= threshold: value / 12.92
    - Otherwise: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= threshold,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4),
    )


# =============================================================================
# RGB ↔ HSL
# =============================================================================


def rgb_to_hsl(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert sRGB [0,255] to HSL.

    Args:
        rgb: Array of shape (..., 3) with channel values 0-255

    Returns:
        Array of shape (..., 3): H in [0, 360), S and L in [0, 100].
        Achromatic colors get H = S = 0.
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    mx = np.max(rgb, axis=-1)
    mn = np.min(rgb, axis=-1)
    d = mx - mn
    l = (mx + mn) / 2.0
    chromatic = d != 0

    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(l > 0.5, d / (2.0 - mx - mn), d / (mx + mn))
        h = np.select(
            [mx == r, mx == g],
            [(g - b) / d + np.where(g < b, 6.0, 0.0), (b - r) / d + 2.0],
            default=(r - g) / d + 4.0,
        )

    s = np.where(chromatic, s, 0.0)
    h = np.where(chromatic, h / 6.0, 0.0)

    return np.stack([h * 360.0, s * 100.0, l * 100.0], axis=-1)


def _hue_to_rgb(
    p: NDArray[np.float64],
    q: NDArray[np.float64],
    t: NDArray[np.float64],
) -> NDArray[np.float64]:
    t = np.where(t < 0.0, t + 1.0, t)
    t = np.where(t > 1.0, t - 1.0, t)
    return np.select(
        [t < 1.0 / 6.0, t < 0.5, t < 2.0 / 3.0],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (2.0 / 3.0 - t) * 6.0],
        default=p,
    )


def hsl_to_rgb(hsl: ArrayLike) -> NDArray[np.int64]:
    """
    Convert HSL to sRGB [0,255].

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 100].
    Channels are rounded half away from zero.

    Args:
        hsl: Array of shape (..., 3) with (H, S, L)

    Returns:
        Integer array of shape (..., 3) with channel values 0-255
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h = np.mod(hsl[..., 0], 360.0) / 360.0
    s = np.clip(hsl[..., 1], 0.0, 100.0) / 100.0
    l = np.clip(hsl[..., 2], 0.0, 100.0) / 100.0

    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q

    rgb = np.stack([
        _hue_to_rgb(p, q, h + 1.0 / 3.0),
        _hue_to_rgb(p, q, h),
        _hue_to_rgb(p, q, h - 1.0 / 3.0),
    ], axis=-1)

    return np.clip(np.floor(rgb * 255.0 + 0.5), 0, 255).astype(np.int64)


# =============================================================================
# RGB → XYZ → LAB
# =============================================================================


def rgb_to_xyz(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert sRGB [0,255] to CIE XYZ (D65, Y of white = 100).
    """
    linear = srgb_to_linear(np.asarray(rgb, dtype=np.float64) / 255.0)
    return np.einsum("...j,ij->...i", linear, _RGB_TO_XYZ) * 100.0


def _lab_f(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(
        t > _LAB_DELTA ** 3,
        np.cbrt(t),
        t / (3.0 * _LAB_DELTA ** 2) + 4.0 / 29.0,
    )


def xyz_to_lab(xyz: ArrayLike) -> NDArray[np.float64]:
    """
    Convert CIE XYZ (0-100 scale) to CIE LAB against the D65 white point.

    Returns:
        Array of shape (..., 3) with (L, a, b)
    """
    xyz = np.asarray(xyz, dtype=np.float64) / _D65_WHITE
    fx = _lab_f(xyz[..., 0])
    fy = _lab_f(xyz[..., 1])
    fz = _lab_f(xyz[..., 2])

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)
    return np.stack([L, a, b], axis=-1)


def rgb_to_lab(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert sRGB [0,255] to CIE LAB.

    Full chain: sRGB → Linear RGB → XYZ → LAB
    """
    return xyz_to_lab(rgb_to_xyz(rgb))


def lab_chroma(rgb: ArrayLike) -> NDArray[np.float64]:
    """Chroma sqrt(a² + b²) of sRGB [0,255] colors in LAB."""
    lab = rgb_to_lab(rgb)
    return np.sqrt(lab[..., 1] ** 2 + lab[..., 2] ** 2)


# =============================================================================
# Luminance
# =============================================================================


def relative_luminance(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Relative luminance of sRGB [0,255] colors, in [0, 1].

    Channels are linearized with the WCAG threshold and weighted with
    ITU-R BT.709 coefficients.
    """
    linear = srgb_to_linear(
        np.asarray(rgb, dtype=np.float64) / 255.0,
        threshold=WCAG_THRESHOLD,
    )
    return linear @ _BT709


# =============================================================================
# Packed ARGB helpers
# =============================================================================


def argb_to_rgb(argb: ArrayLike) -> NDArray[np.int64]:
    """Unpack ``0xAARRGGBB`` integers into an (..., 3) RGB array."""
    argb = np.asarray(argb, dtype=np.int64)
    return np.stack([(argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF], axis=-1)


def argb_to_hex(argb: int) -> str:
    """Format a packed ARGB integer as lowercase ``"#rrggbb"``."""
    return f"#{(argb >> 16) & 0xFF:02x}{(argb >> 8) & 0xFF:02x}{argb & 0xFF:02x}"


# =============================================================================
# Color-level metrics
# =============================================================================


def luminance(color: Color) -> float:
    """Relative luminance of a Color in [0, 1]."""
    return float(relative_luminance(color.rgb))


def is_dark(color: Color) -> bool:
    """True if relative luminance is below 0.5."""
    return luminance(color) < 0.5


def contrast(c1: Color, c2: Color) -> float:
    """
    WCAG contrast ratio between two colors.

    (L_lighter + 0.05) / (L_darker + 0.05), ranging from 1 to 21.
    """
    l1 = luminance(c1)
    l2 = luminance(c2)
    if l1 > l2:
        return (l1 + 0.05) / (l2 + 0.05)
    return (l2 + 0.05) / (l1 + 0.05)


def distance(c1: Color, c2: Color) -> float:
    """
    Perceptual distance between two colors.

    Euclidean distance in CIE LAB. Used wherever two colors are compared
    for similarity.
    """
    lab = rgb_to_lab(np.array([c1.rgb, c2.rgb], dtype=np.float64))
    return float(np.sqrt(np.sum((lab[0] - lab[1]) ** 2)))


# Alias
delta_e = distance


def blend(c1: Color, c2: Color, ratio: float) -> Color:
    """
    Linearly interpolate two colors channel by channel.

    ratio 0 returns c1, ratio 1 returns c2; values outside [0, 1] are
    clamped. Alpha is interpolated the same way.
    """
    ratio = min(max(float(ratio), 0.0), 1.0)
    a = np.array([*c1.rgb, c1.alpha], dtype=np.float64)
    b = np.array([*c2.rgb, c2.alpha], dtype=np.float64)
    mixed = np.floor(a * (1.0 - ratio) + b * ratio + 0.5).astype(int)
    r, g, bl, alpha = (int(v) for v in mixed)
    return Color(r=r, g=g, b=bl, alpha=alpha)


def _adjust_hsl(color: Color, d_sat: float = 0.0, d_light: float = 0.0) -> Color:
    hsl = color.hsl
    s = min(max(hsl.S + d_sat, 0.0), 100.0)
    l = min(max(hsl.L + d_light, 0.0), 100.0)
    adjusted = Color.from_hsl(hsl.H, s, l)
    return dataclasses.replace(adjusted, alpha=color.alpha)


def darken(color: Color, percent: float) -> Color:
    """Lower HSL lightness by ``percent`` points (floor 0)."""
    return _adjust_hsl(color, d_light=-percent)


def lighten(color: Color, percent: float) -> Color:
    """Raise HSL lightness by ``percent`` points (ceiling 100)."""
    return _adjust_hsl(color, d_light=percent)


def saturate(color: Color, percent: float) -> Color:
    """Raise HSL saturation by ``percent`` points (ceiling 100)."""
    return _adjust_hsl(color, d_sat=percent)


def desaturate(color: Color, percent: float) -> Color:
    """Lower HSL saturation by ``percent`` points (floor 0)."""
    return _adjust_hsl(color, d_sat=-percent)
