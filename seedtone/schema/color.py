# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Color value types.

A Color stores only its 8-bit channels. Every other representation
(HSL, XYZ, LAB, hex, packed ARGB) is derived from those channels on
access, so the representations can never disagree with each other.

Ranges:
- HSL: H in [0, 360), S and L in [0, 100]
- XYZ: D65, scaled so that white has Y = 100
- LAB: L in [0, 100], a/b roughly in [-128, 127]
"""

from __future__ import annotations

import numbers
import re
from dataclasses import dataclass

from seedtone.errors import InvalidColorError


_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")


@dataclass(frozen=True, slots=True)
class HSL:
    """Hue (degrees), saturation and lightness (percent)."""
    H: float
    S: float
    L: float

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"h": self.H, "s": self.S, "l": self.L}


@dataclass(frozen=True, slots=True)
class XYZ:
    """CIE XYZ tristimulus values (D65, 0-100 scale)."""
    X: float
    Y: float
    Z: float


@dataclass(frozen=True, slots=True)
class LAB:
    """CIE L*a*b* coordinates."""
    L: float
    a: float
    b: float

    @property
    def chroma(self) -> float:
        """Distance from the neutral axis, sqrt(a² + b²)."""
        return (self.a ** 2 + self.b ** 2) ** 0.5

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"l": self.L, "a": self.a, "b": self.b}


@dataclass(frozen=True, slots=True)
class Color:
    """
    An sRGB color with optional alpha.

    Attributes:
        r, g, b: Channel values 0-255
        alpha: Opacity 0-255 (255 = opaque)

    Usage:
        >>> c = Color.from_hex("#6750A4")
        >>> c.rgb
        (103, 80, 164)
        >>> round(c.hsl.L, 1)
        47.8
    """
    r: int
    g: int
    b: int
    alpha: int = 255

    def __post_init__(self) -> None:
        """Validate channel values are 8-bit integers."""
        for name in ("r", "g", "b", "alpha"):
            value = getattr(self, name)
            try:
                valid = 0 <= value <= 255 and int(value) == value
            except TypeError:
                valid = False
            if not valid:
                raise InvalidColorError(
                    f"Channel {name} must be an integer 0-255, got {value!r}"
                )
            # NumPy scalars would overflow in the ARGB shifts below
            object.__setattr__(self, name, int(value))

    # -- constructors ---------------------------------------------------------

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """
        Parse a color from ``RRGGBB`` or ``#RRGGBB``.

        Raises:
            InvalidColorError: for any other length or non-hex characters
        """
        if not isinstance(text, str):
            raise InvalidColorError(f"Expected hex string, got {type(text).__name__}")
        m = _HEX_RE.fullmatch(text)
        if not m:
            raise InvalidColorError(f"Invalid hex color: {text!r}")
        digits = m.group(1)
        return cls(
            r=int(digits[0:2], 16),
            g=int(digits[2:4], 16),
            b=int(digits[4:6], 16),
        )

    @classmethod
    def from_argb(cls, argb: int) -> Color:
        """Unpack a 32-bit ``0xAARRGGBB`` integer."""
        argb = int(argb)
        return cls(
            r=(argb >> 16) & 0xFF,
            g=(argb >> 8) & 0xFF,
            b=argb & 0xFF,
            alpha=(argb >> 24) & 0xFF,
        )

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float) -> Color:
        """Build an opaque color from HSL (S and L are clamped to 0-100)."""
        from seedtone.measure.colorspace import hsl_to_rgb
        r, g, b = hsl_to_rgb((h, s, l))
        return cls(r=int(r), g=int(g), b=int(b))

    @classmethod
    def coerce(cls, value: Color | int | str) -> Color:
        """Accept a Color, a packed ARGB int or a hex string."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, numbers.Integral):
            return cls.from_argb(int(value))
        raise InvalidColorError(
            f"Expected Color, ARGB int or hex string, got {type(value).__name__}"
        )

    # -- derived representations ---------------------------------------------

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Hex string like ``"#6750A4"`` (alpha is not included)."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def argb(self) -> int:
        """Packed ``0xAARRGGBB`` integer."""
        return (self.alpha << 24) | (self.r << 16) | (self.g << 8) | self.b

    @property
    def hsl(self) -> HSL:
        from seedtone.measure.colorspace import rgb_to_hsl
        h, s, l = rgb_to_hsl(self.rgb)
        return HSL(H=float(h), S=float(s), L=float(l))

    @property
    def xyz(self) -> XYZ:
        from seedtone.measure.colorspace import rgb_to_xyz
        x, y, z = rgb_to_xyz(self.rgb)
        return XYZ(X=float(x), Y=float(y), Z=float(z))

    @property
    def lab(self) -> LAB:
        from seedtone.measure.colorspace import rgb_to_lab
        l, a, b = rgb_to_lab(self.rgb)
        return LAB(L=float(l), a=float(a), b=float(b))

    # -- perceptual helpers ---------------------------------------------------

    def luminance(self) -> float:
        """Relative luminance (BT.709 weights on linearized channels)."""
        from seedtone.measure.colorspace import relative_luminance
        return float(relative_luminance(self.rgb))

    @property
    def is_dark(self) -> bool:
        return self.luminance() < 0.5

    @property
    def is_light(self) -> bool:
        return not self.is_dark

    def darken(self, percent: float) -> Color:
        from seedtone.measure.colorspace import darken
        return darken(self, percent)

    def lighten(self, percent: float) -> Color:
        from seedtone.measure.colorspace import lighten
        return lighten(self, percent)

    def saturate(self, percent: float) -> Color:
        from seedtone.measure.colorspace import saturate
        return saturate(self, percent)

    def desaturate(self, percent: float) -> Color:
        from seedtone.measure.colorspace import desaturate
        return desaturate(self, percent)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "hex": self.hex,
            "rgb": {"r": self.r, "g": self.g, "b": self.b},
            "hsl": self.hsl.to_dict(),
            "lab": self.lab.to_dict(),
        }

    def __str__(self) -> str:
        return self.hex
