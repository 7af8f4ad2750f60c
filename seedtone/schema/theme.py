# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Theme value types: scored seeds, tonal palettes and role schemes.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same seed and mode → same scheme, role for role
- Flat: A Scheme is a plain mapping of role name → Color

Tone stops:
    Every TonalPalette holds exactly the 13 canonical stops
    0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100
    (0 = black, 100 = white). Looking up any other tone returns the
    nearest stop; when two stops are equally near, the lower one wins.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterator

from seedtone.schema.color import Color


# =============================================================================
# Constants
# =============================================================================

TONE_STOPS: tuple[int, ...] = (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 95, 99, 100)

PALETTE_NAMES: tuple[str, ...] = (
    "primary",
    "secondary",
    "tertiary",
    "neutral",
    "neutral_variant",
    "error",
)


# =============================================================================
# Scored seed candidates
# =============================================================================


@dataclass(frozen=True, slots=True)
class ScoredColor:
    """
    A candidate seed color with its suitability score.

    Attributes:
        color: Packed ARGB color
        score: Suitability, 0-100 with the default weights (higher is better)
    """
    color: int
    score: float

    def __post_init__(self) -> None:
        if self.score < 0.0:
            raise ValueError(f"Score must be >= 0, got {self.score}")

    @property
    def hex(self) -> str:
        return Color.from_argb(self.color).hex

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"color": self.hex, "score": self.score}


# =============================================================================
# Tonal palettes
# =============================================================================


def nearest_tone(tone: float, stops: tuple[int, ...] = TONE_STOPS) -> int:
    """Nearest stop to ``tone``; ties resolve to the lower stop."""
    return min(stops, key=lambda stop: (abs(stop - tone), stop))


@dataclass(frozen=True, slots=True)
class TonalPalette:
    """
    One hue's lightness ramp, sampled at the canonical tone stops.

    Attributes:
        tones: (tone, Color) pairs in ascending tone order
    """
    tones: tuple[tuple[int, Color], ...]

    def __post_init__(self) -> None:
        """Validate that exactly the canonical stops are present."""
        stops = tuple(t for t, _ in self.tones)
        if stops != TONE_STOPS:
            raise ValueError(f"Tonal palette stops must be {TONE_STOPS}, got {stops}")

    def tone(self, tone: float) -> Color:
        """
        Color at ``tone``.

        Never fails: tones that are not a canonical stop resolve to the
        nearest stop (lower stop on ties).
        """
        return dict(self.tones)[nearest_tone(tone)]

    def __getitem__(self, tone: float) -> Color:
        return self.tone(tone)

    def __iter__(self) -> Iterator[tuple[int, Color]]:
        return iter(self.tones)

    def __len__(self) -> int:
        return len(self.tones)

    def to_dict(self) -> dict:
        """Serialize to dictionary of tone → lowercase hex."""
        return {t: color.hex.lower() for t, color in self.tones}


@dataclass(frozen=True, slots=True)
class Palette:
    """
    A seed color expanded into six tonal palettes.

    Attributes:
        seed: The color the palette was generated from
        primary: Seed hue, full saturation
        secondary: Hue +60°, saturation ×0.7
        tertiary: Hue +120°, saturation ×0.5
        neutral: Seed hue at saturation 2 (faint tint)
        neutral_variant: Seed hue at saturation 8
        error: Fixed red, independent of the seed
    """
    seed: Color
    primary: TonalPalette
    secondary: TonalPalette
    tertiary: TonalPalette
    neutral: TonalPalette
    neutral_variant: TonalPalette
    error: TonalPalette

    def get(self, name: str) -> TonalPalette:
        """Look up a tonal palette by name (e.g. ``"neutral_variant"``)."""
        if name not in PALETTE_NAMES:
            raise KeyError(f"No tonal palette named '{name}'")
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        result: dict = {"seed": self.seed.hex.lower()}
        for name in PALETTE_NAMES:
            result[name] = self.get(name).to_dict()
        return result


# =============================================================================
# Schemes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Scheme:
    """
    A complete light or dark color scheme.

    Role fields hold concrete colors read off the palette at fixed tones.
    ``colors`` exposes them as a flat role → Color mapping and
    ``to_dict()`` as role → ``"#rrggbb"`` for template substitution.
    """
    seed: Color
    is_dark: bool
    palette: Palette

    primary: Color
    on_primary: Color
    primary_container: Color
    on_primary_container: Color

    secondary: Color
    on_secondary: Color
    secondary_container: Color
    on_secondary_container: Color

    tertiary: Color
    on_tertiary: Color
    tertiary_container: Color
    on_tertiary_container: Color

    error: Color
    on_error: Color
    error_container: Color
    on_error_container: Color

    background: Color
    on_background: Color

    surface: Color
    on_surface: Color
    surface_variant: Color
    on_surface_variant: Color

    outline: Color
    outline_variant: Color

    shadow: Color
    scrim: Color
    inverse_surface: Color
    inverse_on_surface: Color
    inverse_primary: Color

    @property
    def colors(self) -> dict[str, Color]:
        """Flat mapping of role name → Color, in declaration order."""
        return {role: getattr(self, role) for role in SCHEME_ROLES}

    def __getitem__(self, role: str) -> Color:
        if role not in SCHEME_ROLES:
            raise KeyError(f"No scheme role '{role}'")
        return getattr(self, role)

    def to_dict(self) -> dict[str, str]:
        """Role name → lowercase ``"#rrggbb"``."""
        return {role: color.hex.lower() for role, color in self.colors.items()}


_NON_ROLE_FIELDS = {"seed", "is_dark", "palette"}

SCHEME_ROLES: tuple[str, ...] = tuple(
    f.name for f in fields(Scheme) if f.name not in _NON_ROLE_FIELDS
)


# =============================================================================
# Pipeline result
# =============================================================================


@dataclass(frozen=True, slots=True)
class Theme:
    """
    Everything one generation pass produces from an image.

    Attributes:
        seed: Chosen seed color
        palette: Tonal palettes expanded from the seed
        light: Light scheme built from ``palette``
        dark: Dark scheme built from ``palette``
        scores: Ranked seed candidates (empty when a fallback seed was used)
    """
    seed: Color
    palette: Palette
    light: Scheme
    dark: Scheme
    scores: tuple[ScoredColor, ...] = ()

    def scheme(self, dark: bool) -> Scheme:
        return self.dark if dark else self.light
