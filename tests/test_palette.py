# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""Tests for tonal palette generation."""

import pytest

from seedtone.errors import InvalidColorError
from seedtone.schema import HSL, PALETTE_NAMES, TONE_STOPS, Color
from seedtone.theme.palette import (
    ERROR_HSL,
    generate_error_palette,
    generate_neutral_palette,
    generate_palette,
    generate_tonal_palette,
)


def _hue_distance(a, b):
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


class TestTonalPalette:

    @pytest.mark.parametrize("base, shift", [
        (HSL(H=120.0, S=70.0, L=30.0), 0.0),
        (HSL(H=120.0, S=0.0, L=50.0), 0.0),
        (HSL(H=45.0, S=100.0, L=50.0), 0.0),
        (HSL(H=359.9, S=60.0, L=50.0), 0.0),
        (HSL(H=400.0, S=60.0, L=50.0), 0.0),
        (HSL(H=200.0, S=60.0, L=50.0), 1000.0),
    ])
    def test_thirteen_stops(self, base, shift):
        tp = generate_tonal_palette(base, hue_shift=shift)
        assert tuple(t for t, _ in tp) == TONE_STOPS

    def test_ends_are_black_and_white(self):
        tp = generate_tonal_palette(HSL(H=300.0, S=100.0, L=50.0))
        assert tp.tone(0) == Color(0, 0, 0)
        assert tp.tone(100) == Color(255, 255, 255)

    @pytest.mark.parametrize("tone", TONE_STOPS)
    def test_lightness_tracks_tone(self, tone):
        tp = generate_tonal_palette(HSL(H=210.0, S=60.0, L=50.0))
        assert tp.tone(tone).hsl.L == pytest.approx(tone, abs=0.5)

    def test_hue_preserved_mid_ramp(self):
        tp = generate_tonal_palette(HSL(H=210.0, S=60.0, L=50.0))
        for tone in (30, 40, 50, 60, 70):
            assert _hue_distance(tp.tone(tone).hsl.H, 210.0) < 2.0

    def test_hue_shift_wraps(self):
        tp = generate_tonal_palette(HSL(H=350.0, S=80.0, L=50.0), hue_shift=20.0)
        assert _hue_distance(tp.tone(50).hsl.H, 10.0) < 2.0

    def test_saturation_ramps_down_at_ends(self):
        tp = generate_tonal_palette(HSL(H=0.0, S=100.0, L=50.0))
        assert tp.tone(10).hsl.S < tp.tone(40).hsl.S
        assert tp.tone(95).hsl.S < tp.tone(60).hsl.S

    def test_base_lightness_ignored(self):
        a = generate_tonal_palette(HSL(H=40.0, S=50.0, L=10.0))
        b = generate_tonal_palette(HSL(H=40.0, S=50.0, L=90.0))
        assert a == b


class TestNeutralPalettes:

    def test_neutral_is_nearly_gray(self):
        tp = generate_neutral_palette(HSL(H=256.0, S=34.0, L=48.0), 2.0)
        c = tp.tone(50)
        assert max(c.rgb) - min(c.rgb) <= 6

    def test_variant_more_tinted(self):
        seed = HSL(H=256.0, S=34.0, L=48.0)
        neutral = generate_neutral_palette(seed, 2.0).tone(50)
        variant = generate_neutral_palette(seed, 8.0).tone(50)
        assert max(variant.rgb) - min(variant.rgb) > max(neutral.rgb) - min(neutral.rgb)

    def test_no_saturation_ramp(self):
        tp = generate_neutral_palette(HSL(H=0.0, S=50.0, L=50.0), 8.0)
        assert tp.tone(50).hsl.S == pytest.approx(8.0, abs=1.0)
        # A ramp would leave 8 × 0.25 = 2 at tone 95
        assert tp.tone(95).hsl.S > 5.0


class TestErrorPalette:

    def test_fixed_red(self):
        c = generate_error_palette().tone(40)
        assert c.r > c.g and c.r > c.b
        assert _hue_distance(c.hsl.H, ERROR_HSL.H) < 2.0

    def test_independent_of_seed(self):
        assert generate_palette("#FF0000").error == generate_palette("#00FF00").error


class TestGeneratePalette:

    def test_all_palettes_present(self):
        palette = generate_palette("#6750A4")
        for name in PALETTE_NAMES:
            assert len(palette.get(name)) == 13

    def test_seed_kept(self):
        assert generate_palette("#6750A4").seed == Color.from_hex("#6750A4")

    def test_seed_forms_agree(self):
        c = Color.from_hex("#6750A4")
        assert generate_palette(c) == generate_palette("#6750A4") == generate_palette(0xFF6750A4)

    def test_deterministic(self):
        assert generate_palette("#336699") == generate_palette("#336699")

    def test_secondary_and_tertiary_hues(self):
        seed = Color.from_hex("#6750A4")
        palette = generate_palette(seed)
        h = seed.hsl.H
        assert _hue_distance(palette.primary.tone(50).hsl.H, h) < 2.0
        assert _hue_distance(palette.secondary.tone(50).hsl.H, h + 60.0) < 2.0
        assert _hue_distance(palette.tertiary.tone(50).hsl.H, h + 120.0) < 2.0

    def test_secondary_less_saturated(self):
        palette = generate_palette("#6750A4")
        p = palette.primary.tone(50).hsl.S
        s = palette.secondary.tone(50).hsl.S
        t = palette.tertiary.tone(50).hsl.S
        assert p > s > t

    def test_invalid_seed(self):
        with pytest.raises(InvalidColorError):
            generate_palette("#XYZ")
