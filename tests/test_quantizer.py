# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""Tests for raster handling and box-splitting quantization."""

import numpy as np
import pytest
from PIL import Image

from seedtone.errors import InvalidImageError
from seedtone.measure.quantizer import (
    AXIS_BLUE,
    AXIS_GREEN,
    AXIS_RED,
    ColorBox,
    ColorCube,
    Quantizer,
    QuantizerResult,
    build_histogram,
    quantize,
)
from seedtone.measure.raster import load_pixels, pack_argb, raster_size


def _solid_image(r, g, b, height=20, width=30):
    """Create a solid-color image."""
    return np.full((height, width, 3), [r, g, b], dtype=np.uint8)


def _noise_image(height=64, width=64, seed=42):
    """Create an image of uniformly random colors."""
    return np.random.RandomState(seed).randint(0, 256, size=(height, width, 3), dtype=np.uint8)


class TestRaster:

    def test_none_rejected(self):
        with pytest.raises(InvalidImageError):
            load_pixels(None)

    @pytest.mark.parametrize("shape", [(4, 4), (4, 4, 2), (4, 4, 5), (2, 4, 4, 3)])
    def test_bad_shape(self, shape):
        with pytest.raises(InvalidImageError):
            load_pixels(np.zeros(shape, dtype=np.uint8))

    def test_bad_dtype(self):
        with pytest.raises(InvalidImageError):
            load_pixels(np.zeros((4, 4, 3), dtype=np.float32))

    def test_file_path_rejected(self):
        with pytest.raises(InvalidImageError):
            load_pixels("wallpaper.png")

    def test_pil_rgb(self):
        pixels = load_pixels(Image.new("RGB", (5, 3), (10, 20, 30)))
        assert pixels.shape == (3, 5, 3)
        assert raster_size(pixels) == (5, 3)

    def test_pil_rgba_keeps_alpha(self):
        pixels = load_pixels(Image.new("RGBA", (2, 2), (10, 20, 30, 40)))
        assert pixels.shape == (2, 2, 4)

    def test_pil_grayscale_converted(self):
        pixels = load_pixels(Image.new("L", (2, 2), 100))
        assert pixels.shape == (2, 2, 3)
        assert tuple(pixels[0, 0]) == (100, 100, 100)

    def test_pack_rgb_is_opaque(self):
        packed = pack_argb(np.array([[[0x67, 0x50, 0xA4]]], dtype=np.uint8))
        assert int(packed[0]) == 0xFF6750A4

    def test_pack_rgba_opaque_unchanged(self):
        packed = pack_argb(np.array([[[0x67, 0x50, 0xA4, 0xFF]]], dtype=np.uint8))
        assert int(packed[0]) == 0xFF6750A4

    def test_pack_rgba_premultiplied(self):
        packed = pack_argb(np.array([[[255, 255, 255, 128], [255, 0, 0, 0]]], dtype=np.uint8))
        assert int(packed[0]) == 0x80808080
        assert int(packed[1]) == 0x00000000


class TestHistogram:

    def test_solid(self):
        assert build_histogram(_solid_image(1, 2, 3)) == {0xFF010203: 600}

    def test_empty(self):
        assert build_histogram(np.zeros((0, 0, 3), dtype=np.uint8)) == {}
        assert build_histogram(np.zeros((0, 5, 4), dtype=np.uint8)) == {}

    def test_counts_sum_to_pixels(self):
        hist = build_histogram(_noise_image(10, 12))
        assert sum(hist.values()) == 120


class TestQuantizerBasic:

    def test_none_rejected(self):
        with pytest.raises(InvalidImageError):
            Quantizer().quantize(None)

    def test_empty_image(self):
        result = quantize(np.zeros((0, 0, 3), dtype=np.uint8))
        assert len(result) == 0
        assert not result
        assert result.total == 0

    def test_solid_image(self):
        result = quantize(_solid_image(103, 80, 164))
        assert result.colors == {0xFF6750A4: 600}

    def test_few_colors_returned_exactly(self):
        img = _solid_image(0, 0, 0, height=10, width=10)
        img[:, 5:] = (255, 255, 255)
        result = quantize(img, max_colors=2)
        assert result.colors == {0xFF000000: 50, 0xFFFFFFFF: 50}

    def test_default_max_colors(self):
        assert Quantizer(0).max_colors == 128
        assert Quantizer(-5).max_colors == 128
        assert Quantizer().max_colors == 128

    def test_pil_input(self):
        result = quantize(Image.new("RGB", (4, 3), (10, 20, 30)))
        assert result.colors == {0xFF0A141E: 12}

    def test_deterministic(self):
        img = _noise_image()
        assert quantize(img, 32).colors == quantize(img, 32).colors


class TestQuantizerInvariants:

    @pytest.mark.parametrize("max_colors", [1, 2, 16, 128])
    def test_counts_sum_to_pixels(self, max_colors):
        result = quantize(_noise_image(), max_colors)
        assert result.total == 64 * 64

    @pytest.mark.parametrize("max_colors", [1, 2, 16, 128])
    def test_at_most_max_colors(self, max_colors):
        result = quantize(_noise_image(), max_colors)
        assert 1 <= len(result) <= max_colors

    def test_rgba_counts_sum_to_pixels(self):
        rng = np.random.RandomState(7)
        img = rng.randint(0, 256, size=(40, 50, 4), dtype=np.uint8)
        result = quantize(img, 64)
        assert result.total == 2000
        assert len(result) <= 64

    def test_outputs_opaque(self):
        result = quantize(_noise_image(), 16)
        assert all((argb >> 24) == 0xFF for argb in result.colors)


class TestBoxSplitting:

    def test_zero_variance_box_not_split(self):
        """Colors sharing one cube cell can never be separated."""
        histogram = {0xFF000000: 1, 0xFF010101: 1, 0xFF020202: 1}
        result = Quantizer(2).quantize_histogram(histogram)
        assert result.colors == {0xFF010101: 3}

    def test_first_split_on_red_midpoint(self):
        histogram = {0xFF000000: 1, 0xFF010101: 1, 0xFFFFFFFF: 2}
        result = Quantizer(2).quantize_histogram(histogram)
        assert result.colors == {0xFF000000: 2, 0xFFFFFFFF: 2}

    def test_longest_axis_tie_break(self):
        assert ColorBox(0, 31, 0, 31, 0, 31).longest_axis == AXIS_RED
        assert ColorBox(0, 3, 0, 5, 0, 5).longest_axis == AXIS_GREEN
        assert ColorBox(0, 0, 0, 0, 0, 7).longest_axis == AXIS_BLUE

    def test_single_cell_cannot_split(self):
        box = ColorBox(4, 4, 4, 4, 4, 4)
        assert not box.can_split
        assert box.volume == 1
        assert box.variance == 0.0

    def test_split_halves_partition_weight(self):
        cube = ColorCube.from_histogram({0xFF102030: 3, 0xFFF0E0D0: 5, 0xFF808080: 2})
        whole = cube.box(0, 0, 0, 31, 31, 31)
        lower, upper = whole.split(cube)
        assert whole.weight == 10
        assert lower.weight + upper.weight == 10
        assert lower.r1 == 15 and upper.r0 == 16

    def test_average_is_truncated(self):
        cube = ColorCube.from_histogram({0xFF000000: 1, 0xFF010101: 1})
        box = cube.box(0, 0, 0, 31, 31, 31)
        assert box.average_argb() == 0xFF000000


class TestQuantizerResult:

    def test_top_colors_order(self):
        result = QuantizerResult(colors={0xFF000003: 5, 0xFF000001: 5, 0xFF000002: 9})
        assert result.top_colors(2) == [0xFF000002, 0xFF000001]
        assert result.top_colors(10) == [0xFF000002, 0xFF000001, 0xFF000003]
        assert result.top_colors(0) == []

    def test_total(self):
        assert QuantizerResult(colors={1: 2, 3: 4}).total == 6


class TestMultiSplit:
    """
    Five colors at cube corners:
    black, green | red, magenta, white.

    1. The first red split leaves {black, green} (variance 32512.5) and
       {red, magenta, white} (86700). The upper box is split on green.
    2. That leaves {black, green} and {red, magenta} tied at 32512.5, with
       {white} at zero. The tie goes to the first box in the list.
    """

    HISTOGRAM = {
        0xFF000000: 1,
        0xFF00FF00: 1,
        0xFFFF0000: 1,
        0xFFFF00FF: 1,
        0xFFFFFFFF: 1,
    }

    def test_largest_variance_split_first(self):
        result = Quantizer(3).quantize_histogram(self.HISTOGRAM)
        assert result.colors == {
            0xFF007F00: 2,
            0xFFFF007F: 2,
            0xFFFFFFFF: 1,
        }

    def test_variance_tie_goes_to_first_box(self):
        result = Quantizer(4).quantize_histogram(self.HISTOGRAM)
        assert result.colors == {
            0xFF000000: 1,
            0xFF00FF00: 1,
            0xFFFF007F: 2,
            0xFFFFFFFF: 1,
        }

    def test_box_order_after_splits(self):
        cube = ColorCube.from_histogram(self.HISTOGRAM)
        boxes = Quantizer._split_boxes(cube, limit=4)
        # Lower halves replace their parent, upper halves are appended
        assert [box.average_argb() for box in boxes] == [
            0xFF000000,
            0xFFFF007F,
            0xFFFFFFFF,
            0xFF00FF00,
        ]

    def test_stops_when_no_box_has_variance(self):
        histogram = {0xFF000000: 1, 0xFF010101: 1, 0xFFFFFFFF: 1, 0xFFFEFEFE: 1}
        cube = ColorCube.from_histogram(histogram)
        assert len(Quantizer._split_boxes(cube, limit=3)) == 2
        assert Quantizer(3).quantize_histogram(histogram).colors == {
            0xFF000000: 2,
            0xFFFEFEFE: 2,
        }
