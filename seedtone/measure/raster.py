# Copyright (c) 2026 Seedtone
# SPDX-License-Identifier: MIT

"""
Raster input handling.

Decoding image files is the caller's job. This module accepts an already
decoded raster and turns it into a validated uint8 array plus packed ARGB
pixel values.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from seedtone.errors import InvalidImageError


def load_pixels(image: Any) -> NDArray[np.uint8]:
    """
    Validate a decoded raster and return it as an (H, W, C) uint8 array.

    Args:
        image: One of:
            - NumPy array of shape (H, W, 3) or (H, W, 4) with uint8 values
            - A decoded ``PIL.Image.Image`` (converted to RGB or RGBA)

    Returns:
        Array of shape (H, W, 3) or (H, W, 4). Zero-sized rasters are
        returned as-is.

    Raises:
        InvalidImageError: If the image is None or not an RGB(A) raster
    """
    if image is None:
        raise InvalidImageError("Image is None")

    if not isinstance(image, np.ndarray):
        image = _from_pil(image)

    pixels = image
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise InvalidImageError(
            f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
        )
    if pixels.dtype != np.uint8:
        raise InvalidImageError(f"Expected uint8 array, got {pixels.dtype}")

    return pixels


def _from_pil(image: Any) -> NDArray[np.uint8]:
    """Convert a decoded PIL image to an array."""
    try:
        from PIL import Image
    except ImportError as e:
        raise InvalidImageError(
            f"Expected numpy array, got {type(image).__name__}"
        ) from e

    if not isinstance(image, Image.Image):
        raise InvalidImageError(
            f"Expected numpy array or PIL image, got {type(image).__name__}"
        )

    has_alpha = image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    image = image.convert("RGBA" if has_alpha else "RGB")
    return np.asarray(image, dtype=np.uint8)


def pack_argb(pixels: NDArray[np.uint8]) -> NDArray[np.int64]:
    """
    Pack an (H, W, 3|4) raster into a flat array of ``0xAARRGGBB`` ints.

    RGBA pixels are alpha-premultiplied the way 16-bit RGBA readers report
    them, then reduced back to 8 bits. RGB rasters are treated as opaque.
    """
    flat = pixels.reshape(-1, pixels.shape[2]).astype(np.int64)
    rgb = flat[:, :3]

    if pixels.shape[2] == 4:
        alpha = flat[:, 3]
        # 8-bit → 16-bit (x * 0x101), premultiply, back to 8 bits
        rgb = ((rgb * 0x101) * alpha[:, np.newaxis] // 0xFF) >> 8
    else:
        alpha = np.full(len(flat), 0xFF, dtype=np.int64)

    return (alpha << 24) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


def raster_size(pixels: NDArray[np.uint8]) -> tuple[int, int]:
    """Return (width, height) of a validated raster."""
    height, width = pixels.shape[:2]
    return width, height
