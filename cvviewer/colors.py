"""Colour assignment for label images and scalar images."""

from __future__ import annotations

import random

import numpy as np

PALETTE_SIZE = 256

# For each hue sector: indexes into (v, p, q, t) giving the blue, green and red values.
_SECTOR_TABLE = np.array(
    [[1, 3, 0], [1, 0, 2], [3, 0, 1], [0, 2, 1], [0, 1, 3], [2, 1, 0]],
    dtype=np.intp,
)


def hsv_to_bgr(h: float, s: float, v: float) -> tuple[int, int, int]:
    """Convert one HSV colour (hue in degrees, s and v in [0, 1]) to a BGR triple."""
    if s <= 0.0:
        level = int(v * 255)
        return (level, level, level)

    hh = float(h)
    if hh >= 360.0:
        hh = 0.0
    hh /= 60.0
    sector = int(hh)
    ff = hh - sector
    p = v * (1.0 - s)
    q = v * (1.0 - s * ff)
    t = v * (1.0 - s * (1.0 - ff))

    if sector == 0:
        red, green, blue = v, t, p
    elif sector == 1:
        red, green, blue = q, v, p
    elif sector == 2:
        red, green, blue = p, v, t
    elif sector == 3:
        red, green, blue = p, q, v
    elif sector == 4:
        red, green, blue = t, p, v
    else:
        red, green, blue = v, p, q
    return (int(blue * 255), int(green * 255), int(red * 255))


def hsv_image_to_bgr(hsv) -> np.ndarray:
    """Convert an 8-bit HSV image (hue in [0, 180)) to an 8-bit BGR image."""
    hsv = np.asarray(hsv)
    if hsv.ndim < 1 or hsv.shape[-1] != 3:
        raise ValueError("expected an image with three channels")
    if hsv.dtype != np.uint8:
        raise TypeError("expected an 8-bit HSV image")

    hue = hsv[..., 0].astype(np.float64) * (6.0 / 180.0)
    sat = hsv[..., 1].astype(np.float64) / 255.0
    val = hsv[..., 2].astype(np.float64) / 255.0

    hue = np.mod(hue, 6.0)
    sector = np.floor(hue).astype(np.intp)
    sector = np.clip(sector, 0, 5)
    frac = hue - sector

    p = val * (1.0 - sat)
    q = val * (1.0 - sat * frac)
    t = val * (1.0 - sat * (1.0 - frac))
    table = np.stack([val, p, q, t], axis=-1)

    picks = _SECTOR_TABLE[sector]
    bgr = np.take_along_axis(table, picks, axis=-1)

    grey = (sat == 0.0)[..., None]
    bgr = np.where(grey, val[..., None], bgr)
    return np.clip(np.rint(bgr * 255.0), 0, 255).astype(np.uint8)


def build_random_palette(seed=None) -> np.ndarray:
    """Build a palette of 256 fully saturated colours with random hues."""
    rng = random.Random(seed)
    colors = [hsv_to_bgr(rng.randrange(360), 1, 1) for _ in range(PALETTE_SIZE)]
    return np.array(colors, dtype=np.uint8)


_DEFAULT_PALETTE = build_random_palette(0)


def assign_random_colors(labels, palette=None) -> np.ndarray:
    """Paint a label image, giving each label a colour from the palette."""
    labels = np.asarray(labels)
    if not np.issubdtype(labels.dtype, np.integer):
        raise TypeError("labels must be an integer image")
    colors = _DEFAULT_PALETTE if palette is None else np.asarray(palette, dtype=np.uint8)
    if colors.ndim != 2 or colors.shape[1] != 3 or len(colors) == 0:
        raise ValueError("palette must be a sequence of BGR triples")
    return colors[labels % PALETTE_SIZE]


def _normalize_minmax(image: np.ndarray, low: float, high: float) -> np.ndarray:
    values = image.astype(np.float64)
    if values.size == 0:
        return np.zeros(values.shape, dtype=np.uint8)
    smin = values.min()
    smax = values.max()
    span = smax - smin
    scale = (high - low) / span if span > np.finfo(np.float64).eps else 0.0
    shift = low - smin * scale
    return np.clip(np.rint(values * scale + shift), 0, 255).astype(np.uint8)


def assign_scale_colors(image) -> np.ndarray:
    """Map a floating-point image to a hue scale and return it as BGR.

    Single precision images run from red (minimum) to magenta (maximum);
    double precision images run over the full hue circle, reversed.
    """
    image = np.asarray(image)
    if image.dtype == np.float32:
        hue = _normalize_minmax(image, 0, 150)
    elif image.dtype == np.float64:
        hue = (179 - _normalize_minmax(image, 0, 179)).astype(np.uint8)
    else:
        raise TypeError("expected a float32 or float64 image")

    full = np.full(hue.shape, 255, dtype=np.uint8)
    hsv = np.stack([hue, full, full], axis=-1)
    return hsv_image_to_bgr(hsv)