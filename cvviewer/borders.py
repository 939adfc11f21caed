"""Texture border detection using mean brightness on either side of a pixel."""

from __future__ import annotations

import numpy as np

TEXTURE_SIZE = 32
LINES_IN_ANALYSIS = 1
BORDER_THRESHOLD = 0.08
_DIVISOR = 255.0 * (TEXTURE_SIZE * 2) * (LINES_IN_ANALYSIS * 2 + 1)


def integral_image(image) -> np.ndarray:
    """Summed-area table with a leading row and column of zeros."""
    image = np.asarray(image)
    if image.ndim != 2:
        raise ValueError("expected a single channel image")
    rows, cols = image.shape
    integral = np.zeros((rows + 1, cols + 1), dtype=np.float64)
    integral[1:, 1:] = image.astype(np.float64).cumsum(axis=0).cumsum(axis=1)
    return integral


def region_sum(integral, x0, y0, x1, y1):
    """Sum of the pixels in columns [x0, x1) and rows [y0, y1), from an integral image.

    The coordinates may be integers or broadcastable integer arrays.
    """
    integral = np.asarray(integral)
    return integral[y1, x1] - integral[y0, x1] - integral[y1, x0] + integral[y0, x0]


def hamming_distance(row1, row2) -> int:
    """Number of differing bits between two rows of bytes."""
    a = np.asarray(row1, dtype=np.uint8).ravel()
    b = np.asarray(row2, dtype=np.uint8).ravel()
    if a.shape != b.shape:
        raise ValueError("rows must have the same length")
    return int(np.unpackbits(np.bitwise_xor(a, b)).sum())


def _require_grey(image) -> np.ndarray:
    image = np.asarray(image)
    if image.ndim != 2:
        raise ValueError("expected a single channel image")
    if image.dtype != np.uint8:
        raise TypeError("expected an 8-bit image")
    return image


def _borders_along_x(image: np.ndarray) -> np.ndarray:
    rows, cols = image.shape
    output = np.zeros((rows, cols), dtype=np.uint8)
    if rows < 3 or cols < 3:
        return output

    integral = integral_image(image)
    last = cols - 1
    ys = np.arange(LINES_IN_ANALYSIS, rows - LINES_IN_ANALYSIS)[:, None]
    xs = np.arange(1, last)[None, :]
    top = ys - LINES_IN_ANALYSIS
    bottom = ys + LINES_IN_ANALYSIS + 1

    left = region_sum(
        integral,
        np.maximum(0, xs - TEXTURE_SIZE),
        top,
        np.maximum(0, xs - 1),
        bottom,
    ) / _DIVISOR
    right = region_sum(
        integral,
        np.minimum(xs + 1, last),
        top,
        np.minimum(xs + TEXTURE_SIZE, last),
        bottom,
    ) / _DIVISOR

    diff = np.zeros((rows, cols), dtype=np.float64)
    inner_rows = slice(LINES_IN_ANALYSIS, rows - LINES_IN_ANALYSIS)
    diff[inner_rows, 1:last] = np.abs(left - right)

    centre = diff[inner_rows, 1:last]
    before = diff[inner_rows, 0 : last - 1]
    after = diff[inner_rows, 2 : last + 1]
    peaks = (centre > BORDER_THRESHOLD) & (before < centre) & (centre > after)
    output[inner_rows, 1:last][peaks] = 255
    return output


def horizontal_borders(image) -> np.ndarray:
    """Mark with 255 the pixels where the texture changes from left to right."""
    return _borders_along_x(_require_grey(image))


def vertical_borders(image) -> np.ndarray:
    """Mark with 255 the pixels where the texture changes from top to bottom."""
    image = _require_grey(image)
    return np.ascontiguousarray(_borders_along_x(image.T).T)