"""Structuring elements and grey-level dilation and erosion."""

from __future__ import annotations

import math
from enum import IntEnum

import numpy as np

from .conversions import IncompatibleImageError


class MorphShape(IntEnum):
    """Shape of a generated structuring element."""

    RECT = 0
    CROSS = 1
    ELLIPSE = 2


def structuring_element(shape, width: int, height: int) -> np.ndarray:
    """Build a height x width element whose member pixels are 255."""
    shape = MorphShape(shape)
    width, height = int(width), int(height)
    if width < 1 or height < 1:
        raise ValueError("element size must be positive")
    if width == 1 and height == 1:
        shape = MorphShape.RECT

    anchor_x, anchor_y = width // 2, height // 2
    element = np.zeros((height, width), dtype=np.uint8)
    r = height // 2
    c = width // 2
    inv_r2 = 1.0 / (r * r) if r else 0.0

    for i, row in enumerate(element):
        j1 = j2 = 0
        if shape is MorphShape.RECT or (shape is MorphShape.CROSS and i == anchor_y):
            j2 = width
        elif shape is MorphShape.CROSS:
            j1 = anchor_x
            j2 = j1 + 1
        else:
            dy = i - r
            if abs(dy) <= r:
                dx = round(c * math.sqrt((r * r - dy * dy) * inv_r2))
                j1 = max(c - dx, 0)
                j2 = min(c + dx + 1, width)
        row[j1:j2] = 255
    return element


def _prepare(image, element) -> tuple[np.ndarray, np.ndarray]:
    image = np.asarray(image)
    if image.dtype != np.uint8 or not (
        image.ndim == 2 or (image.ndim == 3 and image.shape[2] == 3)
    ):
        raise IncompatibleImageError("an 8-bit grey or three channel image is required")
    element = np.asarray(element)
    if element.ndim != 2 or element.size == 0:
        raise ValueError("element must be a non-empty 2-D array")
    offsets = np.argwhere(element != 0)
    if element.size > 1 and len(offsets) == 0:
        raise ValueError("element has no member pixels")
    return image, element


def _morph(image, element, reduce, border: int) -> np.ndarray:
    image, element = _prepare(image, element)
    if element.size == 1:
        return image.copy()

    kh, kw = element.shape
    ay, ax = kh // 2, kw // 2
    pads = [(ay, kh - 1 - ay), (ax, kw - 1 - ax)] + [(0, 0)] * (image.ndim - 2)
    padded = np.pad(image, pads, mode="constant", constant_values=border)
    rows, cols = image.shape[:2]

    offsets = np.argwhere(element != 0)
    first, *rest = offsets
    result = padded[first[0] : first[0] + rows, first[1] : first[1] + cols].copy()
    for i, j in rest:
        reduce(result, padded[i : i + rows, j : j + cols], out=result)
    return result


def dilate(image, element) -> np.ndarray:
    """Replace each pixel by the maximum under the element, anchored at its centre."""
    return _morph(image, element, np.maximum, 0)


def erode(image, element) -> np.ndarray:
    """Replace each pixel by the minimum under the element, anchored at its centre."""
    return _morph(image, element, np.minimum, 255)