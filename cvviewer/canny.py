"""Sobel derivatives and the Canny edge detector."""

from __future__ import annotations

import math

import numpy as np

from .conversions import IncompatibleImageError

_SOBEL_SIZES = (1, 3, 5, 7)
_CANNY_APERTURES = (3, 5, 7)
# tan(22.5 degrees) in 15-bit fixed point.
_TG22 = 13573
_INT16_MIN, _INT16_MAX = -32768, 32767


def _derivative_kernel(size: int, order: int) -> np.ndarray:
    """One-dimensional Sobel kernel of the given length and derivative order."""
    if size == 1:
        if order:
            raise ValueError("a kernel of size 1 cannot differentiate")
        return np.array([1], dtype=np.int64)
    if order >= size:
        raise ValueError("derivative order must be smaller than the kernel size")
    kernel = np.array([1], dtype=np.int64)
    for _ in range(size - 1 - order):
        kernel = np.convolve(kernel, [1, 1])
    for _ in range(order):
        kernel = np.convolve(kernel, [-1, 1])
    return kernel


def _correlate1d(values: np.ndarray, kernel: np.ndarray, axis: int, mode: str) -> np.ndarray:
    length = len(kernel)
    anchor = length // 2
    pads = [(0, 0), (0, 0)]
    pads[axis] = (anchor, length - 1 - anchor)
    padded = np.pad(values, pads, mode=mode)
    size = values.shape[axis]
    result = np.zeros(values.shape, dtype=np.float64)
    for offset, weight in enumerate(kernel):
        if weight:
            result += weight * np.take(padded, np.arange(offset, offset + size), axis=axis)
    return result


def _sobel_plane(plane: np.ndarray, dx: int, dy: int, ksize: int, mode: str) -> np.ndarray:
    size_x = 3 if ksize == 1 and dx > 0 else ksize
    size_y = 3 if ksize == 1 and dy > 0 else ksize
    kernel_x = _derivative_kernel(size_x, dx)
    kernel_y = _derivative_kernel(size_y, dy)
    values = plane.astype(np.float64)
    return _correlate1d(_correlate1d(values, kernel_x, 1, mode), kernel_y, 0, mode)


def _sobel(image, dx, dy, ksize, mode: str) -> np.ndarray:
    image = np.asarray(image)
    dx, dy, ksize = int(dx), int(dy), int(ksize)
    if ksize not in _SOBEL_SIZES:
        raise ValueError("kernel size must be 1, 3, 5 or 7")
    if dx < 0 or dy < 0 or dx + dy == 0:
        raise ValueError("derivative orders must be non-negative and not both zero")
    if image.ndim == 2:
        return _sobel_plane(image, dx, dy, ksize, mode)
    if image.ndim == 3:
        planes = [_sobel_plane(image[..., c], dx, dy, ksize, mode) for c in range(image.shape[2])]
        return np.stack(planes, axis=-1)
    raise ValueError("expected a 2-D image, optionally with channels")


def sobel(image, dx, dy, ksize=3) -> np.ndarray:
    """Sobel derivative of order (dx, dy), with mirrored borders; returns float64."""
    return _sobel(image, dx, dy, ksize, "reflect")


def _dilate8(mask: np.ndarray) -> np.ndarray:
    padded = np.pad(mask, 1, mode="constant", constant_values=False)
    rows, cols = mask.shape
    grown = np.zeros_like(mask)
    for oy in range(3):
        for ox in range(3):
            grown |= padded[oy : oy + rows, ox : ox + cols]
    return grown


def canny(image, threshold1, threshold2, aperture=3, l2_gradient=False) -> np.ndarray:
    """Canny edges of an 8-bit grey or BGR image; edge pixels are 255.

    The thresholds may be given in either order. For colour images the
    channel with the strongest gradient is used at each pixel.
    """
    image = np.asarray(image)
    if image.dtype != np.uint8 or not (
        image.ndim == 2 or (image.ndim == 3 and image.shape[2] == 3)
    ):
        raise IncompatibleImageError("an 8-bit grey or three channel image is required")
    aperture = int(aperture)
    if aperture not in _CANNY_APERTURES:
        raise ValueError("aperture must be 3, 5 or 7")

    low, high = sorted((float(threshold1), float(threshold2)))
    if l2_gradient:
        low, high = min(32767.0, low), min(32767.0, high)
        low = low * low if low > 0 else low
        high = high * high if high > 0 else high
    low, high = math.floor(low), math.floor(high)

    rows, cols = image.shape[:2]
    output = np.zeros((rows, cols), dtype=np.uint8)
    if image.size == 0:
        return output

    planes = image[..., None] if image.ndim == 2 else image
    channels = [planes[..., c] for c in range(planes.shape[2])]

    def gradient(plane, ox, oy):
        values = np.rint(_sobel_plane(plane, ox, oy, aperture, "edge"))
        return np.clip(values, _INT16_MIN, _INT16_MAX).astype(np.int64)

    dxs = np.stack([gradient(p, 1, 0) for p in channels])
    dys = np.stack([gradient(p, 0, 1) for p in channels])
    if l2_gradient:
        mags = dxs * dxs + dys * dys
    else:
        mags = np.abs(dxs) + np.abs(dys)

    best = np.argmax(mags, axis=0)[None]
    dx = np.take_along_axis(dxs, best, axis=0)[0]
    dy = np.take_along_axis(dys, best, axis=0)[0]
    mag = np.take_along_axis(mags, best, axis=0)[0]

    padded = np.pad(mag, 1, mode="constant", constant_values=0)
    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    up = padded[:-2, 1:-1]
    down = padded[2:, 1:-1]
    up_left, up_right = padded[:-2, :-2], padded[:-2, 2:]
    down_left, down_right = padded[2:, :-2], padded[2:, 2:]

    ax = np.abs(dx)
    ay = np.abs(dy) << 15
    tg22x = ax * _TG22
    tg67x = tg22x + (ax << 16)
    horizontal = ay < tg22x
    vertical = ~horizontal & (ay > tg67x)
    diagonal = ~horizontal & ~vertical

    opposite = (dx ^ dy) < 0
    before = np.where(opposite, up_right, up_left)
    after = np.where(opposite, down_left, down_right)

    candidate = (mag > low) & (
        (horizontal & (mag > left) & (mag >= right))
        | (vertical & (mag > up) & (mag >= down))
        | (diagonal & (mag > before) & (mag > after))
    )
    edges = candidate & (mag > high)

    while True:
        grown = (_dilate8(edges) & candidate) | edges
        if np.array_equal(grown, edges):
            break
        edges = grown

    output[edges] = 255
    return output