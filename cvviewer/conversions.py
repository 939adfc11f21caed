"""Colour space conversions and channel splitting for 8-bit BGR images."""

from __future__ import annotations

import numpy as np


class IncompatibleImageError(ValueError):
    """Raised when an operation receives an image it cannot handle."""


_HSV_SHIFT = 12
_HSV_ROUND = 1 << (_HSV_SHIFT - 1)

_steps = np.arange(1, 256, dtype=np.float64)
_SDIV_TABLE = np.concatenate(
    [[0], np.rint((255 << _HSV_SHIFT) / _steps)]
).astype(np.int64)
_HDIV_TABLE = np.concatenate(
    [[0], np.rint((180 << _HSV_SHIFT) / (6.0 * _steps))]
).astype(np.int64)

_GRAY_SHIFT = 14
_B2Y, _G2Y, _R2Y = 1868, 9617, 4899

_RGB_TO_XYZ = np.array(
    [
        [0.412453, 0.357580, 0.180423],
        [0.212671, 0.715160, 0.072169],
        [0.019334, 0.119193, 0.950227],
    ]
)
_WHITE_X = 0.950456
_WHITE_Z = 1.088754
_LAB_EPSILON = 0.008856


def is_color_image(image) -> bool:
    """Return True for an 8-bit image with three channels."""
    image = np.asarray(image)
    return image.ndim == 3 and image.shape[2] == 3 and image.dtype == np.uint8


def _require_color(image) -> np.ndarray:
    image = np.asarray(image)
    if not is_color_image(image):
        raise IncompatibleImageError("an 8-bit three channel image is required")
    return image


def bgr_to_gray(image) -> np.ndarray:
    """Convert a BGR image to its luminance."""
    image = _require_color(image).astype(np.int64)
    y = (
        image[..., 0] * _B2Y
        + image[..., 1] * _G2Y
        + image[..., 2] * _R2Y
        + (1 << (_GRAY_SHIFT - 1))
    ) >> _GRAY_SHIFT
    return y.astype(np.uint8)


def bgr_to_hsv(image) -> np.ndarray:
    """Convert a BGR image to 8-bit HSV with hue in [0, 180)."""
    image = _require_color(image).astype(np.int64)
    b, g, r = image[..., 0], image[..., 1], image[..., 2]
    v = np.maximum(np.maximum(b, g), r)
    diff = v - np.minimum(np.minimum(b, g), r)

    s = (diff * _SDIV_TABLE[v] + _HSV_ROUND) >> _HSV_SHIFT
    h = np.where(v == r, g - b, np.where(v == g, b - r + 2 * diff, r - g + 4 * diff))
    h = (h * _HDIV_TABLE[diff] + _HSV_ROUND) >> _HSV_SHIFT
    h = np.where(h < 0, h + 180, h)
    return np.stack([h, s, v], axis=-1).astype(np.uint8)


def bgr_to_lab(image) -> np.ndarray:
    """Convert a BGR image to 8-bit CIE L*a*b* (L scaled to [0, 255], a and b offset by 128)."""
    image = _require_color(image).astype(np.float64) / 255.0
    rgb = image[..., ::-1]
    linear = np.where(rgb <= 0.04045, rgb / 12.92, ((rgb + 0.055) / 1.055) ** 2.4)
    xyz = linear @ _RGB_TO_XYZ.T
    x = xyz[..., 0] / _WHITE_X
    y = xyz[..., 1]
    z = xyz[..., 2] / _WHITE_Z

    def f(t):
        return np.where(t > _LAB_EPSILON, np.cbrt(t), 7.787 * t + 16.0 / 116.0)

    fx, fy, fz = f(x), f(y), f(z)
    lightness = np.where(y > _LAB_EPSILON, 116.0 * fy - 16.0, 903.3 * y)
    a = 500.0 * (fx - fy) + 128.0
    b = 200.0 * (fy - fz) + 128.0
    lab = np.stack([lightness * 255.0 / 100.0, a, b], axis=-1)
    return np.clip(np.rint(lab), 0, 255).astype(np.uint8)


def bright_values(image) -> np.ndarray:
    """Brightness (grey level) of a colour image."""
    return bgr_to_gray(image)


def hsv_values(image) -> dict[str, np.ndarray]:
    """Split a colour image into its H, S and V channels."""
    hsv = bgr_to_hsv(image)
    return {
        "H values": hsv[..., 0].copy(),
        "S values": hsv[..., 1].copy(),
        "V values": hsv[..., 2].copy(),
    }


def lab_values(image) -> dict[str, np.ndarray]:
    """Split a colour image into its L, A and B channels."""
    lab = bgr_to_lab(image)
    return {
        "L values": lab[..., 0].copy(),
        "A values": lab[..., 1].copy(),
        "B values": lab[..., 2].copy(),
    }


def rgb_values(image) -> dict[str, np.ndarray]:
    """Split a BGR image into its red, green and blue channels."""
    image = _require_color(image)
    return {
        "R values": image[..., 2].copy(),
        "G values": image[..., 1].copy(),
        "B values": image[..., 0].copy(),
    }