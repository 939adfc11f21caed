"""Point and neighbourhood filters: inversion, local maxima and Gabor filtering."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .conversions import IncompatibleImageError

_MAXIMA_TYPES = (np.uint8, np.int32, np.float32, np.float64)


def _require_grey_u8(image) -> np.ndarray:
    image = np.asarray(image)
    if image.ndim != 2 or image.dtype != np.uint8:
        raise IncompatibleImageError("an 8-bit single channel image is required")
    return image


def invert(image) -> np.ndarray:
    """Negative of an 8-bit grey image."""
    return np.bitwise_not(_require_grey_u8(image))


def local_maxima(image) -> np.ndarray:
    """Mark with 255 the pixels strictly greater than all eight neighbours.

    The outermost rows and columns are never marked.
    """
    image = np.asarray(image)
    if image.ndim != 2 or not any(image.dtype == t for t in _MAXIMA_TYPES):
        raise IncompatibleImageError(
            "a single channel uint8, int32, float32 or float64 image is required"
        )
    rows, cols = image.shape
    output = np.zeros((rows, cols), dtype=np.uint8)
    if rows < 3 or cols < 3:
        return output

    centre = image[1:-1, 1:-1]
    peaks = np.ones(centre.shape, dtype=bool)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue
            neighbour = image[1 + dy : rows - 1 + dy, 1 + dx : cols - 1 + dx]
            peaks &= centre > neighbour
    output[1:-1, 1:-1][peaks] = 255
    return output


def gabor_kernel(ksize, sigma, theta, lambd, gamma, psi) -> np.ndarray:
    """Real Gabor kernel of size ksize = (width, height), as float64.

    A non-positive width or height is derived from sigma, three deviations out.
    """
    width, height = (int(k) for k in ksize)
    sigma_x = float(sigma)
    sigma_y = float(sigma) / float(gamma)
    nstds = 3
    c, s = math.cos(theta), math.sin(theta)

    if width > 0:
        xmax = width // 2
    else:
        xmax = round(max(abs(nstds * sigma_x * c), abs(nstds * sigma_y * s)))
    if height > 0:
        ymax = height // 2
    else:
        ymax = round(max(abs(nstds * sigma_x * s), abs(nstds * sigma_y * c)))

    ex = -0.5 / (sigma_x * sigma_x)
    ey = -0.5 / (sigma_y * sigma_y)
    cscale = 2.0 * math.pi / float(lambd)

    # Rows and columns run from +max down to -max, so the kernel comes out flipped.
    ys = np.arange(ymax, -ymax - 1, -1, dtype=np.float64)[:, None]
    xs = np.arange(xmax, -xmax - 1, -1, dtype=np.float64)[None, :]
    xr = xs * c + ys * s
    yr = -xs * s + ys * c
    return np.exp(ex * xr * xr + ey * yr * yr) * np.cos(cscale * xr + psi)


def filter2d(image, kernel) -> np.ndarray:
    """Correlate a grey image with a kernel anchored at its centre.

    Borders are mirrored without repeating the edge pixel. Returns float32.
    """
    image = np.asarray(image)
    kernel = np.asarray(kernel, dtype=np.float64)
    if image.ndim != 2:
        raise ValueError("expected a single channel image")
    if kernel.ndim != 2 or kernel.size == 0:
        raise ValueError("kernel must be a non-empty 2-D array")

    kh, kw = kernel.shape
    ay, ax = kh // 2, kw // 2
    values = image.astype(np.float64)
    if min(values.shape) > 1:
        padded = np.pad(values, ((ay, kh - 1 - ay), (ax, kw - 1 - ax)), mode="reflect")
    else:
        padded = np.pad(values, ((ay, kh - 1 - ay), (ax, kw - 1 - ax)), mode="edge")
    windows = sliding_window_view(padded, kernel.shape)
    return np.einsum("ijkl,kl->ij", windows, kernel).astype(np.float32)


@dataclass
class GaborParameters:
    """Settings of a Gabor filter; angles are in radians."""

    kernel_radius: int = 15
    sigma: float = 1.0
    theta: float = 0.0
    lambd: float = 1.0
    gamma: float = 0.02
    psi: float = math.pi / 2

    def kernel(self) -> np.ndarray:
        """The square kernel of side 2*kernel_radius+1 for these settings."""
        side = self.kernel_radius * 2 + 1
        return gabor_kernel(
            (side, side), self.sigma, self.theta, self.lambd, self.gamma, self.psi
        )