"""Region labelling by comparing local grey-level histograms (KED).

Each pixel's neighbourhood histogram is compared, with a Kolmogorov
statistic, against the histograms of the regions to its left and above.
The pixel joins a region it matches; otherwise a new region is started.
Regions found to match each other are merged at the end.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

BINS = 8
_BIN_WIDTH = 256 // BINS


def histogram(image, x: int, y: int, size: int) -> list[int]:
    """Return the 8-bin grey-level histogram of a size x size window at (x, y)."""
    image = np.asarray(image)
    if image.ndim != 2:
        raise ValueError("expected a single channel image")
    if size < 1:
        raise ValueError("window size must be positive")
    height, width = image.shape
    if x < 0 or y < 0 or x + size > width or y + size > height:
        raise ValueError("window lies outside the image")
    window = image[y : y + size, x : x + size].astype(np.int64) // _BIN_WIDTH
    return [int(n) for n in np.bincount(window.ravel(), minlength=BINS)[:BINS]]


def kolmogorov(h1: Sequence[int], h2: Sequence[int], samples: float) -> float:
    """Largest absolute bin difference between two histograms, divided by samples.

    The result is rounded to single precision.
    """
    max_dif = max(abs(int(a) - int(b)) for a, b in zip(h1, h2))
    return float(np.float32(max_dif / float(np.float32(samples))))


def chi_square(r: Sequence[int], s: Sequence[int]) -> float:
    """Chi-square distance between two histograms; empty bin pairs are skipped."""
    total = np.float32(0.0)
    for a, b in zip(r, s):
        den = np.float32(int(a) + int(b))
        if den != 0:
            num = np.float32(int(a) - int(b))
            total = np.float32(total + num * num / den)
    return float(total)


def resolve_labels(adjacent: Sequence[int]) -> list[int]:
    """Replace each label by the root of its chain of equivalences.

    Labels are resolved in order, so later labels see the roots already
    written for earlier ones.
    """
    result = [int(a) for a in adjacent]
    for index in range(len(result)):
        root = result[index]
        steps = 0
        while result[root] != root:
            root = result[root]
            steps += 1
            if steps > len(result):
                raise ValueError("label equivalences form a cycle")
        result[index] = root
    return result


def _window_histograms(image: np.ndarray, size: int) -> np.ndarray:
    """Histograms of every size x size window, indexed by the window's top-left corner."""
    bins = image.astype(np.int64) // _BIN_WIDTH
    onehot = (bins[..., None] == np.arange(BINS)).astype(np.int64)
    height, width = image.shape
    sums = np.zeros((height + 1, width + 1, BINS), dtype=np.int64)
    sums[1:, 1:] = onehot.cumsum(axis=0).cumsum(axis=1)
    return (
        sums[size:, size:]
        - sums[:-size, size:]
        - sums[size:, :-size]
        + sums[:-size, :-size]
    )


class KED:
    """Histogram based region labeller working on windows of 2*half_size+1 pixels."""

    def __init__(self, half_size: int) -> None:
        half_size = int(half_size)
        if half_size < 1:
            raise ValueError("half_size must be at least 1")
        self.half_size = half_size

    def process(self, image) -> np.ndarray:
        """Label the regions of an 8-bit grey image; returns an int32 label image."""
        image = np.asarray(image)
        if image.ndim != 2:
            raise ValueError("expected a single channel image")
        if image.dtype != np.uint8:
            raise TypeError("expected an 8-bit image")

        half = self.half_size
        size = half * 2 + 1
        height, width = image.shape
        if height < size or width < size:
            raise ValueError("image is smaller than the analysis window")

        threshold = float(np.float32(1.36 / size))
        samples = size * size
        windows = _window_histograms(image, size)

        labels = np.zeros((height, width), dtype=np.int64)
        adjacent = [0]
        histograms = [windows[0, 0]]

        def start_region(y: int, x: int, hist: np.ndarray) -> None:
            new = len(histograms)
            adjacent.append(new)
            labels[y, x] = new
            histograms.append(hist)

        for x in range(half + 1, width - half - 1):
            lcolor = int(labels[0, x - 1])
            current = windows[0, x - half]
            if kolmogorov(current, histograms[lcolor], samples) < threshold:
                labels[0, x] = lcolor
            else:
                start_region(0, x, current)

        for y in range(half, height - half - 1):
            ucolor = int(labels[y - 1, 0])
            current = windows[y - half, 0]
            if kolmogorov(current, histograms[ucolor], samples) < threshold:
                labels[y, 0] = ucolor
            else:
                start_region(y, 0, current)

            for x in range(half, width - half):
                lcolor = int(labels[y, x - 1])
                ucolor = int(labels[y - 1, x])
                up = histograms[ucolor]
                left = histograms[lcolor]
                current = windows[y - half, x - half]

                cl = kolmogorov(current, left, samples)
                cu = kolmogorov(current, up, samples)
                ul = kolmogorov(left, up, samples)

                if cl < threshold and cu < threshold:
                    if lcolor == ucolor:
                        labels[y, x] = ucolor
                    elif ul < threshold:
                        low, high = min(lcolor, ucolor), max(lcolor, ucolor)
                        adjacent[high] = low
                        labels[y, x] = low
                    else:
                        labels[y, x] = lcolor if cl < cu else ucolor
                elif cl < threshold:
                    labels[y, x] = lcolor
                elif cu < threshold:
                    labels[y, x] = ucolor
                else:
                    start_region(y, x, current)

        roots = np.asarray(resolve_labels(adjacent), dtype=np.int64)
        return roots[labels].astype(np.int32)