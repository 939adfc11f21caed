# cvviewer

Image operators for a vision viewer, written on top of NumPy. Images are
NumPy arrays: single-channel `uint8` arrays for grey images and
`(rows, cols, 3)` `uint8` arrays in BGR order for colour images.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `cvviewer.colors`: false-colour rendering of label images
  (`build_random_palette`, `assign_random_colors`) and of `float32` or
  `float64` scalar maps (`assign_scale_colors`), plus the HSV to BGR helpers
  `hsv_to_bgr` (one colour, hue in degrees) and `hsv_image_to_bgr`
  (8-bit HSV image, hue in `[0, 180)`).
- `cvviewer.conversions`: colour conversions `bgr_to_gray`, `bgr_to_hsv` and
  `bgr_to_lab`, the test `is_color_image`, and the channel splitters
  `bright_values`, `hsv_values`, `lab_values` and `rgb_values`. The splitters
  return dictionaries from a title (such as `"H values"`) to a channel.
  Input that is not an 8-bit three-channel image raises
  `IncompatibleImageError` (a `ValueError`).
- `cvviewer.ked`: the `KED` region labeller. It compares the 8-bin
  histogram of each pixel's window with those of the regions to its left and
  above using a Kolmogorov statistic, and returns an `int32` label image.
  Helpers: `histogram`, `kolmogorov`, `chi_square`, `resolve_labels`.
- `cvviewer.borders`: texture border detection along rows and columns
  (`horizontal_borders`, `vertical_borders`) built on integral images
  (`integral_image`, `region_sum`), and `hamming_distance` between two rows
  of bytes.
- `cvviewer.filters`: `invert`, `local_maxima`, `gabor_kernel`, `filter2d`
  (correlation with mirrored borders, `float32` result) and the
  `GaborParameters` dataclass with its `kernel()` method.
- `cvviewer.morphology`: `structuring_element` with the `MorphShape` enum
  (`RECT`, `CROSS`, `ELLIPSE`), `dilate` and `erode`.
- `cvviewer.canny`: `sobel` derivatives and the `canny` edge detector for
  grey or BGR images.
- `cvviewer.operators`: the `Operator` catalogue (`default_operators`,
  `build_menus`), the `SelectorType` enum and `is_video_file`.

## Example

```python
import numpy as np
from cvviewer.conversions import hsv_values
from cvviewer.ked import KED
from cvviewer.colors import build_random_palette, assign_random_colors

image = np.random.default_rng(0).integers(0, 256, (64, 64, 3), dtype=np.uint8)
channels = hsv_values(image)
value = channels["V values"]

labels = KED(2).process(value)
preview = assign_random_colors(labels, build_random_palette(0))
```

## Operators

```python
from cvviewer.operators import default_operators, build_menus

for menu, entries in build_menus(default_operators()).items():
    print(menu, [op.name for op in entries])
```

Each `Operator` has a `menu`, a `name`, a `description` of `(menu, name)`,
and a `configurable` flag. `is_compatible(image)` says whether it can work
on an image, and `apply(image)` returns a dictionary of result images by
title, raising `IncompatibleImageError` for an incompatible image.

The configurable operators run with fixed settings: Canny with thresholds
100 and 100 and aperture 3, KED with half size 3, the morphological filter
as a dilation by a 3 x 3 rectangle, and the Gabor filter with the defaults of
`GaborParameters`.

## What this package does not do

It has no graphical viewer, no settings panels and no command to start one.
It does not open, decode or save image or video files, does not read or
write selection layers, and does not keep user settings. `is_video_file`
only classifies a list of file names by extension.