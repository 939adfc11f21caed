"""The catalogue of image operators offered to the viewer, and its menu layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Sequence

import numpy as np

from .canny import canny
from .conversions import (
    IncompatibleImageError,
    bright_values,
    hsv_values,
    is_color_image,
    lab_values,
    rgb_values,
)
from .filters import GaborParameters, filter2d, invert, local_maxima
from .ked import KED
from .morphology import MorphShape, dilate, structuring_element

VIDEO_EXTENSIONS = ("avi", "mp4", "mpg")

CANNY_THRESHOLD1 = 100
CANNY_THRESHOLD2 = 100
CANNY_APERTURE = 3
KED_HALF_SIZE = 3
MORPHOLOGY_ELEMENT_SIZE = 3


class SelectorType(IntEnum):
    """Kind of region the viewer's selection tool draws."""

    RECTANGLE = 0
    POLYGON = 1
    POINT = 2


@dataclass(frozen=True)
class Operator:
    """An image operation listed under a menu.

    ``run`` maps an image to the named images it produces. Configurable
    operators are shown with a settings panel before they are applied.
    """

    menu: str
    name: str
    accepts: Callable[[np.ndarray], bool]
    run: Callable[[np.ndarray], dict]
    configurable: bool = False
    help_url: str = ""

    @property
    def description(self) -> tuple[str, str]:
        return (self.menu, self.name)

    def is_compatible(self, image) -> bool:
        """Whether the operator can work on this image."""
        return bool(self.accepts(np.asarray(image)))

    def apply(self, image) -> dict[str, np.ndarray]:
        """Run the operator, returning its output images by title."""
        image = np.asarray(image)
        if not self.is_compatible(image):
            raise IncompatibleImageError(f"{self.name} cannot be applied to this image")
        return self.run(image)


def _is_grey_u8(image: np.ndarray) -> bool:
    return image.ndim == 2 and image.dtype == np.uint8


def _is_grey_or_color_u8(image: np.ndarray) -> bool:
    return _is_grey_u8(image) or is_color_image(image)


def _is_maxima_input(image: np.ndarray) -> bool:
    return image.ndim == 2 and image.dtype in (
        np.dtype(np.uint8),
        np.dtype(np.int32),
        np.dtype(np.float32),
        np.dtype(np.float64),
    )


def _gabor(image: np.ndarray) -> dict:
    return {"Gabor filter": filter2d(image, GaborParameters().kernel())}


def _canny(image: np.ndarray) -> dict:
    edges = canny(image, CANNY_THRESHOLD1, CANNY_THRESHOLD2, CANNY_APERTURE, False)
    return {"Canny filter": edges}


def _ked(image: np.ndarray) -> dict:
    return {"KED filter": KED(KED_HALF_SIZE).process(image)}


def _morphology(image: np.ndarray) -> dict:
    element = structuring_element(
        MorphShape.RECT, MORPHOLOGY_ELEMENT_SIZE, MORPHOLOGY_ELEMENT_SIZE
    )
    return {"Morphological filter": dilate(image, element)}


def default_operators() -> list[Operator]:
    """All operators the viewer offers, in menu order."""
    return [
        Operator("Conversions", "Bight values", is_color_image,
                 lambda image: {"Bright values": bright_values(image)}),
        Operator("Conversions", "HSV values", is_color_image, hsv_values),
        Operator("Conversions", "LAB values", is_color_image, lab_values),
        Operator("Conversions", "RGB values", is_color_image, rgb_values),
        Operator("Filter", "Invert", _is_grey_u8,
                 lambda image: {"Negative filter": invert(image)}),
        Operator("Filter", "Maximun", _is_maxima_input,
                 lambda image: {"Maximuns": local_maxima(image)}),
        Operator("Filter", "Gabor filter", _is_grey_u8, _gabor, configurable=True),
        Operator("Filter", "Canny filter", _is_grey_or_color_u8, _canny, configurable=True),
        Operator("Filter", "KED", _is_grey_u8, _ked, configurable=True),
        Operator("Filter", "Morphological filter", _is_grey_or_color_u8, _morphology,
                 configurable=True),
    ]


def build_menus(operators: Iterable[Operator]) -> dict[str, list[Operator]]:
    """Group operators by menu, keeping the order in which menus and entries first appear."""
    menus: dict[str, list[Operator]] = {}
    for operator in operators:
        menus.setdefault(operator.menu, []).append(operator)
    return menus


def is_video_file(file_names: Sequence[str]) -> bool:
    """True when a single file with a video extension was chosen."""
    names = list(file_names)
    return len(names) == 1 and str(names[0]).endswith(VIDEO_EXTENSIONS)