import numpy as np
import pytest

from cvviewer.conversions import IncompatibleImageError
from cvviewer.morphology import MorphShape, dilate, erode, structuring_element


def test_rect_element_is_full():
    element = structuring_element(MorphShape.RECT, 4, 2)
    assert element.tolist() == [[255, 255, 255, 255], [255, 255, 255, 255]]


def test_cross_element():
    element = structuring_element(MorphShape.CROSS, 3, 3)
    assert (element // 255).tolist() == [[0, 1, 0], [1, 1, 1], [0, 1, 0]]


def test_ellipse_element_5x5():
    element = structuring_element(MorphShape.ELLIPSE, 5, 5)
    assert (element // 255).tolist() == [
        [0, 0, 1, 0, 0],
        [1, 1, 1, 1, 1],
        [1, 1, 1, 1, 1],
        [1, 1, 1, 1, 1],
        [0, 0, 1, 0, 0],
    ]


def test_single_pixel_element():
    assert structuring_element(MorphShape.ELLIPSE, 1, 1).tolist() == [[255]]


def test_shape_accepts_int():
    assert np.array_equal(
        structuring_element(1, 3, 3), structuring_element(MorphShape.CROSS, 3, 3)
    )


def test_invalid_element_size():
    with pytest.raises(ValueError):
        structuring_element(MorphShape.RECT, 0, 3)


def _point_image():
    image = np.zeros((7, 7), dtype=np.uint8)
    image[3, 3] = 255
    return image


def test_dilate_point_gives_element_shape():
    cross = structuring_element(MorphShape.CROSS, 3, 3)
    result = dilate(_point_image(), cross)
    assert np.array_equal(result[2:5, 2:5], cross)
    assert result.sum() == cross.astype(int).sum()


def test_erode_undoes_dilate_of_point():
    cross = structuring_element(MorphShape.CROSS, 3, 3)
    point = _point_image()
    assert np.array_equal(erode(dilate(point, cross), cross), point)


def test_dilate_and_erode_bracket_image():
    rng = np.random.default_rng(4)
    image = rng.integers(0, 256, (8, 9), dtype=np.uint8)
    element = structuring_element(MorphShape.ELLIPSE, 5, 3)
    dilated = dilate(image, element)
    eroded = erode(image, element)
    assert np.array_equal(np.maximum(dilated, image), dilated)
    assert np.array_equal(np.minimum(eroded, image), eroded)


def test_erode_ignores_outside_of_image():
    image = np.full((4, 4), 200, dtype=np.uint8)
    element = structuring_element(MorphShape.RECT, 3, 3)
    assert erode(image, element).tolist() == image.tolist()
    assert dilate(image, element).tolist() == image.tolist()


def test_colour_image_works_per_channel():
    rng = np.random.default_rng(5)
    image = rng.integers(0, 256, (6, 6, 3), dtype=np.uint8)
    element = structuring_element(MorphShape.RECT, 3, 3)
    result = dilate(image, element)
    assert result.shape == image.shape
    for channel in range(3):
        assert np.array_equal(result[..., channel], dilate(image[..., channel], element))


def test_rejects_float_image():
    with pytest.raises(IncompatibleImageError):
        dilate(np.zeros((3, 3), dtype=np.float32), np.full((3, 3), 255, np.uint8))


def test_rejects_empty_element():
    with pytest.raises(ValueError):
        erode(np.zeros((3, 3), dtype=np.uint8), np.zeros((3, 3), dtype=np.uint8))