import numpy as np
import pytest

from cvviewer.colors import hsv_image_to_bgr
from cvviewer.conversions import (
    IncompatibleImageError,
    bgr_to_gray,
    bgr_to_hsv,
    bgr_to_lab,
    bright_values,
    hsv_values,
    is_color_image,
    lab_values,
    rgb_values,
)


@pytest.fixture
def sample_image():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8)


def test_is_color_image():
    assert is_color_image(np.zeros((2, 2, 3), dtype=np.uint8))
    assert not is_color_image(np.zeros((2, 2), dtype=np.uint8))
    assert not is_color_image(np.zeros((2, 2, 3), dtype=np.float32))


@pytest.mark.parametrize("level", [0, 1, 77, 128, 254, 255])
def test_gray_of_grey_pixel_is_its_level(level):
    image = np.full((2, 2, 3), level, dtype=np.uint8)
    assert bgr_to_gray(image).tolist() == [[level, level], [level, level]]


def test_gray_weights_green_most(sample_image):
    blue = np.zeros((1, 1, 3), dtype=np.uint8)
    blue[..., 0] = 255
    green = np.zeros((1, 1, 3), dtype=np.uint8)
    green[..., 1] = 255
    red = np.zeros((1, 1, 3), dtype=np.uint8)
    red[..., 2] = 255
    assert bgr_to_gray(green)[0, 0] > bgr_to_gray(red)[0, 0] > bgr_to_gray(blue)[0, 0]
    assert bgr_to_gray(sample_image).shape == sample_image.shape[:2]


def test_hsv_of_grey_has_no_hue_or_saturation():
    image = np.full((1, 1, 3), 90, dtype=np.uint8)
    assert bgr_to_hsv(image)[0, 0].tolist() == [0, 0, 90]


def test_hsv_of_pure_blue():
    image = np.array([[[255, 0, 0]]], dtype=np.uint8)
    assert bgr_to_hsv(image)[0, 0].tolist() == [120, 255, 255]


def test_hsv_ranges(sample_image):
    hsv = bgr_to_hsv(sample_image)
    assert hsv[..., 0].max() < 180
    assert np.array_equal(hsv[..., 2], sample_image.max(axis=2))


@pytest.mark.parametrize(
    "bgr",
    [[255, 0, 0], [0, 255, 0], [0, 0, 255], [255, 255, 0], [0, 255, 255], [255, 0, 255]],
)
def test_hsv_round_trip_for_primaries(bgr):
    image = np.array([[bgr]], dtype=np.uint8)
    assert np.array_equal(hsv_image_to_bgr(bgr_to_hsv(image)), image)


def test_hsv_round_trip_is_close(sample_image):
    back = hsv_image_to_bgr(bgr_to_hsv(sample_image)).astype(int)
    assert np.abs(back - sample_image.astype(int)).max() <= 6


def test_lab_white_and_black():
    image = np.array([[[255, 255, 255], [0, 0, 0]]], dtype=np.uint8)
    lab = bgr_to_lab(image)
    assert lab[0, 0].tolist() == [255, 128, 128]
    assert lab[0, 1].tolist() == [0, 128, 128]


def test_lab_grey_is_neutral():
    image = np.full((1, 1, 3), 100, dtype=np.uint8)
    lab = bgr_to_lab(image)[0, 0].astype(int)
    assert abs(lab[1] - 128) <= 1
    assert abs(lab[2] - 128) <= 1


def test_lab_lightness_increases_with_grey_level():
    levels = np.arange(0, 256, 15, dtype=np.uint8)
    image = np.repeat(levels[None, :, None], 3, axis=2)
    lightness = bgr_to_lab(image)[0, :, 0].astype(int).tolist()
    assert len(lightness) == len(levels)
    assert lightness == sorted(set(lightness))


def test_bright_values_matches_gray(sample_image):
    assert np.array_equal(bright_values(sample_image), bgr_to_gray(sample_image))


def test_hsv_values_names_and_channels(sample_image):
    channels = hsv_values(sample_image)
    assert list(channels) == ["H values", "S values", "V values"]
    assert np.array_equal(np.stack(list(channels.values()), axis=-1), bgr_to_hsv(sample_image))


def test_lab_values_names_and_channels(sample_image):
    channels = lab_values(sample_image)
    assert list(channels) == ["L values", "A values", "B values"]
    assert np.array_equal(channels["L values"], bgr_to_lab(sample_image)[..., 0])


def test_rgb_values_order(sample_image):
    channels = rgb_values(sample_image)
    assert list(channels) == ["R values", "G values", "B values"]
    assert np.array_equal(channels["R values"], sample_image[..., 2])
    assert np.array_equal(channels["G values"], sample_image[..., 1])
    assert np.array_equal(channels["B values"], sample_image[..., 0])


@pytest.mark.parametrize(
    "operation", [bright_values, hsv_values, lab_values, rgb_values, bgr_to_gray]
)
def test_operations_reject_grey_images(operation):
    with pytest.raises(IncompatibleImageError):
        operation(np.zeros((3, 3), dtype=np.uint8))


def test_operations_reject_float_color_images():
    with pytest.raises(IncompatibleImageError):
        hsv_values(np.zeros((3, 3, 3), dtype=np.float64))