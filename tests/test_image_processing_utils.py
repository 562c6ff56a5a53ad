import numpy as np
import pytest

from album_wallpaper.errors import InvalidDimensionError
from album_wallpaper.image_processing_utils import ImageProcessingUtils
from album_wallpaper.raster import Dimensions, Raster

from helpers import gradient, noise, solid


@pytest.mark.parametrize(
    "target",
    [(1, 1), (3, 17), (64, 9), (100, 100), (2560, 1440)],
)
def test_resize_produces_exact_target_dimensions(target):
    out = ImageProcessingUtils.resize(noise(7, 5), Dimensions(*target))
    assert (out.width, out.height) == target
    assert len(out.data) == target[0] * target[1] * 3


def test_resize_to_zero_target_fails():
    with pytest.raises(InvalidDimensionError):
        ImageProcessingUtils.resize(noise(8, 8), (0, 8))


def test_resize_to_own_size_reproduces_source():
    source = noise(40, 30, seed=3)
    out = ImageProcessingUtils.resize(source, Dimensions(40, 30))
    diff = np.abs(out.to_array().astype(int) - source.to_array().astype(int))
    assert diff.max() <= 2


def test_resize_keeps_flat_colour():
    out = ImageProcessingUtils.resize(solid(13, 29, (40, 120, 200)), Dimensions(50, 20))
    arr = out.to_array().astype(int)
    assert np.all(np.abs(arr - np.array([40, 120, 200])) <= 2)


def test_crop_box_trims_wide_source_symmetrically():
    assert ImageProcessingUtils.crop_box(Dimensions(30, 10), Dimensions(10, 10)) == (10, 0, 20, 10)


def test_crop_box_odd_remainder_goes_to_far_edge():
    # 21 pixels to remove: 10 on the left, 11 on the right
    assert ImageProcessingUtils.crop_box(Dimensions(31, 10), Dimensions(10, 10)) == (10, 0, 20, 10)


def test_crop_box_trims_tall_source_top_and_bottom():
    assert ImageProcessingUtils.crop_box(Dimensions(10, 31), Dimensions(20, 20)) == (0, 10, 10, 20)


def test_crop_box_square_art_to_widescreen():
    # 500 * 1440 / 2560 = 281.25 rows kept
    assert ImageProcessingUtils.crop_box(Dimensions(500, 500), Dimensions(2560, 1440)) == (0, 109, 500, 390)


def test_crop_box_matching_aspect_keeps_everything():
    assert ImageProcessingUtils.crop_box(Dimensions(64, 36), Dimensions(2560, 1440)) == (0, 0, 64, 36)


def test_centre_marker_survives_crop():
    pixels = np.zeros((10, 31, 3), dtype=np.uint8)
    pixels[5, 15] = 255
    out = ImageProcessingUtils.resize(Raster.from_array(pixels), Dimensions(10, 10))

    arr = out.to_array()
    assert arr[5, 5].min() >= 250
    assert arr[5, 3].max() <= 5
    assert arr[5, 7].max() <= 5


def test_crop_keeps_the_middle_columns():
    source = gradient(30, 10)
    out = ImageProcessingUtils.resize(source, Dimensions(10, 10))
    # Red channel encodes the source column; the crop starts at column 10
    red = out.to_array()[:, :, 0].astype(int)
    expected = np.arange(10, 20)
    assert np.all(np.abs(red - expected[None, :]) <= 2)


def test_gaussian_blur_smooths_and_keeps_size():
    pixels = np.zeros((21, 21, 3), dtype=np.uint8)
    pixels[10, 10] = 255
    out = ImageProcessingUtils.gaussian_blur(Raster.from_array(pixels), 2.0)

    arr = out.to_array()
    assert (out.width, out.height) == (21, 21)
    assert arr[10, 10, 0] < 255
    assert arr[10, 12, 0] > 0


def test_gaussian_blur_with_zero_radius_is_noop():
    source = noise(5, 5)
    assert ImageProcessingUtils.gaussian_blur(source, 0) is source


def test_pil_round_trip_preserves_pixels():
    source = noise(6, 4)
    assert ImageProcessingUtils.from_pil(ImageProcessingUtils.to_pil(source)) == source
