from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from gfx2inc.models.errors import InvalidTileDimensions
from gfx2inc.models.image_model import RgbaPixels, TileSpec


@pytest.mark.parametrize("size", [(0, 8), (8, 0), (-1, 8)])
def test_tile_spec_rejects_non_positive_sizes(size):
    with pytest.raises(InvalidTileDimensions):
        TileSpec(*size)



@pytest.mark.parametrize("value", [True, 2.0, "4", None])
def test_tile_spec_requires_integers(value):
    with pytest.raises(InvalidTileDimensions):
        TileSpec(value, 4)


def test_tile_spec_accepts_numpy_integers():
    assert TileSpec(np.int64(4), 2).grid_for(8, 8).tile_count == 8


def test_grid_for():
    grid = TileSpec(8, 4).grid_for(32, 16)

    assert (grid.tiles_wide, grid.tiles_high, grid.tile_count) == (4, 4, 16)
    assert "16" in str(grid)


def test_grid_for_reports_offending_dimension():
    with pytest.raises(InvalidTileDimensions, match="Высота"):
        TileSpec(8, 5).grid_for(32, 16)


def test_rgba_pixels_from_rgb_image_adds_opaque_alpha():
    image = Image.new("RGB", (3, 2), (10, 20, 30))

    pixels = RgbaPixels.from_image(image)

    assert (pixels.width, pixels.height) == (3, 2)
    assert pixels.get_rgba(2, 1) == (10, 20, 30, 255)


def test_rgba_pixels_indexes_by_x_then_y():
    arr = np.zeros((2, 3, 4), dtype=np.uint8)
    arr[1, 2] = (1, 2, 3, 4)

    assert RgbaPixels(arr).get_rgba(2, 1) == (1, 2, 3, 4)


def test_rgba_pixels_leaves_source_array_writable():
    arr = np.zeros((1, 1, 4), dtype=np.uint8)
    RgbaPixels(arr)

    arr[0, 0] = (9, 9, 9, 9)

    assert arr.flags.writeable


def test_rgba_pixels_rejects_wrong_shape():
    with pytest.raises(ValueError):
        RgbaPixels(np.zeros((2, 2, 3), dtype=np.uint8))


@pytest.mark.parametrize("dtype", [np.int64, np.uint16, np.float32])
def test_rgba_pixels_rejects_wider_dtypes(dtype):
    arr = np.zeros((1, 1, 4), dtype=dtype)
    arr[0, 0, 0] = 256

    with pytest.raises(ValueError, match="uint8"):
        RgbaPixels(arr)
