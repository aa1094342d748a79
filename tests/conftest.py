from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from gfx2inc.models.image_model import RgbaPixels

RGBA = Tuple[int, int, int, int]


def rgba_array(rows: Sequence[Sequence[RGBA]]) -> np.ndarray:
    return np.array(rows, dtype=np.uint8).reshape(len(rows), len(rows[0]), 4)


def coordinate_array(width: int, height: int) -> np.ndarray:
    """Пиксель (x, y) = (R=x, G=y, B=0, A=0xff): по слову сразу видно, откуда он."""
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 0] = np.arange(width)[np.newaxis, :]
    arr[..., 1] = np.arange(height)[:, np.newaxis]
    arr[..., 3] = 0xFF
    return arr


@pytest.fixture
def coordinate_pixels():
    def _make(width: int, height: int) -> RgbaPixels:
        return RgbaPixels(coordinate_array(width, height))
    return _make


@pytest.fixture
def png_file(tmp_path: Path):
    def _make(arr: np.ndarray, name: str = "input.png") -> Path:
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path
    return _make
