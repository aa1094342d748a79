from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from conftest import coordinate_array
from gfx2inc.models.errors import ImageAccessError
from gfx2inc.services.image_service import ImageService


def test_load_rgba_png(png_file):
    path = png_file(coordinate_array(4, 2))

    data = ImageService().load_image(path)

    assert (data.width, data.height) == (4, 2)
    assert data.mode == "RGBA"
    assert data.pil_image.mode == "RGBA"
    assert data.size_bytes == path.stat().st_size
    assert data.pixels().get_rgba(3, 1) == (3, 1, 0, 255)


def test_load_rgb_image_keeps_source_mode_but_delivers_rgba(tmp_path):
    path = tmp_path / "rgb.bmp"
    Image.new("RGB", (2, 2), (1, 2, 3)).save(path)

    data = ImageService().load_image(path)

    assert data.mode == "RGB"
    assert data.pixels().get_rgba(0, 0) == (1, 2, 3, 255)


def test_load_palette_image(tmp_path):
    path = tmp_path / "palette.png"
    image = Image.new("P", (2, 1))
    image.putpalette([0, 0, 0, 0x12, 0x34, 0x56] + [0] * (256 * 3 - 6))
    image.putpixel((1, 0), 1)
    image.save(path)

    data = ImageService().load_image(path)

    assert data.mode == "P"
    assert data.pixels().get_rgba(1, 0) == (0x12, 0x34, 0x56, 255)


def test_missing_file(tmp_path):
    with pytest.raises(ImageAccessError):
        ImageService().load_image(tmp_path / "nope.png")


def test_directory_is_not_an_image(tmp_path):
    with pytest.raises(ImageAccessError):
        ImageService().load_image(tmp_path)


def test_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("definitely not a png")

    with pytest.raises(ImageAccessError) as info:
        ImageService().load_image(path)

    assert info.value.__cause__ is not None


def test_truncated_image(tmp_path):
    rng = np.random.default_rng(1234)
    full = tmp_path / "full.png"
    Image.fromarray(rng.integers(0, 256, size=(64, 64, 4), dtype=np.uint8)).save(full)
    raw = full.read_bytes()
    truncated = tmp_path / "truncated.png"
    truncated.write_bytes(raw[: len(raw) // 2])

    with pytest.raises(ImageAccessError):
        ImageService().load_image(truncated)


def test_image_over_pixel_limit(png_file, monkeypatch):
    path = png_file(coordinate_array(16, 16))
    # 256 px > 2 * 10: Pillow отказывается открывать такое изображение
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(ImageAccessError) as info:
        ImageService().load_image(path)

    assert isinstance(info.value.__cause__, Image.DecompressionBombError)
