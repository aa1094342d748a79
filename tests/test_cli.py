from __future__ import annotations

import pytest
from PIL import Image

from conftest import coordinate_array
from gfx2inc.cli import (
    EXIT_IMAGE_ACCESS,
    EXIT_OK,
    EXIT_OUTPUT_WRITE,
    EXIT_TILE_DIMENSIONS,
    main,
)
from gfx2inc.config import VERSION
from gfx2inc.models.image_model import RgbaPixels
from gfx2inc.services.tile_service import convert


def test_convert_writes_output(png_file, tmp_path):
    arr = coordinate_array(8, 4)
    source = png_file(arr)
    target = tmp_path / "out.inc"

    assert main(["4", "2", str(source), str(target)]) == EXIT_OK

    assert target.read_text() == convert(RgbaPixels(arr), 4, 2)


def test_bad_tile_size_writes_nothing(png_file, tmp_path):
    source = png_file(coordinate_array(8, 4))
    target = tmp_path / "out.inc"

    assert main(["3", "2", str(source), str(target)]) == EXIT_TILE_DIMENSIONS
    assert not target.exists()


def test_zero_tile_size(png_file, tmp_path):
    source = png_file(coordinate_array(8, 4))

    assert main(["0", "2", str(source), str(tmp_path / "out.inc")]) == EXIT_TILE_DIMENSIONS


def test_bad_tile_size_leaves_existing_output(png_file, tmp_path):
    source = png_file(coordinate_array(8, 4))
    target = tmp_path / "out.inc"
    target.write_text("previous")

    assert main(["8", "3", str(source), str(target)]) == EXIT_TILE_DIMENSIONS
    assert target.read_text() == "previous"


def test_missing_input(tmp_path):
    target = tmp_path / "out.inc"

    assert main(["8", "8", str(tmp_path / "missing.png"), str(target)]) == EXIT_IMAGE_ACCESS
    assert not target.exists()


def test_unwritable_output(png_file, tmp_path):
    source = png_file(coordinate_array(8, 8))

    assert main(["8", "8", str(source), str(tmp_path / "nodir" / "out.inc")]) == EXIT_OUTPUT_WRITE


def test_dry_run_reports_grid(png_file, tmp_path, capsys):
    source = png_file(coordinate_array(16, 8))

    assert main(["--dry-run", "8", "4", str(source)]) == EXIT_OK

    out = capsys.readouterr().out
    assert "16x8" in out
    assert "2 x 2 = 4" in out
    assert list(tmp_path.iterdir()) == [source]


def test_missing_output_argument_is_usage_error(png_file):
    source = png_file(coordinate_array(8, 8))

    with pytest.raises(SystemExit) as info:
        main(["8", "8", str(source)])
    assert info.value.code == 2


def test_non_integer_tile_size_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["eight", "8", "in.png", str(tmp_path / "out.inc")])
    assert info.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])
    assert info.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_image_over_pixel_limit_is_image_access_error(png_file, tmp_path, monkeypatch):
    source = png_file(coordinate_array(16, 16))
    target = tmp_path / "out.inc"
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    assert main(["8", "8", str(source), str(target)]) == EXIT_IMAGE_ACCESS
    assert not target.exists()
