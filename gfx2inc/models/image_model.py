"""Модели данных: загруженное изображение, размер тайла и сетка тайлов.

Принципы:
- SRP: только структуры данных и их инварианты, без логики обхода и форматирования.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
- DIP: ядро конвертера зависит от протокола `PixelSource`, а не от PIL/numpy.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Tuple

import numpy as np
from PIL import Image

from gfx2inc.models.errors import InvalidTileDimensions

RGBA = Tuple[int, int, int, int]


class PixelSource(Protocol):
    """Минимальная возможность, нужная конвертеру: размеры и доступ к пикселю по координате."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_rgba(self, x: int, y: int) -> RGBA: ...


class RgbaPixels:
    """Адаптер над массивом `H x W x 4` (uint8) с каналами строго в порядке R, G, B, A."""

    def __init__(self, array: np.ndarray) -> None:
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Ожидался массив формы (H, W, 4), получено {array.shape}")
        if array.dtype != np.uint8:
            # приведение к uint8 молча обрезало бы значения > 255
            raise ValueError(f"Ожидался массив uint8, получено {array.dtype}")
        # собственный view: флаг read-only не должен затрагивать массив вызывающего
        self._array = np.ascontiguousarray(array).view()
        self._array.setflags(write=False)

    @classmethod
    def from_image(cls, image: Image.Image) -> "RgbaPixels":
        # convert() фиксирует порядок каналов, какой бы ни была раскладка файла
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(np.asarray(rgba, dtype=np.uint8))

    @property
    def width(self) -> int:
        return int(self._array.shape[1])

    @property
    def height(self) -> int:
        return int(self._array.shape[0])

    def get_rgba(self, x: int, y: int) -> RGBA:
        r, g, b, a = self._array[y, x]
        return int(r), int(g), int(b), int(a)


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Загруженное изображение PIL (всегда RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла до конвертации, например "P" или "RGB".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]

    def pixels(self) -> RgbaPixels:
        """Возвращает пиксели в виде `PixelSource` для конвертера."""
        return RgbaPixels.from_image(self.pil_image)


@dataclass(frozen=True)
class TileGrid:
    """Производная сетка тайлов для конкретного изображения."""
    tile_width: int
    tile_height: int
    tiles_wide: int
    tiles_high: int

    @property
    def tile_count(self) -> int:
        return self.tiles_wide * self.tiles_high

    def __str__(self) -> str:
        return f"{self.tiles_wide} x {self.tiles_high} = {self.tile_count} тайлов ({self.tile_width}x{self.tile_height})"


@dataclass(frozen=True)
class TileSpec:
    """Запрошенный размер тайла. Обе стороны строго положительны."""
    tile_width: int
    tile_height: int

    def __post_init__(self) -> None:
        for name, value in (("ширина", self.tile_width), ("высота", self.tile_height)):
            # bool является подклассом int
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidTileDimensions(
                    f"{name.capitalize()} тайла должна быть целым числом: {value!r}",
                    image_size=None,
                    tile_size=(self.tile_width, self.tile_height),
                )
            if value <= 0:
                raise InvalidTileDimensions(
                    f"{name.capitalize()} тайла должна быть > 0: {value}",
                    image_size=None,
                    tile_size=(self.tile_width, self.tile_height),
                )

    @property
    def size(self) -> Tuple[int, int]:
        return self.tile_width, self.tile_height

    def grid_for(self, width: int, height: int) -> TileGrid:
        """Строит сетку тайлов для изображения `width x height`.

        Raises:
            InvalidTileDimensions: если тайл не делит изображение нацело.
        """
        if width % self.tile_width != 0:
            raise InvalidTileDimensions(
                f"Ширина изображения {width} не делится на ширину тайла {self.tile_width}",
                image_size=(width, height),
                tile_size=self.size,
            )
        if height % self.tile_height != 0:
            raise InvalidTileDimensions(
                f"Высота изображения {height} не делится на высоту тайла {self.tile_height}",
                image_size=(width, height),
                tile_size=self.size,
            )
        return TileGrid(
            tile_width=self.tile_width,
            tile_height=self.tile_height,
            tiles_wide=width // self.tile_width,
            tiles_high=height // self.tile_height,
        )
