"""Ядро конвертера: обход сетки тайлов и упаковка пикселей в текст `data.32`.

Формат вывода (побайтно):
- на каждую строку пикселей тайла — строка токенов `data.32 0xAABBGGRR `, завершённая `\\n`;
- после каждого тайла (включая последний) — пустая строка;
- тайлы идут построчно по сетке тайлов, а не в растровом порядке по пикселям.

Принципы:
- SRP: только обход и форматирование; чтение и запись файлов — в других сервисах.
- DIP: работает с любым `PixelSource`, не зная о PIL/numpy.
- Без глобального состояния: буфер локален для каждого вызова `convert`.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple

from gfx2inc.models.image_model import PixelSource, TileGrid, TileSpec

logger = logging.getLogger(__name__)

WORD_PREFIX = "data.32 0x"


class TileBounds(NamedTuple):
    """Адрес тайла в сетке и диапазоны его пикселей."""
    row: int
    col: int
    rows: range
    cols: range


def pack_pixel(r: int, g: int, b: int, a: int) -> int:
    """Упаковывает каналы в 32-битное слово: R — младший байт, A — старший."""
    for channel in (r, g, b, a):
        if not 0 <= channel <= 0xFF:
            raise ValueError(f"Значение канала вне диапазона 0..255: {channel}")
    return (a << 24) | (b << 16) | (g << 8) | r


def format_word(word: int) -> str:
    """`data.32 0x` + 8 шестнадцатеричных цифр в нижнем регистре."""
    return f"{WORD_PREFIX}{word:08x}"


def iter_tiles(grid: TileGrid) -> Iterator[TileBounds]:
    """Тайлы построчно по сетке: вся строка тайлов, затем следующая."""
    tw, th = grid.tile_width, grid.tile_height
    for tile_row in range(grid.tiles_high):
        for tile_col in range(grid.tiles_wide):
            yield TileBounds(
                row=tile_row,
                col=tile_col,
                rows=range(tile_row * th, (tile_row + 1) * th),
                cols=range(tile_col * tw, (tile_col + 1) * tw),
            )


def emit_tile(image: PixelSource, buffer: List[str], rows: range, cols: range) -> None:
    """Дописывает в `buffer` текст одного тайла."""
    for y in rows:
        for x in cols:
            word = pack_pixel(*image.get_rgba(x, y))
            buffer.append(format_word(word))
            buffer.append(" ")
        buffer.append("\n")
    buffer.append("\n")


def convert(image: PixelSource, tile_width: int, tile_height: int) -> str:
    """Конвертирует изображение в текст `data.32`, тайл за тайлом.

    Raises:
        InvalidTileDimensions: тайл с нулевой/отрицательной стороной или не делящий изображение.
            Проверка выполняется до формирования какого-либо текста.
    """
    grid = TileSpec(tile_width, tile_height).grid_for(image.width, image.height)
    logger.debug("Сетка тайлов %dx%d: %s", image.width, image.height, grid)

    buffer: List[str] = []
    for tile in iter_tiles(grid):
        emit_tile(image, buffer, tile.rows, tile.cols)
    return "".join(buffer)


class TileService:
    """Обёртка над функциями ядра для контроллера и CLI. Состояния не хранит."""

    def describe(self, image: PixelSource, tile_width: int, tile_height: int) -> TileGrid:
        """Проверяет размер тайла и возвращает сетку без формирования текста."""
        return TileSpec(tile_width, tile_height).grid_for(image.width, image.height)

    def convert(self, image: PixelSource, tile_width: int, tile_height: int) -> str:
        return convert(image, tile_width, tile_height)

    def tile_at(self, grid: TileGrid, x: int, y: int) -> TileBounds:
        """Тайл, которому принадлежит пиксель `(x, y)`."""
        tile_row, tile_col = y // grid.tile_height, x // grid.tile_width
        if not (0 <= tile_row < grid.tiles_high and 0 <= tile_col < grid.tiles_wide):
            raise IndexError(f"Пиксель ({x}, {y}) вне сетки тайлов")
        return TileBounds(
            row=tile_row,
            col=tile_col,
            rows=range(tile_row * grid.tile_height, (tile_row + 1) * grid.tile_height),
            cols=range(tile_col * grid.tile_width, (tile_col + 1) * grid.tile_width),
        )

    def tile_index(self, grid: TileGrid, tile: TileBounds) -> int:
        """Порядковый номер тайла в выводе (с нуля)."""
        return tile.row * grid.tiles_wide + tile.col
