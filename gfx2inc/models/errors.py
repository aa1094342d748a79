"""Ошибки конвертера.

Иерархия:
- `Gfx2IncError` — общий корень, удобно ловить в точках входа (CLI, UI).
- `ConversionError` / `InvalidTileDimensions` — ошибки самого ядра.
- `ImageAccessError`, `OutputWriteError` — ошибки внешних участников (чтение/запись).
"""
from __future__ import annotations

from typing import Optional, Tuple


class Gfx2IncError(Exception):
    """Базовая ошибка приложения."""


class ConversionError(Gfx2IncError):
    """Конвертация не может быть выполнена."""


class InvalidTileDimensions(ConversionError):
    """Размер тайла нулевой/отрицательный или не делит размер изображения нацело."""

    def __init__(self, message: str, image_size: Optional[Tuple[int, int]], tile_size: Tuple[int, int]) -> None:
        super().__init__(message)
        self.image_size = image_size
        self.tile_size = tile_size


class ImageAccessError(Gfx2IncError):
    """Не удалось открыть или декодировать исходное изображение."""


class OutputWriteError(Gfx2IncError):
    """Не удалось записать результат на диск."""
