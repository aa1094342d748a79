"""Загрузка изображений с диска и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за загрузку и базовое извлечение свойств.
- Любая ошибка декодирования превращается в `ImageAccessError` до того, как дело дойдёт до конвертера.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from gfx2inc.models.errors import ImageAccessError
from gfx2inc.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, исходным режимом и размером файла.

        Raises:
            ImageAccessError: если путь не существует, файл не распознан как изображение
                или данные изображения повреждены/обрезаны.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise ImageAccessError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as source:
                source_mode = source.mode
                # convert() читает данные полностью, поэтому обрезанный файл падает здесь
                pil_image = source.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ImageAccessError(f"Файл не является изображением: {path}") from exc
        except (Image.DecompressionBombError, OSError, EOFError, SyntaxError, ValueError) as exc:
            # PIL сообщает о битых данных по-разному в зависимости от плагина
            raise ImageAccessError(f"Не удалось прочитать изображение {path}: {exc}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Загружено %s: %dx%d, режим %s", path, width, height, source_mode)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=source_mode,
            size_bytes=size_bytes,
        )
