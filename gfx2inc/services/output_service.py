"""Запись результата конвертации на диск.

Файл пишется во временный файл рядом с целевым и затем атомарно подменяет его,
поэтому при ошибке существующий файл остаётся нетронутым, а нового не появляется.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from gfx2inc.config import OUTPUT_SUFFIX
from gfx2inc.models.errors import OutputWriteError

logger = logging.getLogger(__name__)


class OutputService:
    def write_text(self, file_path: str | Path, text: str) -> Path:
        """Записывает `text` (ASCII) в `file_path`, создавая или заменяя файл.

        Raises:
            OutputWriteError: если каталог недоступен или запись не удалась.
        """
        path = Path(file_path)
        data = text.encode("utf-8")
        directory = path.parent

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise OutputWriteError(f"Не удалось записать {path}: {exc}") from exc

        logger.info("Записано %s (%d байт)", path, len(data))
        return path

    def default_output_path(self, input_path: str | Path) -> Path:
        """`picture.png` -> `picture.inc` рядом с исходником."""
        return Path(input_path).with_suffix(OUTPUT_SUFFIX)
