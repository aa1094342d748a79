"""Константы приложения и настройка логирования."""
from __future__ import annotations

import logging
import os
from typing import Optional

APP_NAME = "gfx2inc"
VERSION = "1.0.0"

DEFAULT_TILE_SIZE = (8, 8)
OUTPUT_SUFFIX = ".inc"

LOG_LEVEL_ENV = "GFX2INC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def default_log_level() -> int:
    """Уровень логирования из переменной окружения `GFX2INC_LOG_LEVEL` (по умолчанию WARNING)."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    # getLevelName возвращает строку "Level X" для неизвестных имён
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: Optional[int] = None) -> None:
    """Настраивает корневой логгер один раз, из точки входа (CLI или GUI)."""
    logging.basicConfig(
        level=default_log_level() if level is None else level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
