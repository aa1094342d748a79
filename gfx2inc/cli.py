"""Командная строка: `gfx2inc <ширина тайла> <высота тайла> <вход> <выход>`."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from gfx2inc.config import APP_NAME, VERSION, setup_logging
from gfx2inc.models.errors import ImageAccessError, InvalidTileDimensions, OutputWriteError
from gfx2inc.services.image_service import ImageService
from gfx2inc.services.output_service import OutputService
from gfx2inc.services.tile_service import TileService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_TILE_DIMENSIONS = 3
EXIT_IMAGE_ACCESS = 4
EXIT_OUTPUT_WRITE = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Конвертирует изображение в тайловый дамп 32-битных слов `data.32 0xAABBGGRR`.",
    )
    parser.add_argument("tile_width", type=int, help="Ширина тайла, px")
    parser.add_argument("tile_height", type=int, help="Высота тайла, px")
    parser.add_argument("input", help="Исходное изображение (PNG, BMP, ...)")
    parser.add_argument("output", nargs="?", help="Файл результата (для --dry-run не нужен)")
    parser.add_argument("--dry-run", action="store_true", help="Только проверить размеры и показать сетку тайлов")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Подробнее (можно повторять)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Только ошибки")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {VERSION}")
    return parser


def _log_level(args: argparse.Namespace) -> Optional[int]:
    if args.quiet:
        return logging.ERROR
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return None


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.output is None and not args.dry_run:
        parser.error("не указан файл результата")

    setup_logging(_log_level(args))
    logger.info("%s %s", APP_NAME, VERSION)

    tiles = TileService()
    try:
        image_data = ImageService().load_image(args.input)
        pixels = image_data.pixels()
        if args.dry_run:
            grid = tiles.describe(pixels, args.tile_width, args.tile_height)
            print(f"{image_data.path}: {image_data.width}x{image_data.height}, {grid}")
            return EXIT_OK
        text = tiles.convert(pixels, args.tile_width, args.tile_height)
        OutputService().write_text(args.output, text)
    except InvalidTileDimensions as exc:
        logger.error("Неверный размер тайла: %s", exc)
        return EXIT_TILE_DIMENSIONS
    except ImageAccessError as exc:
        logger.error("%s", exc)
        return EXIT_IMAGE_ACCESS
    except OutputWriteError as exc:
        logger.error("%s", exc)
        return EXIT_OUTPUT_WRITE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
