"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обхода тайлов и форматирования).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from gfx2inc.config import OUTPUT_SUFFIX
from gfx2inc.models.errors import Gfx2IncError, InvalidTileDimensions
from gfx2inc.models.image_model import ImageData, RgbaPixels, TileGrid
from gfx2inc.services.image_service import ImageService
from gfx2inc.services.output_service import OutputService
from gfx2inc.services.tile_service import TileService, format_word, pack_pixel
from gfx2inc.ui.bottom_bar import BottomBar
from gfx2inc.ui.image_viewer import ImageViewer
from gfx2inc.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка изображений через `ImageService`.
    - Проверка размера тайла и построение сетки через `TileService`.
    - Экспорт результата через `OutputService`.
    - Синхронизация состояния зума и наложения сетки.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _tile_service: TileService = field(default_factory=TileService)
    _output_service: OutputService = field(default_factory=OutputService)
    _current_image: Optional[ImageData] = None
    _pixels: Optional[RgbaPixels] = None
    _grid: Optional[TileGrid] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_tile_size_change = self._handle_tile_size_change
        self.sidebar.on_export = self._handle_export

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_grid_toggle = self._handle_grid_toggle

    def bind_shortcuts(self) -> None:
        """Ctrl+O — открыть, Ctrl+S — экспорт, Ctrl+0 — вписать в окно."""
        self.window.bind("<Control-o>", lambda _e: self._handle_open_file())
        self.window.bind("<Control-s>", lambda _e: self._handle_export())
        self.window.bind("<Control-0>", lambda _e: self._handle_zoom_fit())

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.bmp *.gif *.tga *.tiff *.webp *.jpg *.jpeg"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            image_data = self._image_service.load_image(file_path)
        except Gfx2IncError as exc:
            self.sidebar.set_status(str(exc), error=True)
            return

        self._current_image = image_data
        self._pixels = image_data.pixels()

        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.sidebar.set_status(f"Открыто: {image_data.path.name}")
        self._refresh_grid()

        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _handle_tile_size_change(self) -> None:
        self._refresh_grid()

    def _handle_export(self) -> None:
        if self._current_image is None or self._pixels is None:
            self.sidebar.set_status("Сначала откройте изображение", error=True)
            return
        tile_size = self._read_tile_size()
        if tile_size is None:
            return

        initial = self._output_service.default_output_path(self._current_image.path)
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить как",
                initialdir=str(initial.parent),
                initialfile=initial.name,
                defaultextension=OUTPUT_SUFFIX,
                filetypes=(("Include", f"*{OUTPUT_SUFFIX}"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not file_path:
            return

        try:
            text = self._tile_service.convert(self._pixels, *tile_size)
            written = self._output_service.write_text(file_path, text)
        except Gfx2IncError as exc:
            logger.error("Экспорт не удался: %s", exc)
            self.sidebar.set_status(str(exc), error=True)
            return
        self.sidebar.set_status(f"Сохранено: {written.name}")

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int]) -> None:
        if x is None or y is None or self._pixels is None:
            self.sidebar.update_cursor_info(None, None, None)
            return
        rgba = self._pixels.get_rgba(x, y)
        tile_text = None
        if self._grid is not None:
            tile = self._tile_service.tile_at(self._grid, x, y)
            index = self._tile_service.tile_index(self._grid, tile)
            tile_text = f"#{index} (строка {tile.row}, столбец {tile.col})"
        self.sidebar.update_cursor_info((x, y), format_word(pack_pixel(*rgba)), tile_text)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync slider when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _handle_grid_toggle(self, visible: bool) -> None:
        self.viewer.set_grid_visible(visible)

    # ---- Helpers ----
    def _read_tile_size(self) -> Optional[Tuple[int, int]]:
        try:
            return self.sidebar.get_tile_size()
        except ValueError as exc:
            self.sidebar.set_grid_info(None, str(exc))
            self.sidebar.set_export_enabled(False)
            return None

    def _refresh_grid(self) -> None:
        """Перепроверяет размер тайла для текущего изображения и обновляет сетку в UI."""
        self._grid = None
        self.viewer.set_tile_grid(None)
        if self._pixels is None:
            return
        tile_size = self._read_tile_size()
        if tile_size is None:
            return
        try:
            self._grid = self._tile_service.describe(self._pixels, *tile_size)
        except InvalidTileDimensions as exc:
            self.sidebar.set_grid_info(None, str(exc))
            self.sidebar.set_export_enabled(False)
            return
        self.sidebar.set_grid_info(self._grid, None)
        self.sidebar.set_export_enabled(True)
        self.viewer.set_tile_grid(self._grid)
