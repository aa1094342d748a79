"""Виджет просмотра изображения: масштабирование, панорамирование и наложение сетки тайлов.

Принципы:
- SRP: отвечает только за представление и интеракции с изображением.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from gfx2inc.models.image_model import TileGrid
from gfx2inc.ui.viewport import visible_region

MIN_SCALE = 0.1
MAX_SCALE = 16.0
# линии сетки не рисуем, если тайл на экране меньше этого размера
MIN_GRID_CELL_PX = 4


class ImageViewer(ctk.CTkFrame):
    """Канва с изображением и сеткой тайлов поверх него."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._tile_grid: Optional[TileGrid] = None
        self._grid_visible: bool = True

        self._scale_factor: float = 1.0
        self._fit_scale_factor: float = 1.0
        self._image_top_left: Optional[Tuple[int, int]] = None

        # panning state
        self._pan_start_canvas_xy: Optional[Tuple[int, int]] = None
        self._pan_start_top_left: Optional[Tuple[int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

        # Panning with left mouse drag
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_pan_end)

    # ---- Public API ----
    def set_image(self, image: Image.Image) -> None:
        """Устанавливает изображение и сбрасывает состояние зума/панорамирования."""
        self._image = image
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None  # reset to center
        self._render_image()

    def set_tile_grid(self, grid: Optional[TileGrid]) -> None:
        """Сетка тайлов для наложения (None — убрать)."""
        self._tile_grid = grid
        self._render_image()

    def set_grid_visible(self, visible: bool) -> None:
        self._grid_visible = visible
        self._render_image()

    def set_zoom_to_fit(self) -> None:
        """Масштабирует изображение так, чтобы оно целиком помещалось в доступную область."""
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        self._scale_factor = max(MIN_SCALE, min(MAX_SCALE, zoom_percent / 100.0))
        self._render_image()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._image is None:
            return
        self._compute_fit_scale()
        self._render_image()

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())

        img_w, img_h = self._image.size
        scaled_w = max(1, int(img_w * self._scale_factor))
        scaled_h = max(1, int(img_h * self._scale_factor))

        # compute allowed top-left range
        if scaled_w <= canvas_w:
            min_x = max_x = (canvas_w - scaled_w) // 2
        else:
            min_x, max_x = canvas_w - scaled_w, 0
        if scaled_h <= canvas_h:
            min_y = max_y = (canvas_h - scaled_h) // 2
        else:
            min_y, max_y = canvas_h - scaled_h, 0

        if self._image_top_left is None:
            self._image_top_left = (min_x if scaled_w <= canvas_w else 0, min_y if scaled_h <= canvas_h else 0)
        else:
            ox, oy = self._image_top_left
            self._image_top_left = (max(min_x, min(max_x, ox)), max(min_y, min(max_y, oy)))
        ox, oy = self._image_top_left

        # масштабируем только видимый фрагмент
        region = visible_region(self._image.size, self._scale_factor, (ox, oy), (canvas_w, canvas_h))
        if region is not None:
            # NEAREST: пиксели тайлов должны оставаться чёткими при увеличении
            resized = self._image.resize(region.size, Image.Resampling.NEAREST, box=region.box)
            self._tk_image = ImageTk.PhotoImage(resized)
            self._canvas.create_image(*region.offset, image=self._tk_image, anchor="nw")

        if self._grid_visible and self._tile_grid is not None:
            self._draw_tile_grid(ox, oy, scaled_w, scaled_h)

    def _draw_tile_grid(self, ox: int, oy: int, scaled_w: int, scaled_h: int) -> None:
        grid = self._tile_grid
        cell_w = grid.tile_width * self._scale_factor
        cell_h = grid.tile_height * self._scale_factor
        if cell_w < MIN_GRID_CELL_PX or cell_h < MIN_GRID_CELL_PX:
            return
        color = "#ff00ff"
        for col in range(grid.tiles_wide + 1):
            x = ox + int(round(col * cell_w))
            self._canvas.create_line(x, oy, x, oy + scaled_h, fill=color)
        for row in range(grid.tiles_high + 1):
            y = oy + int(round(row * cell_h))
            self._canvas.create_line(ox, y, ox + scaled_w, y, fill=color)

    def _compute_fit_scale(self) -> None:
        if self._image is None:
            self._fit_scale_factor = 1.0
            return
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = self._image.size
        if img_w == 0 or img_h == 0:
            self._fit_scale_factor = 1.0
            return
        self._fit_scale_factor = max(MIN_SCALE, min(MAX_SCALE, min(canvas_w / img_w, canvas_h / img_h)))

    def _canvas_to_image_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._image is None or self._image_top_left is None:
            return None, None
        ox, oy = self._image_top_left
        x = int((cx - ox) // self._scale_factor)
        y = int((cy - oy) // self._scale_factor)
        img_w, img_h = self._image.size
        if 0 <= x < img_w and 0 <= y < img_h:
            return x, y
        return None, None

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is None or self.on_cursor_move is None:
            return
        x, y = self._canvas_to_image_coords(event.x, event.y)
        self.on_cursor_move(x, y)

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None)

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if self._image is None or event.delta == 0:
            return
        self._zoom_at_point(event.x, event.y, 1.1 if event.delta > 0 else 1.0 / 1.1)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        if self._image is None:
            return
        factor = 1.1 if getattr(event, "num", None) == 4 else 1.0 / 1.1
        self._zoom_at_point(event.x, event.y, factor)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        # anchor zoom under cursor
        if self._image_top_left is None:
            return
        old_scale = self._scale_factor
        new_scale = max(MIN_SCALE, min(MAX_SCALE, old_scale * factor))
        if abs(new_scale - old_scale) < 1e-6:
            return

        ox, oy = self._image_top_left
        ix = (cx - ox) / old_scale
        iy = (cy - oy) / old_scale
        self._scale_factor = new_scale
        self._image_top_left = (int(round(cx - ix * new_scale)), int(round(cy - iy * new_scale)))
        self._render_image()

        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        if self._image_top_left is None:
            return
        self._pan_start_canvas_xy = (event.x, event.y)
        self._pan_start_top_left = self._image_top_left

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._pan_start_canvas_xy is None or self._pan_start_top_left is None:
            return
        sx, sy = self._pan_start_canvas_xy
        ox, oy = self._pan_start_top_left
        self._image_top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render_image()

    def _on_pan_end(self, _event: tk.Event) -> None:
        self._pan_start_canvas_xy = None
        self._pan_start_top_left = None
