"""Боковая панель: открытие файла, информация, размер тайла, экспорт.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from gfx2inc.config import DEFAULT_TILE_SIZE
from gfx2inc.models.image_model import ImageData, TileGrid


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    return f"{size_bytes / 1024:.1f} KB"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, тайлы, курсор, экспорт."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_tile_size_change: Optional[Callable[[], None]] = None
        self.on_export: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # File
        self._title = ctk.CTkLabel(self, text="Инструменты", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Tiles section
        self._tiles_title = ctk.CTkLabel(self, text="Тайлы", font=bold)
        self._tiles_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        tile_row = ctk.CTkFrame(self, fg_color="transparent")
        tile_row.grid(row=7, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._tile_w_val = ctk.StringVar(value=str(DEFAULT_TILE_SIZE[0]))
        self._tile_h_val = ctk.StringVar(value=str(DEFAULT_TILE_SIZE[1]))
        self._tile_w_entry = ctk.CTkEntry(tile_row, textvariable=self._tile_w_val, width=64)
        self._tile_x_label = ctk.CTkLabel(tile_row, text="×", width=16)
        self._tile_h_entry = ctk.CTkEntry(tile_row, textvariable=self._tile_h_val, width=64)
        self._tile_w_entry.grid(row=0, column=0, padx=(0, 4), sticky="w")
        self._tile_x_label.grid(row=0, column=1, sticky="w")
        self._tile_h_entry.grid(row=0, column=2, padx=(4, 0), sticky="w")
        for entry in (self._tile_w_entry, self._tile_h_entry):
            entry.bind("<FocusOut>", self._on_tile_size_commit)
            entry.bind("<Return>", self._on_tile_size_commit)

        self._grid_val = ctk.StringVar(value="—")
        self._grid_label = ctk.CTkLabel(self, textvariable=self._grid_val, wraplength=250, anchor="w", justify="left")
        self._grid_label.grid(row=8, column=0, padx=8, pady=(0, 10), sticky="ew")
        self._default_text_color = self._grid_label.cget("text_color")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=9, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_word_val = ctk.StringVar(value="—")
        self._cursor_tile_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_word = ctk.CTkLabel(self, textvariable=self._cursor_word_val, anchor="w", justify="left")
        self._cursor_tile = ctk.CTkLabel(self, textvariable=self._cursor_tile_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_word.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_tile.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Export
        self._export_btn = ctk.CTkButton(self, text="Экспорт…", command=self._emit_export, state="disabled")
        self._export_btn.grid(row=100, column=0, padx=8, pady=(8, 4), sticky="ew")

        self._status_val = ctk.StringVar(value="")
        self._status = ctk.CTkLabel(self, textvariable=self._status_val, wraplength=250, anchor="w", justify="left")
        self._status.grid(row=101, column=0, padx=8, pady=(0, 8), sticky="ew")

    # public API (sync from controller)
    def set_image_info(self, data: ImageData) -> None:
        self._path_val.set(str(data.path))
        self._dims_val.set(f"{data.width} × {data.height} px, {_format_size(data.size_bytes)}")
        self._mode_val.set(f"Режим: {data.mode}")

    def get_tile_size(self) -> Tuple[int, int]:
        """Возвращает (ширина, высота) тайла из полей ввода.

        Raises:
            ValueError: если значение не является целым числом.
        """
        try:
            return int(self._tile_w_val.get().strip()), int(self._tile_h_val.get().strip())
        except ValueError as exc:
            raise ValueError("Размер тайла должен быть целым числом") from exc

    def set_grid_info(self, grid: Optional[TileGrid], error: Optional[str]) -> None:
        if error is not None:
            self._grid_val.set(error)
            self._grid_label.configure(text_color="#d9534f")
            return
        self._grid_val.set(str(grid) if grid is not None else "—")
        self._grid_label.configure(text_color=self._default_text_color)

    def update_cursor_info(self, xy: Optional[Tuple[int, int]], word: Optional[str], tile: Optional[str]) -> None:
        if xy is None:
            self._cursor_xy_val.set("—")
            self._cursor_word_val.set("—")
            self._cursor_tile_val.set("—")
            return
        x, y = xy
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_word_val.set(word or "—")
        self._cursor_tile_val.set(f"Тайл {tile}" if tile else "Тайл: —")

    def set_export_enabled(self, enabled: bool) -> None:
        self._export_btn.configure(state="normal" if enabled else "disabled")

    def set_status(self, text: str, error: bool = False) -> None:
        self._status_val.set(text)
        self._status.configure(text_color="#d9534f" if error else self._default_text_color)

    # events
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_export(self) -> None:
        if self.on_export:
            self.on_export()

    def _on_tile_size_commit(self, _event=None) -> None:
        if self.on_tile_size_change:
            self.on_tile_size_change()
