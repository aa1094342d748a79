"""Главное окно: просмотр изображения с сеткой тайлов и экспорт в `.inc`."""
import customtkinter as ctk

from gfx2inc.config import APP_NAME, VERSION
from gfx2inc.controllers.app_controller import AppController
from gfx2inc.ui.image_viewer import ImageViewer
from gfx2inc.ui.sidebar import Sidebar
from gfx2inc.ui.bottom_bar import BottomBar


class TilePreviewApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title(f"{APP_NAME} {VERSION}")
        self.geometry("1100x720")
        self.minsize(900, 600)

        # viewer | sidebar, bottom bar spans both
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._viewer = ImageViewer(self)
        self._sidebar = Sidebar(self)
        self._bottom = BottomBar(self)

        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
        self._controller.bind_shortcuts()
