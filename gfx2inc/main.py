"""Точка входа в графическое приложение."""
from gfx2inc.app import TilePreviewApp
from gfx2inc.config import setup_logging


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    setup_logging()
    app = TilePreviewApp()
    app.mainloop()


if __name__ == "__main__":
    main()
