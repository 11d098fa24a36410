"""Desktop entry point."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from docsign.config.settings import Settings
from docsign.logging.logger import Log
from docsign.ui.main_window import MainWindow


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)

    app = QApplication(sys.argv)
    window = MainWindow(settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
