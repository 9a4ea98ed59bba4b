"""Application entry point."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from prorate_app.core.container import build_container
from prorate_app.ui.main_window import MainWindow


def run() -> None:
    """Launch the GUI application."""
    container = build_container()

    app = QApplication(sys.argv)
    window = MainWindow(
        container.config,
        container.proration_service,
        container.csv_import_service,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    run()
