"""Background worker tasks used by the main GUI window."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QRunnable, Signal

if TYPE_CHECKING:
    from prorate_app.services.csv_import_service import CsvImportService


class ImportSignals(QObject):
    """Signals for background CSV import tasks."""

    done = Signal(list, int, str)
    error = Signal(str)


class ImportCoverageCsvTask(QRunnable):
    """Read a coverage worksheet in a background worker."""

    def __init__(self, csv_import_service: CsvImportService, file_path: str):
        super().__init__()
        self.csv_import_service = csv_import_service
        self.file_path = file_path
        self.signals = ImportSignals()

    def run(self) -> None:
        try:
            result = self.csv_import_service.import_lines(self.file_path)
            self.signals.done.emit(
                result.lines,
                result.failed_count,
                "\n".join(result.error_messages),
            )
        except Exception as error:  # pylint: disable=broad-except
            # Worker boundary: convert any failure to a user-visible message.
            self.signals.error.emit(str(error))
