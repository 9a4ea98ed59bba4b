"""CSV import service for coverage line worksheets."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field

from prorate_app.core.validation import validate_required_text
from prorate_app.models.coverage import CoverageLine

logger = logging.getLogger("prorate_app.services.csv_import_service")

REQUIRED_CSV_HEADERS = ["name"]

OPTIONAL_CSV_HEADERS = [
    "premium",
    "tiv",
    "rate",
    "carrier_tax_pct",
    "carrier_fee",
    "commission_pct",
    "effective_date",
    "expiration_date",
    "endorsement_date",
    "down_payment_pct",
    "down_payment_amount",
]

COVERAGE_CSV_HEADERS = REQUIRED_CSV_HEADERS + OPTIONAL_CSV_HEADERS

MAX_ERROR_MESSAGES = 10


@dataclass
class CsvImportResult:
    """Result summary for CSV imports."""

    lines: list[CoverageLine] = field(default_factory=list)
    failed_count: int = 0
    error_messages: list[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.lines)


class CsvImportService:
    """Reads coverage lines from a CSV worksheet."""

    @staticmethod
    def _validate_headers(fieldnames: list[str] | None, required: list[str]) -> None:
        if fieldnames is None:
            raise ValueError("CSV file has no header row.")
        missing = [header for header in required if header not in fieldnames]
        if missing:
            raise ValueError(f"Missing CSV headers: {', '.join(missing)}")

    @staticmethod
    def _row_to_line(row: dict[str, str | None]) -> CoverageLine:
        values = {header: (row.get(header) or "").strip() for header in OPTIONAL_CSV_HEADERS}
        return CoverageLine(name=validate_required_text(row.get("name") or "", "name"), **values)

    def import_lines(self, file_path: str) -> CsvImportResult:
        """Import coverage lines and return them with failure counts."""
        result = CsvImportResult()

        with open(file_path, "r", encoding="utf-8-sig", newline="") as csv_file:
            reader = csv.DictReader(csv_file)
            self._validate_headers(reader.fieldnames, REQUIRED_CSV_HEADERS)

            for row_index, row in enumerate(reader, start=2):
                try:
                    result.lines.append(self._row_to_line(row))
                except (ValueError, KeyError, TypeError) as error:
                    result.failed_count += 1
                    if len(result.error_messages) < MAX_ERROR_MESSAGES:
                        result.error_messages.append(f"Row {row_index}: {error}")

        logger.info(
            "Imported %d coverage lines from %s (%d failed)",
            result.created_count,
            file_path,
            result.failed_count,
        )
        return result
