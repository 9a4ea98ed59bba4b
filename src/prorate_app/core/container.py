"""Application dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from prorate_app.core.config import AppConfig, load_config
from prorate_app.core.logging_setup import configure_logging
from prorate_app.services.calculator_service import ProrationService
from prorate_app.services.csv_import_service import CsvImportService


@dataclass
class ServiceContainer:
    """Wires configuration and services."""

    config: AppConfig
    proration_service: ProrationService
    csv_import_service: CsvImportService


def build_container(config_path: Path | None = None) -> ServiceContainer:
    """Load configuration, set up logging and build services."""
    config = load_config(config_path)
    configure_logging(config)

    return ServiceContainer(
        config=config,
        proration_service=ProrationService(config),
        csv_import_service=CsvImportService(),
    )
