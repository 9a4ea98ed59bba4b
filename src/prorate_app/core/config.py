"""Configuration loader for calculator defaults and logging."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import yaml


@dataclass(frozen=True)
class PaymentConfig:
    min_payments: int
    max_payments: int
    default_payments: int


@dataclass(frozen=True)
class DownPaymentConfig:
    default_pct: Decimal


@dataclass(frozen=True)
class DateConfig:
    formats: tuple[str, ...]


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    format: str


@dataclass(frozen=True)
class AppConfig:
    payments: PaymentConfig
    down_payment: DownPaymentConfig
    dates: DateConfig
    logging: LoggingConfig


DEFAULT_CONFIG_REL_PATH = Path("config/calculator.yaml")
CONFIG_PATH_ENV = "PRORATE_CONFIG_PATH"

DEFAULT_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S")
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_default_config_path() -> Path:
    """Resolve configuration path for source and packaged execution."""
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    candidates: list[Path] = []

    if getattr(sys, "frozen", False):
        exe_dir = Path(sys.executable).resolve().parent
        candidates.append(exe_dir / DEFAULT_CONFIG_REL_PATH)

    candidates.append(Path.cwd() / DEFAULT_CONFIG_REL_PATH)
    candidates.append(Path(__file__).resolve().parents[3] / DEFAULT_CONFIG_REL_PATH)

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return candidates[0] if candidates else DEFAULT_CONFIG_REL_PATH


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    return value


def parse_config(raw: dict | None) -> AppConfig:
    """Build an AppConfig from a parsed YAML mapping, filling defaults."""
    raw = raw or {}
    payments = _section(raw, "payments")
    down_payment = _section(raw, "down_payment")
    dates = _section(raw, "dates")
    logging_raw = _section(raw, "logging")

    min_payments = int(payments.get("min", 1))
    max_payments = int(payments.get("max", 10))
    if min_payments < 1 or max_payments < min_payments:
        raise ValueError("payments.min must be >= 1 and <= payments.max.")

    formats = dates.get("formats") or DEFAULT_DATE_FORMATS

    return AppConfig(
        payments=PaymentConfig(
            min_payments=min_payments,
            max_payments=max_payments,
            default_payments=int(payments.get("default", max_payments)),
        ),
        down_payment=DownPaymentConfig(
            default_pct=Decimal(str(down_payment.get("default_pct", 100))),
        ),
        dates=DateConfig(formats=tuple(str(fmt) for fmt in formats)),
        logging=LoggingConfig(
            level=str(logging_raw.get("level", "INFO")).upper(),
            format=str(logging_raw.get("format", DEFAULT_LOG_FORMAT)),
        ),
    )


def default_config() -> AppConfig:
    """Return the built-in configuration."""
    return parse_config({})


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load the app configuration from YAML, or defaults when no file exists."""
    path = config_path or resolve_default_config_path()
    if not path.exists():
        return default_config()
    with path.open("r", encoding="utf-8") as file:
        raw = yaml.safe_load(file)

    return parse_config(raw)
