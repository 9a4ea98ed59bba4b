"""Tests for configuration loading."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from prorate_app.core import config as app_config


def test_load_config_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "calculator.yaml"
    config_path.write_text(
        "payments:\n  min: 2\n  max: 12\n  default: 6\n"
        "down_payment:\n  default_pct: 20\n"
        "dates:\n  formats: ['%d.%m.%Y']\n"
        "logging:\n  level: debug\n",
        encoding="utf-8",
    )

    config = app_config.load_config(config_path)

    assert config.payments.min_payments == 2
    assert config.payments.max_payments == 12
    assert config.payments.default_payments == 6
    assert config.down_payment.default_pct == Decimal("20")
    assert config.dates.formats == ("%d.%m.%Y",)
    assert config.logging.level == "DEBUG"


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = app_config.load_config(tmp_path / "missing.yaml")

    assert config == app_config.default_config()
    assert config.payments.min_payments == 1
    assert config.payments.max_payments == 10
    assert config.down_payment.default_pct == Decimal("100")
    assert "%Y-%m-%d" in config.dates.formats


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "calculator.yaml"
    config_path.write_text("", encoding="utf-8")

    assert app_config.load_config(config_path) == app_config.default_config()


def test_invalid_payment_range_rejected() -> None:
    with pytest.raises(ValueError):
        app_config.parse_config({"payments": {"min": 5, "max": 2}})
    with pytest.raises(ValueError):
        app_config.parse_config({"payments": "ten"})


def test_config_path_from_environment(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "custom.yaml"
    monkeypatch.setenv("PRORATE_CONFIG_PATH", str(config_path))

    assert app_config.resolve_default_config_path() == config_path


def test_repository_config_file_loads() -> None:
    repo_config = Path(__file__).resolve().parents[1] / "config" / "calculator.yaml"

    config = app_config.load_config(repo_config)

    assert config.payments.max_payments == 10
    assert config.down_payment.default_pct == Decimal("100")
