"""Tests for form convenience helpers."""

from decimal import Decimal

import pytest

from prorate_app.models.coverage import CoverageLine
from prorate_app.services.form_helpers import (
    apply_dates_to_all,
    auto_expiration,
    format_dollar,
    format_field,
    format_percent,
)


def test_auto_expiration_one_year_ahead() -> None:
    assert auto_expiration("2025-03-15") == "2026-03-15"
    assert auto_expiration("03/15/2025") == "2026-03-15"
    assert auto_expiration("2024-02-29") == "2025-02-28"


def test_auto_expiration_ignores_bad_input() -> None:
    assert auto_expiration("") == ""
    assert auto_expiration("soon") == ""


def test_apply_dates_to_all_copies_first_line() -> None:
    lines = [
        CoverageLine(name="Auto", effective_date="2025-01-01", endorsement_date="2025-06-01"),
        CoverageLine(name="GL", effective_date="2025-02-01"),
        CoverageLine(name="Property"),
    ]

    updated = apply_dates_to_all(lines, "effective")

    assert [line.effective_date for line in updated] == ["2025-01-01"] * 3
    assert updated[1].name == "GL"
    assert updated[2].endorsement_date == ""
    assert lines[1].effective_date == "2025-02-01"


def test_apply_dates_to_all_skips_blank_source() -> None:
    lines = [CoverageLine(name="Auto"), CoverageLine(name="GL", expiration_date="2026-01-01")]

    assert apply_dates_to_all(lines, "expiration") == lines
    assert apply_dates_to_all([], "expiration") == []


def test_apply_dates_to_all_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        apply_dates_to_all([CoverageLine(name="Auto")], "renewal")


def test_formatting() -> None:
    assert format_dollar(Decimal("1234.5")) == "$1,234.50"
    assert format_dollar(Decimal("0")) == "$0.00"
    assert format_percent(Decimal("5")) == "5.00%"
    assert format_percent(Decimal("0.5"), 4) == "0.5000%"


def test_format_field_normalizes_money_and_percent_cells() -> None:
    assert format_field("premium", "1200.5") == "$1,200.50"
    assert format_field("carrier_fee", "-25") == "$25.00"
    assert format_field("tiv", "1" + "0" * 27) == "$1,000,000,000.00"
    assert format_field("carrier_tax_pct", "5") == "5.00%"
    assert format_field("commission_pct", "150") == "100.00%"
    assert format_field("rate", "0.125") == "0.1250%"


def test_format_field_leaves_other_cells_alone() -> None:
    assert format_field("premium", "") == ""
    assert format_field("name", "Auto Liability") == "Auto Liability"
    assert format_field("effective_date", "2025-01-01") == "2025-01-01"


def test_format_field_is_stable_on_formatted_text() -> None:
    assert format_field("premium", "$1,200.50") == "$1,200.50"
    assert format_field("down_payment_pct", "25.00%") == "25.00%"
