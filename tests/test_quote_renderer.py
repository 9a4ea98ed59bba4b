"""Tests for quote rendering."""

from __future__ import annotations

from datetime import date

from prorate_app.core.config import default_config
from prorate_app.models.coverage import CoverageLine
from prorate_app.models.policy import PolicyInputs
from prorate_app.services.calculator_service import ProrationService
from prorate_app.services.quote_renderer import render_quote_html, render_quote_text


def calculate(lines, policy=None):
    return ProrationService(default_config()).calculate(lines, policy or PolicyInputs())


def sample_lines() -> list[CoverageLine]:
    return [
        CoverageLine(
            name="Auto <Fleet>",
            premium="1200",
            carrier_tax_pct="5",
            carrier_fee="25",
            effective_date="2025-01-01",
            expiration_date="2026-01-01",
            endorsement_date="2025-07-03",
        ),
        CoverageLine(name="Cargo", premium="300", effective_date="bad"),
    ]


def test_render_quote_html() -> None:
    result = calculate(sample_lines(), PolicyInputs(total_broker_fee="$1,000"))

    html = render_quote_html(result, title="Acme Trucking", quote_date=date(2025, 7, 3))

    assert "<h2>Acme Trucking</h2>" in html
    assert "Prepared 2025-07-03" in html
    assert "Auto &lt;Fleet&gt;" in html
    assert "$653.28" in html
    assert "$1,000.00" in html
    assert "Invalid dates!" in html


def test_render_quote_html_blocked() -> None:
    result = calculate(sample_lines(), PolicyInputs(payment_status=False))

    html = render_quote_html(result)

    assert "Quote unavailable" in html
    assert "Payment status must be confirmed" in html
    assert "<table" not in html


def test_render_quote_text() -> None:
    result = calculate(sample_lines(), PolicyInputs(down_payment_pct="50", apr="12", number_of_payments="1"))

    text = render_quote_text(result)

    assert "Coverage total" in text
    assert "$653.28" in text
    assert "$326.64" in text
    assert "Monthly payment (1 payments)" in text
    assert "$329.91" in text
    assert "[warning] Cargo:" in text


def test_render_quote_text_blocked() -> None:
    result = calculate(sample_lines(), PolicyInputs(total_broker_fee="10", financed_broker_fee="20"))

    assert render_quote_text(result).startswith("Quote unavailable:")
