"""Helpers behind form conveniences: auto-filled dates and display formatting."""

from __future__ import annotations

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from prorate_app.core.config import DEFAULT_DATE_FORMATS
from prorate_app.core.validation import cap_dollars, clamp_percent, is_blank, parse_date, sanitize_number
from prorate_app.models.coverage import CoverageLine
from prorate_app.services.proration import default_expiration, to_cents

DATE_FIELDS = {
    "effective": "effective_date",
    "expiration": "expiration_date",
    "endorsement": "endorsement_date",
}
DOLLAR_FIELDS = {"premium", "tiv", "carrier_fee", "down_payment_amount"}
PERCENT_FIELDS = {"carrier_tax_pct", "commission_pct", "down_payment_pct"}
RATE_PLACES = 4


def auto_expiration(effective_raw: str, formats: tuple[str, ...] = DEFAULT_DATE_FORMATS) -> str:
    """Return the ISO expiration date one year after ``effective_raw``.

    Returns an empty string when the effective date does not parse, so the
    caller can leave the expiration field alone.
    """
    try:
        effective = parse_date(effective_raw, formats).date()
    except ValueError:
        return ""
    return default_expiration(effective).isoformat()


def apply_dates_to_all(lines: list[CoverageLine], date_type: str) -> list[CoverageLine]:
    """Copy the first line's date of ``date_type`` onto every other line."""
    if date_type not in DATE_FIELDS:
        raise ValueError(f"Unknown date type: {date_type}")
    if not lines:
        return []

    attribute = DATE_FIELDS[date_type]
    source = getattr(lines[0], attribute)
    if not str(source).strip():
        return list(lines)
    return [lines[0]] + [replace(line, **{attribute: source}) for line in lines[1:]]


def format_dollar(value: Decimal) -> str:
    return f"${to_cents(value):,.2f}"


def format_percent(value: Decimal, places: int = 2) -> str:
    step = Decimal(1).scaleb(-places)
    return f"{value.quantize(step, rounding=ROUND_HALF_UP):.{places}f}%"


def format_field(field: str, raw: str) -> str:
    """Normalize an edited table cell the way the form displays it.

    Dollar fields are floored at zero and capped, percentages are clamped to
    [0, 100], and the rate keeps four decimal places. Blank cells and other
    fields come back unchanged.
    """
    if is_blank(raw):
        return raw
    if field in DOLLAR_FIELDS:
        value, _ = cap_dollars(sanitize_number(raw))
        return format_dollar(value)
    if field in PERCENT_FIELDS or field == "rate":
        value, _ = clamp_percent(sanitize_number(raw))
        return format_percent(value, RATE_PLACES if field == "rate" else 2)
    return raw
