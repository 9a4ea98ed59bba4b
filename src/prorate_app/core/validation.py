"""Input sanitizing and validation rules for calculator fields."""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from prorate_app.core.config import DEFAULT_DATE_FORMATS

NON_NUMERIC_PATTERN = re.compile(r"[^\d.]")

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MAX_DOLLAR_AMOUNT = Decimal("1000000000")


def sanitize_number(raw: str | Decimal | float | int | None) -> Decimal:
    """Parse a form value into a Decimal, treating garbage as zero.

    Strings are stripped of everything but digits and the first decimal
    point, so ``"$1,200.50"`` reads as ``1200.50`` and ``"abc"`` as ``0``.
    Numeric values pass through unchanged.
    """
    if raw is None:
        return ZERO
    if isinstance(raw, bool):
        return Decimal(int(raw))
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else ZERO
    if isinstance(raw, (int, float)):
        value = Decimal(str(raw))
        return value if value.is_finite() else ZERO

    cleaned = NON_NUMERIC_PATTERN.sub("", str(raw))
    if "." in cleaned:
        head, _, tail = cleaned.partition(".")
        cleaned = f"{head}.{tail.replace('.', '')}"
    if cleaned in {"", "."}:
        return ZERO
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return ZERO


def non_negative(value: Decimal) -> Decimal:
    """Floor a dollar amount at zero."""
    return value if value > ZERO else ZERO


def cap_dollars(value: Decimal) -> tuple[Decimal, bool]:
    """Floor a dollar amount at zero and cap it at $1,000,000,000."""
    value = non_negative(value)
    if value > MAX_DOLLAR_AMOUNT:
        return MAX_DOLLAR_AMOUNT, True
    return value, False


def clamp_percent(value: Decimal) -> tuple[Decimal, bool]:
    """Clamp a percentage to [0, 100] and report whether it changed."""
    if value < ZERO:
        return ZERO, True
    if value > HUNDRED:
        return HUNDRED, True
    return value, False


def clamp_payments(value: int, min_payments: int = 1, max_payments: int = 10) -> tuple[int, bool]:
    """Clamp a number of payments to the configured range."""
    if value < min_payments:
        return min_payments, True
    if value > max_payments:
        return max_payments, True
    return value, False


def parse_payment_count(raw: str | int | None, default: int) -> int:
    """Read a number of payments, falling back to ``default`` when blank."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    return int(sanitize_number(raw))


def is_blank(raw: str | None) -> bool:
    return raw is None or not str(raw).strip()


def parse_date(raw: str, formats: tuple[str, ...] = DEFAULT_DATE_FORMATS) -> datetime:
    """Parse a date field using the first matching format."""
    text = str(raw).strip()
    if not text:
        raise ValueError("Date is required.")
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {text}")


def validate_broker_fees(total_broker_fee: Decimal, financed_broker_fee: Decimal) -> None:
    """Financed broker fee may not exceed the total broker fee."""
    if financed_broker_fee > total_broker_fee:
        raise ValueError("Financed broker fee cannot exceed the total broker fee.")


def validate_required_text(value: str, field_name: str) -> str:
    """Validate non-empty text fields."""
    normalized = (value or "").strip()
    if not normalized:
        raise ValueError(f"{field_name} is required.")
    return normalized
