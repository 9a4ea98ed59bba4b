"""Proration and fee-allocation arithmetic.

Every function here is pure and works on ``Decimal`` values. Amounts that a
user sees are rounded to cents with ``ROUND_HALF_UP`` at fixed points:

    prorated = round(premium × remaining_days / total_days)
    tax      = round(prorated × tax_pct / 100)
    final    = prorated + tax + carrier_fee

Tax applies to the prorated premium only; the carrier fee is added after it
and is never taxed.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
SECONDS_PER_DAY = 86400


def to_cents(value: Decimal) -> Decimal:
    """Round a dollar amount to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_premium(tiv: Decimal, rate: Decimal, premium: Decimal) -> Decimal:
    """Return TIV × rate% when a TIV and rate are supplied, else the premium."""
    if tiv > ZERO and rate > ZERO:
        return tiv * rate / HUNDRED
    return premium


def day_span(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, rounded up."""
    seconds = (end - start).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def prorate_premium(premium: Decimal, remaining_days: int, total_days: int) -> Decimal:
    """Scale a full-term premium to the unexpired portion of the term."""
    if total_days <= 0:
        raise ValueError("Policy term must be at least one day.")
    return to_cents(premium * Decimal(remaining_days) / Decimal(total_days))


def percent_of(base: Decimal, pct: Decimal) -> Decimal:
    return to_cents(base * pct / HUNDRED)


def compose_line_amount(prorated_premium: Decimal, tax_pct: Decimal, carrier_fee: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(prorated_tax, final_amount)`` for one coverage line."""
    prorated_tax = percent_of(prorated_premium, tax_pct)
    return prorated_tax, prorated_premium + prorated_tax + carrier_fee


def commission_amount(premium: Decimal, commission_pct: Decimal) -> Decimal:
    """Commission dollars on the full-term premium."""
    return percent_of(premium, commission_pct)


def earned_broker_fee(total_broker_fee: Decimal, financed_broker_fee: Decimal) -> Decimal:
    """Portion of the broker fee collected up front, floored at zero."""
    earned = total_broker_fee - financed_broker_fee
    return earned if earned > ZERO else ZERO


def allocate_broker_fee(final_amounts: list[Decimal], earned_fee: Decimal) -> list[Decimal]:
    """Split ``earned_fee`` across lines in proportion to their final amounts.

    Largest-remainder split: every share is first rounded down to cents, then
    the leftover cents go one each to the lines with the largest dropped
    fractions (earlier lines win ties). Shares are never negative and always
    add up to ``earned_fee``. Returns all zeros when the coverage sum is not
    positive.
    """
    coverage_sum = sum(final_amounts, ZERO)
    if coverage_sum <= ZERO or not final_amounts:
        return [ZERO for _ in final_amounts]

    earned_fee = to_cents(earned_fee)
    exact = [amount / coverage_sum * earned_fee for amount in final_amounts]
    shares = [value.quantize(CENT, rounding=ROUND_DOWN) for value in exact]
    leftover_cents = int((earned_fee - sum(shares, ZERO)) / CENT)
    by_remainder = sorted(
        range(len(exact)),
        key=lambda index: exact[index] - shares[index],
        reverse=True,
    )
    for index in by_remainder[:leftover_cents]:
        shares[index] += CENT
    return shares


def pct_to_dollar(base: Decimal, pct: Decimal) -> Decimal:
    """Dollar value of ``pct`` percent of ``base``."""
    return to_cents(base * pct / HUNDRED)


def dollar_to_pct(base: Decimal, dollar: Decimal) -> Decimal:
    """Percentage of ``base`` that ``dollar`` represents, zero for an empty base."""
    if base <= ZERO:
        return ZERO
    return to_cents(dollar / base * HUNDRED)


def financed_amount(coverage_sum: Decimal, total_down_payment: Decimal, financed_broker_fee: Decimal) -> Decimal:
    """Balance left to finance after the down payment."""
    if total_down_payment >= coverage_sum:
        return ZERO
    financed = (coverage_sum - total_down_payment) + financed_broker_fee
    return financed if financed > ZERO else ZERO


def monthly_payment(principal: Decimal, apr: Decimal, payments: int) -> Decimal:
    """Fixed installment that amortizes ``principal`` over ``payments`` months."""
    if payments <= 0:
        raise ValueError("Number of payments must be positive.")
    if principal <= ZERO:
        return ZERO
    monthly_rate = apr / HUNDRED / MONTHS_PER_YEAR
    discount = Decimal(1) - (Decimal(1) + monthly_rate) ** -payments
    # A rate too small to register at working precision leaves nothing to discount.
    if apr == ZERO or discount == ZERO:
        return to_cents(principal / Decimal(payments))
    return to_cents(monthly_rate * principal / discount)


def default_expiration(effective: date) -> date:
    """One calendar year after ``effective``; Feb 29 rolls back to Feb 28."""
    year = effective.year + 1
    day = min(effective.day, calendar.monthrange(year, effective.month)[1])
    return effective.replace(year=year, day=day)
