"""Tests for proration arithmetic."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from prorate_app.services import proration


def test_resolve_premium_prefers_tiv_and_rate() -> None:
    assert proration.resolve_premium(Decimal("100000"), Decimal("0.5"), Decimal("999")) == Decimal("500")


def test_resolve_premium_falls_back_to_entered_premium() -> None:
    assert proration.resolve_premium(Decimal("0"), Decimal("0.5"), Decimal("1200")) == Decimal("1200")
    assert proration.resolve_premium(Decimal("100000"), Decimal("0"), Decimal("1200")) == Decimal("1200")


def test_day_span_rounds_partial_days_up() -> None:
    assert proration.day_span(datetime(2025, 1, 1), datetime(2026, 1, 1)) == 365
    assert proration.day_span(datetime(2025, 1, 1, 12), datetime(2025, 1, 3)) == 2
    assert proration.day_span(datetime(2025, 1, 2), datetime(2025, 1, 1)) == -1


def test_prorate_premium() -> None:
    assert proration.prorate_premium(Decimal("1200"), 182, 365) == Decimal("598.36")


def test_prorate_premium_full_term_is_unchanged() -> None:
    assert proration.prorate_premium(Decimal("1200"), 365, 365) == Decimal("1200.00")


def test_prorate_premium_rejects_empty_term() -> None:
    with pytest.raises(ValueError):
        proration.prorate_premium(Decimal("1200"), 0, 0)


def test_compose_line_amount_taxes_prorated_premium_only() -> None:
    tax, final = proration.compose_line_amount(Decimal("598.36"), Decimal("5"), Decimal("25"))
    assert tax == Decimal("29.92")
    assert final == Decimal("653.28")


def test_commission_uses_full_term_premium() -> None:
    assert proration.commission_amount(Decimal("1200"), Decimal("10")) == Decimal("120.00")


def test_earned_broker_fee_floors_at_zero() -> None:
    assert proration.earned_broker_fee(Decimal("150"), Decimal("50")) == Decimal("100")
    assert proration.earned_broker_fee(Decimal("50"), Decimal("150")) == Decimal("0")


def test_allocate_broker_fee_proportional() -> None:
    shares = proration.allocate_broker_fee([Decimal("100"), Decimal("200")], Decimal("30"))
    assert shares == [Decimal("10.00"), Decimal("20.00")]


def test_allocate_broker_fee_sums_to_earned_fee() -> None:
    shares = proration.allocate_broker_fee([Decimal("1"), Decimal("1"), Decimal("1")], Decimal("10"))
    assert shares == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
    assert sum(shares) == Decimal("10")


def test_allocate_broker_fee_never_goes_negative() -> None:
    shares = proration.allocate_broker_fee([Decimal("50"), Decimal("50"), Decimal("0")], Decimal("0.01"))
    assert shares == [Decimal("0.01"), Decimal("0.00"), Decimal("0.00")]
    assert all(share >= 0 for share in shares)


def test_allocate_broker_fee_leftover_cents_follow_largest_fractions() -> None:
    shares = proration.allocate_broker_fee([Decimal("1"), Decimal("2")], Decimal("0.10"))
    assert shares == [Decimal("0.03"), Decimal("0.07")]


def test_allocate_broker_fee_without_coverage() -> None:
    assert proration.allocate_broker_fee([], Decimal("10")) == []
    assert proration.allocate_broker_fee([Decimal("0")], Decimal("10")) == [Decimal("0")]


def test_pct_and_dollar_conversions() -> None:
    assert proration.pct_to_dollar(Decimal("653.28"), Decimal("50")) == Decimal("326.64")
    assert proration.dollar_to_pct(Decimal("500"), Decimal("100")) == Decimal("20.00")
    assert proration.dollar_to_pct(Decimal("0"), Decimal("100")) == Decimal("0")


def test_financed_amount() -> None:
    assert proration.financed_amount(Decimal("1000"), Decimal("250"), Decimal("50")) == Decimal("800")
    assert proration.financed_amount(Decimal("1000"), Decimal("1000"), Decimal("50")) == Decimal("0")
    assert proration.financed_amount(Decimal("1000"), Decimal("1200"), Decimal("0")) == Decimal("0")


def test_monthly_payment_without_interest() -> None:
    assert proration.monthly_payment(Decimal("1000"), Decimal("0"), 4) == Decimal("250.00")
    assert proration.monthly_payment(Decimal("1000"), Decimal("0"), 3) == Decimal("333.33")


def test_monthly_payment_rate_below_working_precision() -> None:
    tiny = Decimal("0.00000000000000000000000001")
    assert proration.monthly_payment(Decimal("1000"), tiny, 4) == Decimal("250.00")
    assert proration.monthly_payment(Decimal("1000"), tiny, 3) == Decimal("333.33")


def test_monthly_payment_with_interest() -> None:
    assert proration.monthly_payment(Decimal("1000"), Decimal("12"), 10) == Decimal("105.58")


def test_monthly_payment_single_payment_adds_one_month_interest() -> None:
    assert proration.monthly_payment(Decimal("1000"), Decimal("12"), 1) == Decimal("1010.00")


def test_monthly_payment_nothing_financed() -> None:
    assert proration.monthly_payment(Decimal("0"), Decimal("12"), 10) == Decimal("0")
    with pytest.raises(ValueError):
        proration.monthly_payment(Decimal("1000"), Decimal("12"), 0)


def test_default_expiration() -> None:
    assert proration.default_expiration(date(2025, 3, 15)) == date(2026, 3, 15)
    assert proration.default_expiration(date(2024, 2, 29)) == date(2025, 2, 28)
