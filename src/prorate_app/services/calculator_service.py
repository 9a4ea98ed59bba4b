"""Proration calculation service."""

from __future__ import annotations

import logging
from decimal import Decimal

from prorate_app.core.config import AppConfig
from prorate_app.core.validation import (
    cap_dollars,
    clamp_payments,
    clamp_percent,
    is_blank,
    parse_date,
    parse_payment_count,
    sanitize_number,
    validate_broker_fees,
)
from prorate_app.models.coverage import (
    INVALID_DATES_ANNOTATION,
    STATUS_INCOMPLETE,
    STATUS_INVALID_DATES,
    STATUS_NOT_WRITTEN,
    STATUS_OK,
    CoverageLine,
    LineResult,
)
from prorate_app.models.policy import (
    LEVEL_ERROR,
    LEVEL_WARNING,
    CalculationResult,
    Notice,
    PolicyInputs,
    PolicyTotals,
)
from prorate_app.services import proration

logger = logging.getLogger("prorate_app.services.calculator_service")

ZERO = Decimal("0")


class ProrationService:
    """Runs the per-line proration and policy totals pipeline."""

    def __init__(self, config: AppConfig):
        self._config = config

    def calculate(self, lines: list[CoverageLine], policy: PolicyInputs) -> CalculationResult:
        """Compute line results and policy totals.

        Never raises for bad input: problems become notices, and blocking
        problems return a result with ``blocked`` set and no totals.
        """
        notices: list[Notice] = []

        if not policy.payment_status:
            logger.warning("Calculation refused: payment status not confirmed")
            notices.append(
                Notice(LEVEL_ERROR, "payment_status", "Payment status must be confirmed before calculating.")
            )
            return CalculationResult(notices=notices, blocked=True)

        total_broker_fee = self._dollars(policy.total_broker_fee, "total_broker_fee", notices)
        financed_broker_fee = self._dollars(policy.financed_broker_fee, "financed_broker_fee", notices)
        try:
            validate_broker_fees(total_broker_fee, financed_broker_fee)
        except ValueError as error:
            logger.warning("Calculation blocked: %s", error)
            notices.append(Notice(LEVEL_ERROR, "financed_broker_fee", str(error)))
            return CalculationResult(notices=notices, blocked=True)

        results = [self._evaluate_line(line, notices) for line in lines]
        written = [result for result in results if result.is_written]
        coverage_sum = sum((result.final_amount for result in written), ZERO)

        earned = proration.earned_broker_fee(total_broker_fee, financed_broker_fee)
        shares = proration.allocate_broker_fee([result.final_amount for result in written], earned)
        for result, share in zip(written, shares):
            result.allocated_broker_fee = share

        total_down_payment = self._total_down_payment(lines, results, coverage_sum, policy, notices)
        financed = proration.financed_amount(coverage_sum, total_down_payment, financed_broker_fee)

        apr = self._percent(policy.apr, "apr", notices)
        payments = self._payments(policy.number_of_payments, notices)
        monthly = proration.monthly_payment(financed, apr, payments)

        totals = PolicyTotals(
            coverage_sum=coverage_sum,
            total_premium=sum((result.prorated_premium for result in written), ZERO),
            total_tax=sum((result.prorated_tax for result in written), ZERO),
            total_carrier_fees=sum((result.carrier_fee for result in written), ZERO),
            total_commission=sum((result.commission for result in written), ZERO),
            total_broker_fee=total_broker_fee,
            total_down_payment=total_down_payment,
            earned_broker_fee=earned,
            to_be_earned=total_broker_fee - earned,
            due_at_signing=total_down_payment + earned,
            financed_amount=financed,
            monthly_payment=monthly,
            number_of_payments=payments,
            apr=apr,
        )
        logger.info(
            "Calculated %d of %d lines: coverage=%s financed=%s monthly=%s",
            len(written),
            len(results),
            coverage_sum,
            financed,
            monthly,
        )
        return CalculationResult(lines=results, totals=totals, notices=notices)

    def _evaluate_line(self, line: CoverageLine, notices: list[Notice]) -> LineResult:
        tiv = self._dollars(line.tiv, f"{line.name}.tiv", notices)
        rate = self._percent(line.rate, f"{line.name}.rate", notices)
        entered_premium = self._dollars(line.premium, f"{line.name}.premium", notices)
        premium = proration.resolve_premium(tiv, rate, entered_premium)

        if premium <= ZERO:
            return LineResult(name=line.name, status=STATUS_NOT_WRITTEN)

        dates = (line.effective_date, line.expiration_date, line.endorsement_date)
        if all(is_blank(value) for value in dates):
            notices.append(Notice(LEVEL_WARNING, line.name, f"{line.name}: dates are required to prorate."))
            return LineResult(name=line.name, status=STATUS_INCOMPLETE, premium=premium)

        try:
            effective, expiration, endorsement = (
                parse_date(value, self._config.dates.formats) for value in dates
            )
            total_days = proration.day_span(effective, expiration)
            remaining_days = proration.day_span(endorsement, expiration)
            if total_days <= 0:
                raise ValueError("Expiration must be after the effective date.")
            if remaining_days < 0 or remaining_days > total_days:
                raise ValueError("Endorsement must fall within the policy term.")
        except ValueError as error:
            logger.debug("Skipping line %s: %s", line.name, error)
            notices.append(Notice(LEVEL_WARNING, line.name, f"{line.name}: {error}"))
            return LineResult(
                name=line.name,
                status=STATUS_INVALID_DATES,
                annotation=INVALID_DATES_ANNOTATION,
                premium=premium,
            )

        tax_pct = self._percent(line.carrier_tax_pct, f"{line.name}.carrier_tax_pct", notices)
        carrier_fee = self._dollars(line.carrier_fee, f"{line.name}.carrier_fee", notices)
        commission_pct = self._percent(line.commission_pct, f"{line.name}.commission_pct", notices)

        prorated = proration.prorate_premium(premium, remaining_days, total_days)
        prorated_tax, final_amount = proration.compose_line_amount(prorated, tax_pct, carrier_fee)

        return LineResult(
            name=line.name,
            status=STATUS_OK,
            premium=proration.to_cents(premium),
            total_days=total_days,
            remaining_days=remaining_days,
            prorated_premium=prorated,
            prorated_tax=prorated_tax,
            carrier_fee=carrier_fee,
            final_amount=final_amount,
            commission_pct=commission_pct,
            commission=proration.commission_amount(premium, commission_pct),
        )

    def _total_down_payment(
        self,
        lines: list[CoverageLine],
        results: list[LineResult],
        coverage_sum: Decimal,
        policy: PolicyInputs,
        notices: list[Notice],
    ) -> Decimal:
        pairs = [(line, result) for line, result in zip(lines, results) if result.is_written]
        per_line = any(
            sanitize_number(line.down_payment_pct) > ZERO or sanitize_number(line.down_payment_amount) > ZERO
            for line, _ in pairs
        )

        if per_line:
            total = ZERO
            for line, result in pairs:
                self._line_down_payment(line, result, notices)
                total += result.down_payment
            return total

        pct = self._percent(policy.down_payment_pct, "down_payment_pct", notices)
        if pct == ZERO:
            pct = self._config.down_payment.default_pct
        return proration.pct_to_dollar(coverage_sum, pct)

    def _line_down_payment(self, line: CoverageLine, result: LineResult, notices: list[Notice]) -> None:
        base = result.final_amount
        if sanitize_number(line.down_payment_pct) > ZERO:
            pct = self._percent(line.down_payment_pct, f"{line.name}.down_payment_pct", notices)
            result.down_payment_pct = pct
            result.down_payment = proration.pct_to_dollar(base, pct)
            return

        amount = self._dollars(line.down_payment_amount, f"{line.name}.down_payment_amount", notices)
        if amount > base:
            notices.append(
                Notice(LEVEL_WARNING, f"{line.name}.down_payment_amount", f"{line.name}: down payment capped at line total.")
            )
            amount = base
        result.down_payment = amount
        result.down_payment_pct = proration.dollar_to_pct(base, amount)

    def _dollars(self, raw, field: str, notices: list[Notice]) -> Decimal:
        value, capped = cap_dollars(sanitize_number(raw))
        if capped:
            notices.append(Notice(LEVEL_WARNING, field, f"{field} capped at $1,000,000,000.00."))
        return value

    def _percent(self, raw, field: str, notices: list[Notice]) -> Decimal:
        value, clamped = clamp_percent(sanitize_number(raw))
        if clamped:
            notices.append(Notice(LEVEL_WARNING, field, f"{field} adjusted to {value}%."))
        return value

    def _payments(self, raw, notices: list[Notice]) -> int:
        payments_config = self._config.payments
        requested = parse_payment_count(raw, payments_config.default_payments)
        payments, clamped = clamp_payments(
            requested,
            payments_config.min_payments,
            payments_config.max_payments,
        )
        if clamped:
            notices.append(
                Notice(LEVEL_WARNING, "number_of_payments", f"Number of payments adjusted to {payments}.")
            )
        return payments
