"""Policy-level input and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from prorate_app.models.coverage import LineResult

LEVEL_WARNING = "warning"
LEVEL_ERROR = "error"


@dataclass(frozen=True)
class PolicyInputs:
    """Policy-wide fields shared by every coverage line."""

    total_broker_fee: str | Decimal | float | int | None = None
    financed_broker_fee: str | Decimal | float | int | None = None
    down_payment_pct: str | Decimal | float | int | None = None
    apr: str | Decimal | float | int | None = None
    number_of_payments: str | int | None = None
    payment_status: bool = True


@dataclass
class PolicyTotals:
    """Aggregates across written coverage lines."""

    coverage_sum: Decimal
    total_premium: Decimal
    total_tax: Decimal
    total_carrier_fees: Decimal
    total_commission: Decimal
    total_broker_fee: Decimal
    total_down_payment: Decimal
    earned_broker_fee: Decimal
    to_be_earned: Decimal
    due_at_signing: Decimal
    financed_amount: Decimal
    monthly_payment: Decimal
    number_of_payments: int
    apr: Decimal


@dataclass(frozen=True)
class Notice:
    """User-visible message produced during a calculation."""

    level: str
    field: str
    message: str


@dataclass
class CalculationResult:
    """Everything a presentation layer needs after one calculation."""

    lines: list[LineResult] = field(default_factory=list)
    totals: PolicyTotals | None = None
    notices: list[Notice] = field(default_factory=list)
    blocked: bool = False

    @property
    def errors(self) -> list[Notice]:
        return [notice for notice in self.notices if notice.level == LEVEL_ERROR]

    @property
    def warnings(self) -> list[Notice]:
        return [notice for notice in self.notices if notice.level == LEVEL_WARNING]
