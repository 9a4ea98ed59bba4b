"""Coverage line domain models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

STATUS_OK = "ok"
STATUS_NOT_WRITTEN = "not_written"
STATUS_INCOMPLETE = "incomplete"
STATUS_INVALID_DATES = "invalid_dates"

INVALID_DATES_ANNOTATION = "Invalid dates!"


@dataclass(frozen=True)
class CoverageLine:
    """Input model for one coverage row, values as entered in the form."""

    name: str
    premium: str | Decimal | float | int | None = None
    tiv: str | Decimal | float | int | None = None
    rate: str | Decimal | float | int | None = None
    carrier_tax_pct: str | Decimal | float | int | None = None
    carrier_fee: str | Decimal | float | int | None = None
    commission_pct: str | Decimal | float | int | None = None
    effective_date: str = ""
    expiration_date: str = ""
    endorsement_date: str = ""
    down_payment_pct: str | Decimal | float | int | None = None
    down_payment_amount: str | Decimal | float | int | None = None


@dataclass
class LineResult:
    """Output model for one coverage row."""

    name: str
    status: str
    annotation: str = ""
    premium: Decimal = Decimal("0")
    total_days: int = 0
    remaining_days: int = 0
    prorated_premium: Decimal = Decimal("0")
    prorated_tax: Decimal = Decimal("0")
    carrier_fee: Decimal = Decimal("0")
    final_amount: Decimal = Decimal("0")
    commission_pct: Decimal = Decimal("0")
    commission: Decimal = Decimal("0")
    allocated_broker_fee: Decimal = Decimal("0")
    down_payment_pct: Decimal = Decimal("0")
    down_payment: Decimal = Decimal("0")

    @property
    def is_written(self) -> bool:
        return self.status == STATUS_OK
