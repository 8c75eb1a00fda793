"""
Interest Rows Module

The rows of an interest schedule form a tagged union discriminated by RowKind:
rate segments carry the interest, while special damage and payment markers
record principal changes for display and contribute no interest of their own.
Every row exposes `kind`, `date` and `interest`.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from .dates import format_date
from .events import SkippedEvent
from .money import ZERO
from .rates import InterestMode


class RowKind(Enum):
    """Discriminator for interest schedule rows"""
    RATE_SEGMENT = "rate_segment"
    SPECIAL_DAMAGE = "special_damage"
    PAYMENT = "payment"
    FINAL_PERIOD_DAMAGE = "final_period_damage"


@dataclass(frozen=True)
class RateSegment:
    """Contiguous days sharing one rate and one principal"""
    start_date: date
    end_date: date              # Inclusive
    rate: Decimal               # Percent
    principal: Decimal          # Balance during the segment
    days: int
    interest: Decimal

    kind: ClassVar[RowKind] = RowKind.RATE_SEGMENT

    @property
    def description(self) -> str:
        return f"{self.days} days"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "start_date": format_date(self.start_date),
            "end_date": format_date(self.end_date),
            "description": self.description,
            "rate": str(self.rate),
            "principal": str(self.principal),
            "days": self.days,
            "interest": str(self.interest),
        }

    @property
    def date(self):
        return self.start_date


@dataclass(frozen=True)
class SpecialDamageMarker:
    """Special damage added to principal; a display row with no day span"""
    date: date
    description: str
    amount: Decimal
    principal_after: Decimal

    kind: ClassVar[RowKind] = RowKind.SPECIAL_DAMAGE

    @property
    def interest(self) -> Decimal:
        return ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "date": format_date(self.date),
            "description": self.description,
            "amount": str(self.amount),
            "principal_after": str(self.principal_after),
            "interest": str(self.interest),
        }


@dataclass(frozen=True)
class PaymentMarker:
    """Payment split between outstanding interest and principal"""
    date: date
    amount: Decimal
    interest_applied: Decimal
    principal_applied: Decimal
    remaining_principal: Decimal    # Negative means a credit balance
    unpaid_interest: Decimal        # Interest still outstanding after the payment

    kind: ClassVar[RowKind] = RowKind.PAYMENT

    @property
    def interest(self) -> Decimal:
        return ZERO

    @property
    def description(self) -> str:
        return f"Payment received: {self.amount}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "date": format_date(self.date),
            "description": self.description,
            "amount": str(self.amount),
            "interest_applied": str(self.interest_applied),
            "principal_applied": str(self.principal_applied),
            "remaining_principal": str(self.remaining_principal),
            "unpaid_interest": str(self.unpaid_interest),
            "interest": str(self.interest),
        }


@dataclass(frozen=True)
class FinalPeriodDamage:
    """
    Interest attributable to one special damage inside the last rate span

    Bookkeeping for display only: the same interest is already part of the
    stepped-principal rate segments and is never added to the total again.
    """
    date: date
    end_date: date
    description: str
    amount: Decimal
    rate: Decimal
    days: int
    interest: Decimal

    kind: ClassVar[RowKind] = RowKind.FINAL_PERIOD_DAMAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "date": format_date(self.date),
            "end_date": format_date(self.end_date),
            "description": f"{self.description} ({self.days} days)",
            "principal": str(self.amount),
            "rate": str(self.rate),
            "days": self.days,
            "interest": str(self.interest),
        }


Row = Union[RateSegment, SpecialDamageMarker, PaymentMarker]


@dataclass
class CalculationResult:
    """Outcome of one prejudgment or postjudgment calculation"""
    mode: InterestMode
    start_date: Optional[date]
    end_date: Optional[date]
    details: List[Row] = field(default_factory=list)
    total: Decimal = ZERO
    principal: Decimal = ZERO
    final_period_damage_interest_details: List[FinalPeriodDamage] = field(default_factory=list)
    unpaid_interest: Decimal = ZERO
    rates_unavailable: bool = False
    skipped_events: List[SkippedEvent] = field(default_factory=list)

    @classmethod
    def empty(
        cls,
        mode: InterestMode,
        start_date: Optional[date],
        end_date: Optional[date],
        principal: Decimal,
        rates_unavailable: bool = False,
        skipped_events: Optional[List[SkippedEvent]] = None
    ) -> 'CalculationResult':
        """Zero-total result for invalid ranges and missing rate data"""
        return cls(
            mode=mode,
            start_date=start_date,
            end_date=end_date,
            principal=principal,
            rates_unavailable=rates_unavailable,
            skipped_events=list(skipped_events or [])
        )

    @property
    def rate_segments(self) -> List[RateSegment]:
        return [row for row in self.details if row.kind == RowKind.RATE_SEGMENT]

    @property
    def payments(self) -> List[PaymentMarker]:
        return [row for row in self.details if row.kind == RowKind.PAYMENT]

    @property
    def special_damages(self) -> List[SpecialDamageMarker]:
        return [row for row in self.details if row.kind == RowKind.SPECIAL_DAMAGE]

    @property
    def total_days(self) -> int:
        return sum(segment.days for segment in self.rate_segments)

    @property
    def interest_paid(self) -> Decimal:
        return sum((payment.interest_applied for payment in self.payments), ZERO)

    def to_dict(self) -> Dict[str, Any]:
        """Display shape: ISO date strings, decimals as strings"""
        return {
            "mode": self.mode.value,
            "start_date": format_date(self.start_date),
            "end_date": format_date(self.end_date),
            "details": [row.to_dict() for row in self.details],
            "total": str(self.total),
            "principal": str(self.principal),
            "final_period_damage_interest_details": [
                row.to_dict() for row in self.final_period_damage_interest_details
            ],
            "unpaid_interest": str(self.unpaid_interest),
            "rates_unavailable": self.rates_unavailable,
            "skipped_events": [skipped.to_dict() for skipped in self.skipped_events],
        }
