"""
Judgment Recalculation Module

Turns one set of judgment inputs into the full statement of what is owed:
prejudgment interest on the pecuniary award, the judgment total, postjudgment
interest from the latest judgment date, payments, and the per diem going
forward. `recalculate` is pure and is called again on every input change.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

from .allocation import PaymentAllocator
from .calculator import InterestPeriodCalculator
from .dates import format_date, to_date_or_none
from .events import (
    Payment, PrincipalEvent, SkippedEvent, SpecialDamage, event_sort_key, normalize_events
)
from .money import ZERO, to_decimal
from .per_diem import PerDiemCalculator
from .rates import InterestMode, RateSheet
from .segments import CalculationResult

logger = logging.getLogger(__name__)

MISSING_DATES_MESSAGE = "One or more required dates are missing or invalid."
PREJUDGMENT_RANGE_MESSAGE = "The prejudgment interest start date is after the date of judgment."


@dataclass
class JudgmentInputs:
    """Everything the user enters for one judgment"""
    jurisdiction: str = "BC"
    judgment_awarded: Decimal = ZERO            # Pecuniary damages
    non_pecuniary_awarded: Decimal = ZERO
    costs_awarded: Decimal = ZERO
    prejudgment_start_date: Optional[date] = None
    date_of_judgment: Optional[date] = None
    non_pecuniary_judgment_date: Optional[date] = None   # Defaults to date_of_judgment
    costs_awarded_date: Optional[date] = None            # Defaults to date_of_judgment
    postjudgment_end_date: Optional[date] = None
    show_prejudgment: bool = True
    show_postjudgment: bool = True
    user_entered_prejudgment_interest: Decimal = ZERO    # Used when prejudgment is hidden
    special_damages: List[Any] = field(default_factory=list)
    payments: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'JudgmentInputs':
        """Build inputs from plain data; unparseable dates become None"""
        def amount(name: str) -> Decimal:
            value = data.get(name)
            if value is None or value == "":
                return ZERO
            return to_decimal(value)

        return cls(
            jurisdiction=data.get("jurisdiction") or "BC",
            judgment_awarded=amount("judgment_awarded"),
            non_pecuniary_awarded=amount("non_pecuniary_awarded"),
            costs_awarded=amount("costs_awarded"),
            prejudgment_start_date=to_date_or_none(data.get("prejudgment_start_date")),
            date_of_judgment=to_date_or_none(data.get("date_of_judgment")),
            non_pecuniary_judgment_date=to_date_or_none(data.get("non_pecuniary_judgment_date")),
            costs_awarded_date=to_date_or_none(data.get("costs_awarded_date")),
            postjudgment_end_date=to_date_or_none(data.get("postjudgment_end_date")),
            show_prejudgment=bool(data.get("show_prejudgment", True)),
            show_postjudgment=bool(data.get("show_postjudgment", True)),
            user_entered_prejudgment_interest=amount("user_entered_prejudgment_interest"),
            special_damages=list(data.get("special_damages") or []),
            payments=list(data.get("payments") or []),
        )

    @property
    def base_award_total(self) -> Decimal:
        return self.judgment_awarded + self.non_pecuniary_awarded + self.costs_awarded

    @property
    def latest_judgment_date(self) -> Optional[date]:
        """Postjudgment interest runs from the last of the three award dates"""
        if self.date_of_judgment is None:
            return None
        candidates = [
            self.date_of_judgment,
            self.non_pecuniary_judgment_date or self.date_of_judgment,
            self.costs_awarded_date or self.date_of_judgment,
        ]
        return max(candidates)

    def missing_dates(self) -> List[str]:
        """Names of required dates that are absent for the sections shown"""
        missing = []
        if self.date_of_judgment is None:
            missing.append("date_of_judgment")
        if self.show_prejudgment and self.prejudgment_start_date is None:
            missing.append("prejudgment_start_date")
        if self.show_postjudgment and self.postjudgment_end_date is None:
            missing.append("postjudgment_end_date")
        return missing


@dataclass
class JudgmentSummary:
    """Statement of the judgment debt as of the final calculation date"""
    jurisdiction: str
    prejudgment: Optional[CalculationResult] = None
    postjudgment: Optional[CalculationResult] = None
    special_damages_total: Decimal = ZERO
    prejudgment_interest: Decimal = ZERO
    judgment_total: Decimal = ZERO
    postjudgment_interest: Decimal = ZERO
    payments_total: Decimal = ZERO
    total_owing: Decimal = ZERO
    outstanding_principal: Decimal = ZERO
    per_diem: Decimal = ZERO
    final_calculation_date: Optional[date] = None
    rates_unavailable: bool = False
    validation_error: bool = False
    validation_message: str = ""
    skipped_events: List[SkippedEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jurisdiction": self.jurisdiction,
            "prejudgment": self.prejudgment.to_dict() if self.prejudgment else None,
            "postjudgment": self.postjudgment.to_dict() if self.postjudgment else None,
            "special_damages_total": str(self.special_damages_total),
            "prejudgment_interest": str(self.prejudgment_interest),
            "judgment_total": str(self.judgment_total),
            "postjudgment_interest": str(self.postjudgment_interest),
            "payments_total": str(self.payments_total),
            "total_owing": str(self.total_owing),
            "outstanding_principal": str(self.outstanding_principal),
            "per_diem": str(self.per_diem),
            "final_calculation_date": format_date(self.final_calculation_date),
            "rates_unavailable": self.rates_unavailable,
            "validation_error": self.validation_error,
            "validation_message": self.validation_message,
            "skipped_events": [skipped.to_dict() for skipped in self.skipped_events],
        }


def _invalid_summary(inputs: JudgmentInputs, message: str, rates_unavailable: bool = False) -> JudgmentSummary:
    """Base award total only, as shown while inputs are incomplete"""
    base_total = inputs.base_award_total
    return JudgmentSummary(
        jurisdiction=inputs.jurisdiction,
        judgment_total=base_total,
        total_owing=base_total,
        outstanding_principal=base_total,
        final_calculation_date=inputs.postjudgment_end_date or inputs.date_of_judgment,
        rates_unavailable=rates_unavailable,
        validation_error=True,
        validation_message=message
    )


def _settle_without_accrual(
    allocator: PaymentAllocator,
    events: List[PrincipalEvent],
    principal: Decimal,
    unpaid_interest: Decimal,
    payments_first: bool = True
) -> Tuple[Decimal, Decimal]:
    """Apply events to a balance that earns no interest between them"""
    for event in sorted(events, key=lambda e: event_sort_key(e, payments_first)):
        if isinstance(event, SpecialDamage):
            principal += event.amount
            continue
        allocation = allocator.allocate(unpaid_interest, principal, event.amount)
        principal = allocation.remaining_principal
        unpaid_interest -= allocation.interest_applied
    return principal, unpaid_interest


def recalculate(
    inputs: JudgmentInputs,
    rate_sheet: RateSheet,
    end_date_accrues: bool = False,
    payments_before_damages: bool = True
) -> JudgmentSummary:
    """
    Recalculate the whole judgment from its inputs

    Args:
        inputs: Awards, dates, special damages and payments
        rate_sheet: Published rate tables by jurisdiction
        end_date_accrues: Whether each period's end date itself earns interest
        payments_before_damages: Same-day ordering of payments and special damages

    Returns:
        JudgmentSummary; incomplete inputs and missing rates are reported
        through its validation_error and rates_unavailable flags
    """
    missing = inputs.missing_dates()
    if missing:
        logger.debug(f"Judgment inputs incomplete: {', '.join(missing)}")
        return _invalid_summary(inputs, MISSING_DATES_MESSAGE)

    if inputs.show_prejudgment and inputs.prejudgment_start_date > inputs.date_of_judgment:
        return _invalid_summary(inputs, PREJUDGMENT_RANGE_MESSAGE)

    table = rate_sheet.table_for(inputs.jurisdiction)
    if table is None:
        return _invalid_summary(
            inputs,
            f"Interest rates are not available for the selected jurisdiction: {inputs.jurisdiction}.",
            rates_unavailable=True
        )

    events, skipped = normalize_events(
        special_damages=inputs.special_damages, payments=inputs.payments
    )
    damages = [event for event in events if isinstance(event, SpecialDamage)]
    payments = [event for event in events if isinstance(event, Payment)]
    special_damages_total = sum((damage.amount for damage in damages), ZERO)

    allocator = PaymentAllocator()
    calculator = InterestPeriodCalculator(
        table,
        end_date_accrues=end_date_accrues,
        payments_before_damages=payments_before_damages,
        allocator=allocator
    )
    judgment_date = inputs.date_of_judgment
    applied_payments: List[Payment] = []

    # Prejudgment: pecuniary damages from the start date to the date of judgment
    prejudgment_result = None
    if inputs.show_prejudgment:
        start = inputs.prejudgment_start_date
        opening_damages = [d for d in damages if d.date <= start]
        opening_payments = [p for p in payments if p.date <= start]
        opening_principal = (
            inputs.judgment_awarded
            + sum((d.amount for d in opening_damages), ZERO)
            - sum((p.amount for p in opening_payments), ZERO)
        )
        window_events = [
            event for event in events if start < event.date <= judgment_date
        ]

        prejudgment_result = calculator.compute(
            InterestMode.PREJUDGMENT, start, judgment_date, opening_principal,
            events=window_events
        )
        skipped.extend(prejudgment_result.skipped_events)
        applied_payments.extend(opening_payments)
        applied_payments.extend(p for p in payments if start < p.date <= judgment_date)

        prejudgment_interest = prejudgment_result.total
        if prejudgment_result.rate_segments:
            principal = prejudgment_result.principal
            unpaid_interest = prejudgment_result.unpaid_interest
        else:
            principal, unpaid_interest = _settle_without_accrual(
                allocator, window_events, opening_principal, ZERO, payments_before_damages
            )
        late_damages = [d for d in damages if d.date > judgment_date]
    else:
        prejudgment_interest = inputs.user_entered_prejudgment_interest
        early_payments = [p for p in payments if p.date <= judgment_date]
        principal, unpaid_interest = _settle_without_accrual(
            allocator, early_payments,
            inputs.judgment_awarded + special_damages_total,
            prejudgment_interest
        )
        applied_payments.extend(early_payments)
        late_damages = []

    judgment_total = (
        inputs.judgment_awarded
        + prejudgment_interest
        + inputs.non_pecuniary_awarded
        + inputs.costs_awarded
        + special_damages_total
    )

    # Postjudgment principal never includes prejudgment interest
    principal += (
        inputs.non_pecuniary_awarded
        + inputs.costs_awarded
        + sum((d.amount for d in late_damages), ZERO)
    )

    postjudgment_start = inputs.latest_judgment_date
    final_date = postjudgment_start
    postjudgment_result = None
    end = inputs.postjudgment_end_date

    if inputs.show_postjudgment and end is not None and end >= postjudgment_start:
        final_date = end
        bridging = [p for p in payments if judgment_date < p.date <= postjudgment_start]
        principal, unpaid_interest = _settle_without_accrual(
            allocator, bridging, principal, unpaid_interest
        )
        applied_payments.extend(bridging)

        window_payments = [p for p in payments if postjudgment_start < p.date <= end]
        postjudgment_result = calculator.compute(
            InterestMode.POSTJUDGMENT, postjudgment_start, end, principal,
            events=window_payments,
            opening_unpaid_interest=unpaid_interest
        )
        applied_payments.extend(window_payments)
        if postjudgment_result.rate_segments:
            principal = postjudgment_result.principal
            unpaid_interest = postjudgment_result.unpaid_interest
        else:
            # Nothing accrued (e.g. no principal left): payments still reduce the balance
            principal, unpaid_interest = _settle_without_accrual(
                allocator, window_payments, principal, unpaid_interest
            )

    postjudgment_interest = postjudgment_result.total if postjudgment_result else ZERO
    payments_total = sum((p.amount for p in applied_payments), ZERO)

    rates_unavailable = any(
        result is not None and result.rates_unavailable
        for result in (prejudgment_result, postjudgment_result)
    )

    summary = JudgmentSummary(
        jurisdiction=inputs.jurisdiction,
        prejudgment=prejudgment_result,
        postjudgment=postjudgment_result,
        special_damages_total=special_damages_total,
        prejudgment_interest=prejudgment_interest,
        judgment_total=judgment_total,
        postjudgment_interest=postjudgment_interest,
        payments_total=payments_total,
        total_owing=judgment_total + postjudgment_interest - payments_total,
        outstanding_principal=principal,
        per_diem=PerDiemCalculator(table).per_diem(
            principal, final_date, use_postjudgment_rate=inputs.show_postjudgment
        ),
        final_calculation_date=final_date,
        rates_unavailable=rates_unavailable,
        skipped_events=skipped
    )
    if rates_unavailable:
        summary.validation_message = (
            f"Interest rates for {inputs.jurisdiction} do not cover the dates entered."
        )

    logger.info(
        f"Recalculated {inputs.jurisdiction} judgment: total owing {summary.total_owing}"
    )
    return summary
