"""
Interest Segmentation Engine

Walks a date range across rate-period boundaries and principal events,
emitting one rate segment per run of days that share a single rate and a
single principal. Special damages step the principal up, payments are
allocated to the running unpaid interest first and then reduce principal.
Interest accrued in one segment never feeds the principal of the next.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
import logging

from .allocation import PaymentAllocator
from .dates import day_after, day_before, format_date, inclusive_days, simple_interest
from .events import EventKind, PrincipalEvent, event_sort_key
from .money import ZERO
from .rates import InterestMode, RatePeriodTable
from .segments import (
    FinalPeriodDamage, PaymentMarker, RateSegment, Row, SpecialDamageMarker
)

logger = logging.getLogger(__name__)


@dataclass
class SegmentationOutcome:
    """Rows and running balances produced by one walk"""
    details: List[Row] = field(default_factory=list)
    total: Decimal = ZERO
    principal: Decimal = ZERO
    unpaid_interest: Decimal = ZERO
    final_period_damages: List[FinalPeriodDamage] = field(default_factory=list)


class SegmentationEngine:
    """
    Partitions an accrual window into constant-rate, constant-principal segments
    """

    def __init__(
        self,
        rate_table: RatePeriodTable,
        mode: InterestMode,
        allocator: Optional[PaymentAllocator] = None,
        end_date_accrues: bool = False,
        payments_before_damages: bool = True
    ):
        self.rate_table = rate_table
        self.mode = mode
        self.allocator = allocator or PaymentAllocator()
        self.end_date_accrues = end_date_accrues
        self.payments_before_damages = payments_before_damages

    def last_accrual_day(self, end_date: date) -> date:
        """The end date itself, or the day before it when the end date does not accrue"""
        return end_date if self.end_date_accrues else day_before(end_date)

    def segment(
        self,
        start_date: date,
        end_date: date,
        initial_principal: Decimal,
        events: Iterable[PrincipalEvent],
        opening_unpaid_interest: Decimal = ZERO
    ) -> SegmentationOutcome:
        """
        Walk the window from start_date to the last accrual day and build the schedule

        Events dated start_date are part of initial_principal already and are
        ignored here; events dated end_date always reach the ending principal.

        Args:
            start_date: First day of accrual
            end_date: Last day of the calculation range
            initial_principal: Principal balance on start_date
            events: Special damages and payments, any order
            opening_unpaid_interest: Interest accrued before start_date and still unpaid

        Returns:
            SegmentationOutcome with rows in chronological order
        """
        last_day = self.last_accrual_day(end_date)

        applicable = sorted(
            (event for event in events if start_date < event.date <= end_date),
            key=lambda event: event_sort_key(event, self.payments_before_damages)
        )
        events_by_date: Dict[date, List[PrincipalEvent]] = defaultdict(list)
        for event in applicable:
            events_by_date[event.date].append(event)

        # A rate change on the final day does not split the final segment
        rate_changes = [
            change for change in self.rate_table.rate_changes_within(start_date, last_day)
            if change < last_day
        ]
        breakpoints = sorted(set(rate_changes) | set(events_by_date))

        outcome = SegmentationOutcome(
            principal=initial_principal,
            unpaid_interest=opening_unpaid_interest
        )
        cursor = start_date

        for boundary in breakpoints:
            span_end = min(day_before(boundary), last_day)
            if cursor <= span_end:
                self._accrue(outcome, cursor, span_end)
                cursor = day_after(span_end)

            for event in events_by_date.get(boundary, []):
                if event.kind == EventKind.PAYMENT:
                    self._apply_payment(outcome, event)
                else:
                    self._apply_special_damage(outcome, event)

        if cursor <= last_day:
            self._accrue(outcome, cursor, last_day)

        final_span_start = max([start_date] + rate_changes)
        outcome.final_period_damages = self._final_period_damages(
            applicable, final_span_start, last_day, end_date
        )

        logger.debug(
            f"{self.mode.value} schedule {format_date(start_date)} to {format_date(end_date)}: "
            f"{len(outcome.details)} rows, interest {outcome.total}"
        )
        return outcome

    def _accrue(self, outcome: SegmentationOutcome, start: date, end: date) -> None:
        """Emit one rate segment at the rate in effect on its first day"""
        rate = self.rate_table.lookup_rate(start, self.mode)
        if rate == ZERO and self.rate_table.find_period(start) is None:
            logger.warning(
                f"No {self.mode.value} rate covers {format_date(start)}; "
                f"{format_date(start)} to {format_date(end)} accrues no interest"
            )

        days = inclusive_days(start, end)
        interest = simple_interest(outcome.principal, rate, days, start.year)

        outcome.details.append(RateSegment(
            start_date=start,
            end_date=end,
            rate=rate,
            principal=outcome.principal,
            days=days,
            interest=interest
        ))
        outcome.total += interest
        outcome.unpaid_interest += interest

    def _apply_payment(self, outcome: SegmentationOutcome, payment: PrincipalEvent) -> None:
        allocation = self.allocator.allocate(
            outcome.unpaid_interest, outcome.principal, payment.amount
        )
        outcome.principal = allocation.remaining_principal
        outcome.unpaid_interest -= allocation.interest_applied

        outcome.details.append(PaymentMarker(
            date=payment.date,
            amount=payment.amount,
            interest_applied=allocation.interest_applied,
            principal_applied=allocation.principal_applied,
            remaining_principal=allocation.remaining_principal,
            unpaid_interest=outcome.unpaid_interest
        ))

    def _apply_special_damage(self, outcome: SegmentationOutcome, damage: PrincipalEvent) -> None:
        outcome.principal += damage.amount
        outcome.details.append(SpecialDamageMarker(
            date=damage.date,
            description=damage.description,
            amount=damage.amount,
            principal_after=outcome.principal
        ))

    def _final_period_damages(
        self,
        events: List[PrincipalEvent],
        final_span_start: date,
        last_day: date,
        end_date: date
    ) -> List[FinalPeriodDamage]:
        """
        Per-damage interest for special damages inside the last rate span

        Every row is priced at the rate and year length of the end date, or of
        the last accrual day when no published rate covers the end date. A
        damage dated on the end date itself earns nothing and is not listed.
        """
        priced_on = end_date if self.rate_table.find_period(end_date) is not None else last_day
        rate = self.rate_table.lookup_rate(priced_on, self.mode)
        year = priced_on.year
        rows = []
        for event in events:
            if event.kind != EventKind.SPECIAL_DAMAGE:
                continue
            if not final_span_start <= event.date <= last_day or event.date >= end_date:
                continue

            days = inclusive_days(event.date, last_day)
            rows.append(FinalPeriodDamage(
                date=event.date,
                end_date=last_day,
                description=event.description,
                amount=event.amount,
                rate=rate,
                days=days,
                interest=simple_interest(event.amount, rate, days, year)
            ))
        return rows
