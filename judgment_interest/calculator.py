"""
Interest Period Calculator

Entry point for one prejudgment or postjudgment calculation. Validates the
request, isolates bad events, and hands the range to the segmentation engine.

Expected edge cases never raise: an invalid range or non-positive principal
gives an empty zero-total result, and missing rate data gives a result flagged
`rates_unavailable` so the caller can say so rather than show $0.00. Only
programming errors (unknown mode, malformed rate table) raise.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional, Union
import logging

from .allocation import PaymentAllocator
from .dates import to_date_or_none
from .events import EventKind, SkippedEvent, normalize_events
from .money import ZERO, to_decimal
from .rates import InterestMode, RatePeriodTable
from .segmentation import SegmentationEngine
from .segments import CalculationResult

logger = logging.getLogger(__name__)


class InvalidModeError(ValueError):
    """Raised for an interest mode other than prejudgment or postjudgment"""


def parse_mode(mode: Union[InterestMode, str]) -> InterestMode:
    if isinstance(mode, InterestMode):
        return mode
    try:
        return InterestMode(str(mode).strip().lower())
    except ValueError:
        raise InvalidModeError(
            f"Unknown interest mode {mode!r}; expected 'prejudgment' or 'postjudgment'"
        )


class InterestPeriodCalculator:
    """
    Computes simple interest for one mode over one date range
    """

    def __init__(
        self,
        rate_table: Optional[RatePeriodTable],
        end_date_accrues: bool = False,
        payments_before_damages: bool = True,
        allocator: Optional[PaymentAllocator] = None
    ):
        self.rate_table = rate_table
        self.end_date_accrues = end_date_accrues
        self.payments_before_damages = payments_before_damages
        self.allocator = allocator or PaymentAllocator()

    def compute(
        self,
        mode: Union[InterestMode, str],
        start_date: Any,
        end_date: Any,
        initial_principal: Any,
        events: Optional[Iterable[Any]] = None,
        special_damages: Optional[Iterable[Any]] = None,
        payments: Optional[Iterable[Any]] = None,
        opening_unpaid_interest: Decimal = ZERO
    ) -> CalculationResult:
        """
        Calculate interest from start_date up to, but not including, end_date

        The end date earns interest too when the calculator is built with
        end_date_accrues=True.

        Args:
            mode: 'prejudgment' or 'postjudgment'
            start_date: First day of accrual (date or "YYYY-MM-DD")
            end_date: End of the range (date or "YYYY-MM-DD")
            initial_principal: Principal on start_date
            events: SpecialDamage/Payment objects, or mappings naming their "kind"
            special_damages: {"date", "amount", "description"} mappings
            payments: {"date", "amount"} mappings
            opening_unpaid_interest: Interest carried in unpaid from an earlier period

        Returns:
            CalculationResult

        Raises:
            InvalidModeError: If mode is not prejudgment or postjudgment
        """
        interest_mode = parse_mode(mode)
        start = to_date_or_none(start_date)
        end = to_date_or_none(end_date)

        try:
            principal = to_decimal(initial_principal)
        except ValueError:
            logger.debug(f"Unusable principal {initial_principal!r}; returning empty result")
            return CalculationResult.empty(interest_mode, start, end, ZERO)

        valid_events, skipped = normalize_events(events, special_damages, payments)
        for skipped_event in skipped:
            logger.warning(f"Skipping event {skipped_event.source!r}: {skipped_event.reason}")

        if not self.rate_table:
            return CalculationResult.empty(
                interest_mode, start, end, principal,
                rates_unavailable=True, skipped_events=skipped
            )

        engine = SegmentationEngine(
            self.rate_table,
            interest_mode,
            allocator=self.allocator,
            end_date_accrues=self.end_date_accrues,
            payments_before_damages=self.payments_before_damages
        )

        if start is None or end is None or end < start or principal <= ZERO:
            return CalculationResult.empty(
                interest_mode, start, end, principal, skipped_events=skipped
            )

        last_day = engine.last_accrual_day(end)
        if last_day < start:
            return CalculationResult.empty(
                interest_mode, start, end, principal, skipped_events=skipped
            )

        if not self.rate_table.covers(start, last_day):
            logger.info(
                f"No rate period overlaps {start.isoformat()} to {last_day.isoformat()}"
            )
            return CalculationResult.empty(
                interest_mode, start, end, principal,
                rates_unavailable=True, skipped_events=skipped
            )

        applicable = []
        for event in valid_events:
            if event.kind == EventKind.SPECIAL_DAMAGE and interest_mode != InterestMode.PREJUDGMENT:
                skipped.append(SkippedEvent(
                    source=event,
                    reason="Special damages apply to prejudgment interest only"
                ))
                continue
            if not start <= event.date <= end:
                continue
            if event.date == start:
                logger.debug(
                    f"{event.kind.value} on {start.isoformat()} is part of the opening principal"
                )
                continue
            applicable.append(event)

        outcome = engine.segment(
            start, end, principal, applicable,
            opening_unpaid_interest=to_decimal(opening_unpaid_interest)
        )

        return CalculationResult(
            mode=interest_mode,
            start_date=start,
            end_date=end,
            details=outcome.details,
            total=outcome.total,
            principal=outcome.principal,
            final_period_damage_interest_details=outcome.final_period_damages,
            unpaid_interest=outcome.unpaid_interest,
            skipped_events=skipped
        )


def compute(
    mode: Union[InterestMode, str],
    start_date: Any,
    end_date: Any,
    initial_principal: Any,
    rate_table: Optional[RatePeriodTable],
    events: Optional[Iterable[Any]] = None,
    end_date_accrues: bool = False,
    payments_before_damages: bool = True
) -> CalculationResult:
    """Functional form of InterestPeriodCalculator.compute"""
    calculator = InterestPeriodCalculator(
        rate_table,
        end_date_accrues=end_date_accrues,
        payments_before_damages=payments_before_damages
    )
    return calculator.compute(mode, start_date, end_date, initial_principal, events=events)
