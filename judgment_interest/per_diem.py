"""
Per Diem Module

Daily interest on the outstanding balance at the final calculation date,
quoted so a creditor can add interest for each day after the statement.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional
import logging

from .dates import days_in_year, to_date_or_none
from .money import HUNDRED, ZERO, to_decimal
from .rates import InterestMode, RatePeriodTable

logger = logging.getLogger(__name__)


class PerDiemCalculator:
    """Daily accrual at the rate in effect on a given date"""

    def __init__(self, rate_table: Optional[RatePeriodTable]):
        self.rate_table = rate_table

    def per_diem(
        self,
        final_balance: Any,
        final_date: Any,
        use_postjudgment_rate: bool = True
    ) -> Decimal:
        """
        Calculate one day's interest on final_balance

        Args:
            final_balance: Outstanding principal after all payments
            final_date: Date whose rate and year length apply
            use_postjudgment_rate: False when only prejudgment interest is being shown

        Returns:
            Unrounded daily interest; 0 when there is nothing to accrue on
        """
        try:
            balance = to_decimal(final_balance)
        except ValueError:
            return ZERO
        on = to_date_or_none(final_date)

        if balance <= ZERO or on is None or not self.rate_table:
            return ZERO

        mode = InterestMode.POSTJUDGMENT if use_postjudgment_rate else InterestMode.PREJUDGMENT
        rate = self.rate_table.lookup_rate(on, mode)
        if rate <= ZERO:
            logger.warning(f"No {mode.value} rate for per diem on {on.isoformat()}")
            return ZERO

        return (balance * rate) / (HUNDRED * Decimal(days_in_year(on.year)))


def per_diem(
    final_balance: Any,
    final_date: date,
    rate_table: Optional[RatePeriodTable],
    use_postjudgment_rate: bool = True
) -> Decimal:
    return PerDiemCalculator(rate_table).per_diem(
        final_balance, final_date, use_postjudgment_rate=use_postjudgment_rate
    )
