"""
Judgment Interest Calculator

Simple prejudgment and postjudgment interest on court judgments under a
variable rate-period regime such as British Columbia's Court Order Interest
Act. All money is Decimal; dates are whole days.
"""

__version__ = "1.0.0"

from .calculator import InterestPeriodCalculator, InvalidModeError, compute
from .events import Payment, SpecialDamage
from .judgment import JudgmentInputs, JudgmentSummary, recalculate
from .per_diem import PerDiemCalculator, per_diem
from .rates import (
    InterestMode, RatePeriod, RatePeriodTable, RateSheet, RateTableError,
    default_rate_sheet, load_rate_sheet
)
from .segments import CalculationResult, RowKind

__all__ = [
    "__version__",
    "CalculationResult",
    "InterestMode",
    "InterestPeriodCalculator",
    "InvalidModeError",
    "JudgmentInputs",
    "JudgmentSummary",
    "Payment",
    "PerDiemCalculator",
    "RatePeriod",
    "RatePeriodTable",
    "RateSheet",
    "RateTableError",
    "RowKind",
    "SpecialDamage",
    "compute",
    "default_rate_sheet",
    "load_rate_sheet",
    "per_diem",
    "recalculate",
]
