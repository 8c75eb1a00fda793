"""
Shared dependencies: configuration and the loaded rate sheet
"""

from typing import Optional
import logging

from ..config import JudgmentInterestConfig, get_config
from ..rates import RateSheet, default_rate_sheet, load_rate_sheet

logger = logging.getLogger(__name__)


class CalculatorContext:
    """Configuration plus the rate sheet every request calculates against"""

    def __init__(self, config: Optional[JudgmentInterestConfig] = None,
                 rate_sheet: Optional[RateSheet] = None):
        self.config = config or get_config()
        self.rate_sheet = rate_sheet or self._load_rate_sheet()

    def _load_rate_sheet(self) -> RateSheet:
        if self.config.rates_file:
            logger.info(f"Loading interest rates from {self.config.rates_file}")
            return load_rate_sheet(self.config.rates_file)
        return default_rate_sheet()

    def jurisdiction(self, requested: Optional[str]) -> str:
        return (requested or self.config.default_jurisdiction).upper()


# Global calculator context, built on first use
_context: Optional[CalculatorContext] = None


# Dependency to get the calculator context
def get_context() -> CalculatorContext:
    global _context
    if _context is None:
        _context = CalculatorContext()
    return _context
