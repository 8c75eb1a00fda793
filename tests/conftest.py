"""
Shared rate table fixtures
"""

import pytest
from datetime import date
from decimal import Decimal

from judgment_interest.rates import RatePeriod, RatePeriodTable, RateSheet


def flat_table(prejudgment="5", postjudgment="5"):
    """One period from 2020 through 2030 at fixed rates"""
    return RatePeriodTable.from_records(
        [{"start": "2020-01-01", "prejudgment": prejudgment, "postjudgment": postjudgment}],
        valid_until="2030-12-31"
    )


@pytest.fixture
def flat_rates():
    """5% prejudgment and postjudgment throughout"""
    return flat_table()


@pytest.fixture
def split_rates():
    """Distinct prejudgment and postjudgment rates: 5% and 7%"""
    return flat_table("5", "7")


@pytest.fixture
def stepped_rates():
    """Two BC-style half-year periods in 2024"""
    return RatePeriodTable.from_records(
        [
            {"start": "2024-07-01", "prejudgment": "4.95", "postjudgment": "6.95"},
            {"start": "2024-01-01", "prejudgment": "5.20", "postjudgment": "7.20"},
        ],
        valid_until="2024-12-31"
    )


@pytest.fixture
def gapped_rates():
    """January and March onward at 5%, nothing published for February 2024"""
    return RatePeriodTable([
        RatePeriod(date(2024, 1, 1), date(2024, 1, 31), Decimal("5"), Decimal("5")),
        RatePeriod(date(2024, 3, 1), date(2024, 12, 31), Decimal("5"), Decimal("5")),
    ])


@pytest.fixture
def split_sheet(split_rates):
    return RateSheet({"BC": split_rates}, valid_until=date(2030, 12, 31))
