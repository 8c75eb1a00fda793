"""
Interest Rate Table Module

Court order interest rates are published per jurisdiction as a list of
periods, each with a prejudgment and a postjudgment rate (in percent). Only
start dates are published: a period ends the day before the next one starts
and the newest period ends at the table's "valid until" horizon.

A date not covered by any period has rate 0. Historical tables have gaps, so
lookups degrade to zero interest rather than failing.
"""

from bisect import bisect_right
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union
import json
import logging

from .dates import parse_iso_date, day_before, day_after
from .money import ZERO, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_RATES_FILE = Path(__file__).parent / "data" / "bc_rates.json"


class RateTableError(ValueError):
    """Raised for a malformed, unsorted or overlapping rate table"""


class InterestMode(Enum):
    """Which of a period's two rates applies"""
    PREJUDGMENT = "prejudgment"     # Cause of action to judgment
    POSTJUDGMENT = "postjudgment"   # Judgment to payment


@dataclass(frozen=True)
class RatePeriod:
    """One published rate period, end date inclusive"""
    start_date: date
    end_date: date
    prejudgment_rate: Decimal
    postjudgment_rate: Decimal

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise RateTableError(
                f"Rate period ends {self.end_date.isoformat()} before it starts "
                f"{self.start_date.isoformat()}"
            )

    def contains(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date

    def rate_for(self, mode: InterestMode) -> Decimal:
        if mode == InterestMode.PREJUDGMENT:
            return self.prejudgment_rate
        return self.postjudgment_rate


class RatePeriodTable:
    """
    Sorted, non-overlapping rate periods for one jurisdiction
    """

    def __init__(self, periods: Iterable[RatePeriod], valid_until: Optional[date] = None):
        self._periods: List[RatePeriod] = list(periods)
        self.valid_until = valid_until

        for previous, current in zip(self._periods, self._periods[1:]):
            if current.start_date <= previous.end_date:
                raise RateTableError(
                    f"Rate periods overlap or are unsorted: {previous.start_date.isoformat()} "
                    f"and {current.start_date.isoformat()}"
                )

        self._starts = [period.start_date for period in self._periods]

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        valid_until: Union[date, str]
    ) -> 'RatePeriodTable':
        """
        Build a table from published records

        Args:
            records: {"start": "YYYY-MM-DD", "prejudgment": 5.2, "postjudgment": 7.2}
                mappings, in any order
            valid_until: Inclusive end of the newest period

        Raises:
            RateTableError: If a record is missing a field or is not parseable
        """
        horizon = parse_iso_date(valid_until)

        parsed = []
        for record in records:
            try:
                parsed.append((
                    parse_iso_date(record["start"]),
                    to_decimal(record["prejudgment"]),
                    to_decimal(record["postjudgment"]),
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise RateTableError(f"Malformed rate record {record!r}: {e}") from e

        parsed.sort(key=lambda item: item[0])

        periods = []
        for index, (start, prejudgment, postjudgment) in enumerate(parsed):
            if index + 1 < len(parsed):
                end = day_before(parsed[index + 1][0])
            else:
                end = horizon
            periods.append(RatePeriod(start, end, prejudgment, postjudgment))

        return cls(periods, valid_until=horizon)

    def __len__(self) -> int:
        return len(self._periods)

    def __iter__(self) -> Iterator[RatePeriod]:
        return iter(self._periods)

    def __bool__(self) -> bool:
        return bool(self._periods)

    @property
    def periods(self) -> List[RatePeriod]:
        return list(self._periods)

    def find_period(self, on: date) -> Optional[RatePeriod]:
        """Period whose [start, end] contains the date, or None"""
        index = bisect_right(self._starts, on) - 1
        if index < 0:
            return None
        period = self._periods[index]
        return period if period.contains(on) else None

    def lookup_rate(self, on: date, mode: InterestMode) -> Decimal:
        """Rate in percent for the date, 0 when no period covers it"""
        period = self.find_period(on)
        if period is None:
            return ZERO
        return period.rate_for(mode)

    def covers(self, start: date, end: date) -> bool:
        """True if any period overlaps [start, end]"""
        return any(
            period.start_date <= end and period.end_date >= start
            for period in self._periods
        )

    def rate_changes_within(self, start: date, end: date) -> List[date]:
        """
        Dates in (start, end] on which the covering period changes

        Includes the day after a period ends when nothing starts then, so a
        gap in the table becomes its own (zero rate) span.
        """
        changes = set()
        for period in self._periods:
            if start < period.start_date <= end:
                changes.add(period.start_date)
            following = day_after(period.end_date)
            if start < following <= end and self.find_period(following) is None:
                changes.add(following)
        return sorted(changes)


class RateSheet:
    """
    Rate tables for every jurisdiction, as published together
    """

    def __init__(
        self,
        tables: Mapping[str, RatePeriodTable],
        last_updated: Optional[date] = None,
        valid_until: Optional[date] = None
    ):
        self._tables: Dict[str, RatePeriodTable] = {
            code.upper(): table for code, table in tables.items()
        }
        self.last_updated = last_updated
        self.valid_until = valid_until

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> 'RateSheet':
        """
        Build a sheet from the published document shape

        {"lastUpdated": "YYYY-MM-DD", "validUntil": "YYYY-MM-DD",
         "rates": {"BC": [{"start": ..., "prejudgment": ..., "postjudgment": ...}]}}
        """
        try:
            valid_until = parse_iso_date(document["validUntil"])
            rates = document["rates"]
        except (KeyError, TypeError, ValueError) as e:
            raise RateTableError(f"Malformed rate sheet: {e}") from e

        if not isinstance(rates, Mapping):
            raise RateTableError("Rate sheet 'rates' must map jurisdiction codes to periods")

        last_updated = None
        if document.get("lastUpdated"):
            last_updated = parse_iso_date(document["lastUpdated"])

        tables = {
            code: RatePeriodTable.from_records(records, valid_until)
            for code, records in rates.items()
        }
        return cls(tables, last_updated=last_updated, valid_until=valid_until)

    def jurisdictions(self) -> List[str]:
        return sorted(code for code, table in self._tables.items() if table)

    def table_for(self, jurisdiction: str) -> Optional[RatePeriodTable]:
        """Table for the jurisdiction, None when absent or empty"""
        if not jurisdiction:
            return None
        table = self._tables.get(jurisdiction.upper())
        if not table:
            logger.info(f"No interest rates available for jurisdiction {jurisdiction}")
            return None
        return table


def load_rate_sheet(path: Union[str, Path]) -> RateSheet:
    """Load a rate sheet from a JSON document on disk"""
    with open(path, encoding="utf-8") as handle:
        document = json.load(handle, parse_float=Decimal)
    return RateSheet.from_mapping(document)


def default_rate_sheet() -> RateSheet:
    """The bundled British Columbia rate sheet"""
    return load_rate_sheet(DEFAULT_RATES_FILE)
