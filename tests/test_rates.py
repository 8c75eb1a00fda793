"""
Test suite for rate tables

Period lookup, table validation, rate change detection and the bundled
British Columbia rate sheet.
"""

import json
import pytest
from decimal import Decimal
from datetime import date

from judgment_interest.rates import (
    InterestMode, RatePeriod, RatePeriodTable, RateSheet, RateTableError,
    default_rate_sheet, load_rate_sheet
)


class TestRatePeriodTable:
    """Test building and querying a rate table"""

    def test_end_dates_derived_from_next_start(self, stepped_rates):
        """Records arrive unsorted; each period ends the day before the next"""
        periods = stepped_rates.periods
        assert len(stepped_rates) == 2
        assert periods[0].start_date == date(2024, 1, 1)
        assert periods[0].end_date == date(2024, 6, 30)
        assert periods[1].end_date == date(2024, 12, 31)

    def test_lookup_by_mode(self, stepped_rates):
        assert stepped_rates.lookup_rate(date(2024, 3, 15), InterestMode.PREJUDGMENT) == Decimal("5.20")
        assert stepped_rates.lookup_rate(date(2024, 3, 15), InterestMode.POSTJUDGMENT) == Decimal("7.20")

    def test_boundaries_inclusive(self, stepped_rates):
        """A period covers both its start and end date"""
        assert stepped_rates.lookup_rate(date(2024, 6, 30), InterestMode.PREJUDGMENT) == Decimal("5.20")
        assert stepped_rates.lookup_rate(date(2024, 7, 1), InterestMode.PREJUDGMENT) == Decimal("4.95")
        assert stepped_rates.lookup_rate(date(2024, 12, 31), InterestMode.PREJUDGMENT) == Decimal("4.95")

    def test_uncovered_date_is_zero(self, stepped_rates, gapped_rates):
        assert stepped_rates.lookup_rate(date(2023, 12, 31), InterestMode.PREJUDGMENT) == Decimal("0")
        assert stepped_rates.lookup_rate(date(2025, 1, 1), InterestMode.PREJUDGMENT) == Decimal("0")
        assert gapped_rates.lookup_rate(date(2024, 2, 10), InterestMode.PREJUDGMENT) == Decimal("0")
        assert gapped_rates.find_period(date(2024, 2, 10)) is None

    def test_overlapping_periods_rejected(self):
        with pytest.raises(RateTableError, match="overlap"):
            RatePeriodTable([
                RatePeriod(date(2024, 1, 1), date(2024, 6, 30), Decimal("5"), Decimal("7")),
                RatePeriod(date(2024, 6, 1), date(2024, 12, 31), Decimal("5"), Decimal("7")),
            ])

    def test_unsorted_periods_rejected(self):
        with pytest.raises(RateTableError):
            RatePeriodTable([
                RatePeriod(date(2024, 7, 1), date(2024, 12, 31), Decimal("5"), Decimal("7")),
                RatePeriod(date(2024, 1, 1), date(2024, 6, 30), Decimal("5"), Decimal("7")),
            ])

    def test_period_ending_before_start_rejected(self):
        with pytest.raises(RateTableError):
            RatePeriod(date(2024, 7, 1), date(2024, 6, 30), Decimal("5"), Decimal("7"))

    def test_malformed_record_rejected(self):
        with pytest.raises(RateTableError, match="Malformed"):
            RatePeriodTable.from_records([{"start": "2024-01-01"}], valid_until="2024-12-31")

    def test_covers(self, stepped_rates):
        assert stepped_rates.covers(date(2023, 12, 1), date(2024, 1, 1))
        assert not stepped_rates.covers(date(2023, 1, 1), date(2023, 12, 31))
        assert not stepped_rates.covers(date(2025, 1, 1), date(2025, 3, 1))


class TestRateChanges:
    """Test detection of rate period boundaries inside a range"""

    def test_changes_strictly_after_start(self, stepped_rates):
        assert stepped_rates.rate_changes_within(date(2024, 1, 1), date(2024, 12, 31)) == [date(2024, 7, 1)]
        assert stepped_rates.rate_changes_within(date(2024, 7, 1), date(2024, 12, 31)) == []

    def test_change_on_end_included(self, stepped_rates):
        assert stepped_rates.rate_changes_within(date(2024, 3, 1), date(2024, 7, 1)) == [date(2024, 7, 1)]

    def test_gap_start_reported(self, gapped_rates):
        """The day after a period ends becomes a change when nothing starts then"""
        changes = gapped_rates.rate_changes_within(date(2024, 1, 15), date(2024, 3, 15))
        assert changes == [date(2024, 2, 1), date(2024, 3, 1)]


class TestRateSheet:
    """Test jurisdiction rate sheets"""

    def test_from_mapping(self):
        sheet = RateSheet.from_mapping({
            "lastUpdated": "2024-06-01",
            "validUntil": "2024-12-31",
            "rates": {
                "bc": [{"start": "2024-01-01", "prejudgment": 5.2, "postjudgment": 7.2}],
                "ON": []
            }
        })
        assert sheet.last_updated == date(2024, 6, 1)
        assert sheet.jurisdictions() == ["BC"]
        assert sheet.table_for("bc") is not None
        assert sheet.table_for("ON") is None
        assert sheet.table_for("AB") is None
        assert sheet.table_for("") is None

    def test_missing_valid_until_rejected(self):
        with pytest.raises(RateTableError, match="Malformed rate sheet"):
            RateSheet.from_mapping({"rates": {}})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({
            "validUntil": "2024-12-31",
            "rates": {"BC": [{"start": "2024-01-01", "prejudgment": 5.2, "postjudgment": 7.2}]}
        }))
        table = load_rate_sheet(path).table_for("BC")
        assert table.lookup_rate(date(2024, 5, 5), InterestMode.POSTJUDGMENT) == Decimal("7.2")

    def test_bundled_bc_sheet(self):
        """The bundled table runs from 1993 to mid 2025"""
        sheet = default_rate_sheet()
        table = sheet.table_for("BC")

        assert len(table) == 65
        assert table.periods[0].start_date == date(1993, 1, 1)
        assert table.valid_until == date(2025, 6, 30)
        assert table.lookup_rate(date(2024, 3, 15), InterestMode.PREJUDGMENT) == Decimal("5.20")
        assert table.lookup_rate(date(2024, 8, 15), InterestMode.POSTJUDGMENT) == Decimal("6.95")
        assert table.lookup_rate(date(2025, 2, 1), InterestMode.PREJUDGMENT) == Decimal("3.45")
