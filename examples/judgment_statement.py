#!/usr/bin/env python3
"""
Example: A judgment statement using the bundled BC court order interest rates

Prejudgment interest on a pecuniary award with two special damages, costs
awarded a month after judgment, and a postjudgment payment.
"""

import os
import sys
from decimal import Decimal
from datetime import date

# Add the package to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from judgment_interest.config import get_config
from judgment_interest.judgment import JudgmentInputs, recalculate
from judgment_interest.money import format_money
from judgment_interest.rates import default_rate_sheet
from judgment_interest.segments import RowKind


def print_schedule(title, result):
    print(f"\n{title}")
    print("-" * 72)
    for row in result.details:
        if row.kind == RowKind.RATE_SEGMENT:
            print(f"   {row.start_date} - {row.end_date}  {row.days:>4} days  "
                  f"{row.rate:>5}%  on {format_money(row.principal):>12}  "
                  f"{format_money(row.interest):>10}")
        else:
            print(f"   {row.date}  {row.description}")
    print(f"   Total interest: {format_money(result.total)}")


def main():
    config = get_config()
    sheet = default_rate_sheet()

    inputs = JudgmentInputs(
        jurisdiction=config.default_jurisdiction,
        judgment_awarded=Decimal("50000"),
        non_pecuniary_awarded=Decimal("25000"),
        costs_awarded=Decimal("7500"),
        prejudgment_start_date=date(2023, 3, 15),
        date_of_judgment=date(2024, 5, 1),
        non_pecuniary_judgment_date=date(2024, 5, 1),
        costs_awarded_date=date(2024, 6, 3),
        postjudgment_end_date=date(2025, 3, 31),
        special_damages=[
            {"date": "2023-06-01", "amount": "4200", "description": "Physiotherapy"},
            {"date": "2023-11-20", "amount": "1850", "description": "Vehicle repairs"},
        ],
        payments=[{"date": "2024-09-30", "amount": "20000"}],
    )

    summary = recalculate(
        inputs, sheet,
        end_date_accrues=config.end_date_accrues,
        payments_before_damages=config.payments_before_damages
    )

    print(f"Judgment statement ({summary.jurisdiction}, rates valid until {sheet.valid_until})")
    print_schedule("Prejudgment interest", summary.prejudgment)
    print_schedule("Postjudgment interest", summary.postjudgment)

    print("\nSummary")
    print("-" * 72)
    print(f"   Judgment total:        {format_money(summary.judgment_total)}")
    print(f"   Postjudgment interest: {format_money(summary.postjudgment_interest)}")
    print(f"   Payments:              {format_money(summary.payments_total)}")
    print(f"   Total owing:           {format_money(summary.total_owing)}")
    print(f"   Per diem after {summary.final_calculation_date}: {format_money(summary.per_diem)}")


if __name__ == "__main__":
    main()
