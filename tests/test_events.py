"""
Test suite for principal events

Coercion of caller data into special damages and payments, with failures
isolated per event.
"""

import pytest
from dataclasses import FrozenInstanceError
from decimal import Decimal
from datetime import date

from judgment_interest.events import (
    DEFAULT_DAMAGE_DESCRIPTION, EventKind, InvalidEventError, Payment, SpecialDamage,
    coerce_event, coerce_payment, coerce_special_damage, event_sort_key, normalize_events
)


class TestEventCoercion:
    """Test building events from plain data"""

    def test_special_damage_from_mapping(self):
        damage = coerce_special_damage({"date": "2024-02-01", "amount": "1,000.00", "description": "Repairs"})
        assert damage == SpecialDamage(date(2024, 2, 1), Decimal("1000.00"), "Repairs")
        assert damage.kind == EventKind.SPECIAL_DAMAGE

    def test_blank_description_defaults(self):
        damage = coerce_special_damage({"date": "2024-02-01", "amount": 10, "description": "  "})
        assert damage.description == DEFAULT_DAMAGE_DESCRIPTION

    def test_payment_from_mapping(self):
        payment = coerce_payment({"date": "2024-03-01", "amount": 500})
        assert payment == Payment(date(2024, 3, 1), Decimal("500"))
        assert payment.kind == EventKind.PAYMENT

    def test_kind_field_selects_type(self):
        assert isinstance(coerce_event({"kind": "payment", "date": "2024-03-01", "amount": 1}), Payment)
        assert isinstance(coerce_event({"type": "special_damage", "date": "2024-03-01", "amount": 1}), SpecialDamage)

    def test_unknown_kind_rejected(self):
        with pytest.raises(InvalidEventError, match="Unknown event kind"):
            coerce_event({"kind": "refund", "date": "2024-03-01", "amount": 1})

    def test_non_positive_amount_rejected(self):
        with pytest.raises(InvalidEventError, match="positive"):
            coerce_payment({"date": "2024-03-01", "amount": 0})
        with pytest.raises(InvalidEventError, match="positive"):
            SpecialDamage(date(2024, 3, 1), Decimal("-5"))

    def test_bad_date_rejected(self):
        with pytest.raises(InvalidEventError):
            coerce_payment({"date": "03/01/2024", "amount": 10})

    def test_events_are_value_objects(self):
        """Events are frozen and never mutated by the engine"""
        payment = Payment(date(2024, 3, 1), Decimal("5"))
        with pytest.raises(FrozenInstanceError):
            payment.amount = Decimal("6")


class TestNormalizeEvents:
    """Test per-event failure isolation"""

    def test_bad_events_skipped_individually(self):
        valid, skipped = normalize_events(
            special_damages=[
                {"date": "2024-02-01", "amount": "100"},
                {"date": "bad", "amount": "100"},
            ],
            payments=[
                {"date": "2024-03-01", "amount": "-5"},
                {"date": "2024-04-01", "amount": "50"},
            ]
        )
        assert [event.kind for event in valid] == [EventKind.SPECIAL_DAMAGE, EventKind.PAYMENT]
        assert len(skipped) == 2
        assert "Invalid date" in skipped[0].reason
        assert "positive" in skipped[1].reason
        assert skipped[1].to_dict()["reason"] == skipped[1].reason

    def test_trailing_junk_skipped(self):
        """Malformed amounts and dates skip the event rather than being trimmed"""
        valid, skipped = normalize_events(events=[
            {"kind": "special_damage", "date": "2024-02-01xyz", "amount": "12"},
            {"kind": "special_damage", "date": "2024-02-01", "amount": "12abc"},
            {"kind": "payment", "date": "2024-03-01", "amount": "$1,000"},
        ])
        assert [event.kind for event in valid] == [EventKind.PAYMENT]
        assert valid[0].amount == Decimal("1000")
        assert len(skipped) == 2
        assert "Invalid date" in skipped[0].reason

    def test_nothing_supplied(self):
        assert normalize_events() == ([], [])


class TestEventOrdering:
    """Test the same-day tie-break"""

    def setup_method(self):
        """Set up test fixtures"""
        self.damage = SpecialDamage(date(2024, 2, 1), Decimal("1000"))
        self.payment = Payment(date(2024, 2, 1), Decimal("100"))
        self.earlier = SpecialDamage(date(2024, 1, 15), Decimal("10"))

    def test_payments_first_by_default(self):
        ordered = sorted([self.damage, self.payment, self.earlier], key=event_sort_key)
        assert ordered == [self.earlier, self.payment, self.damage]

    def test_damages_first_when_configured(self):
        ordered = sorted(
            [self.payment, self.damage],
            key=lambda event: event_sort_key(event, payments_first=False)
        )
        assert ordered == [self.damage, self.payment]
