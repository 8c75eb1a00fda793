"""
Principal Events Module

Special damages and payments change the principal part-way through an
interest period. Callers supply them as plain data ({"date": "YYYY-MM-DD",
"amount": ...}); each one is validated on its own so a single malformed row
never aborts a calculation.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .dates import parse_iso_date
from .money import ZERO, to_decimal

DEFAULT_DAMAGE_DESCRIPTION = "Special Damage"


class InvalidEventError(ValueError):
    """Raised when an event cannot be coerced into a SpecialDamage or Payment"""


class EventKind(Enum):
    """Kinds of principal-changing events"""
    SPECIAL_DAMAGE = "special_damage"
    PAYMENT = "payment"


@dataclass(frozen=True)
class SpecialDamage:
    """Out-of-pocket loss added to principal as of its date (inclusive)"""
    date: date
    amount: Decimal
    description: str = DEFAULT_DAMAGE_DESCRIPTION

    def __post_init__(self):
        if self.amount <= ZERO:
            raise InvalidEventError("Special damage amount must be positive")

    @property
    def kind(self) -> EventKind:
        return EventKind.SPECIAL_DAMAGE


@dataclass(frozen=True)
class Payment:
    """Payment applied to outstanding interest first, then principal"""
    date: date
    amount: Decimal

    def __post_init__(self):
        if self.amount <= ZERO:
            raise InvalidEventError("Payment amount must be positive")

    @property
    def kind(self) -> EventKind:
        return EventKind.PAYMENT


PrincipalEvent = Union[SpecialDamage, Payment]


@dataclass(frozen=True)
class SkippedEvent:
    """An input event that was left out of the calculation, and why"""
    source: Any
    reason: str

    def to_dict(self) -> dict:
        return {"event": repr(self.source), "reason": self.reason}


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def coerce_special_damage(raw: Any) -> SpecialDamage:
    """
    Build a SpecialDamage from a mapping or object with date/amount/description

    Raises:
        InvalidEventError: If the date or amount is missing or invalid
    """
    if isinstance(raw, SpecialDamage):
        return raw
    try:
        event_date = parse_iso_date(_field(raw, "date"))
        amount = to_decimal(_field(raw, "amount"))
    except ValueError as e:
        raise InvalidEventError(str(e)) from e

    description = _field(raw, "description")
    if not isinstance(description, str) or not description.strip():
        description = DEFAULT_DAMAGE_DESCRIPTION
    return SpecialDamage(date=event_date, amount=amount, description=description.strip())


def coerce_payment(raw: Any) -> Payment:
    """
    Build a Payment from a mapping or object with date/amount

    Raises:
        InvalidEventError: If the date or amount is missing or invalid
    """
    if isinstance(raw, Payment):
        return raw
    try:
        event_date = parse_iso_date(_field(raw, "date"))
        amount = to_decimal(_field(raw, "amount"))
    except ValueError as e:
        raise InvalidEventError(str(e)) from e
    return Payment(date=event_date, amount=amount)


def coerce_event(raw: Any) -> PrincipalEvent:
    """
    Build either event kind; plain mappings name theirs in "kind" (or "type")
    """
    if isinstance(raw, (SpecialDamage, Payment)):
        return raw

    kind = _field(raw, "kind") or _field(raw, "type")
    if isinstance(kind, EventKind):
        kind = kind.value
    if kind == EventKind.SPECIAL_DAMAGE.value:
        return coerce_special_damage(raw)
    if kind == EventKind.PAYMENT.value:
        return coerce_payment(raw)
    raise InvalidEventError(f"Unknown event kind {kind!r}")


def normalize_events(
    events: Optional[Iterable[Any]] = None,
    special_damages: Optional[Iterable[Any]] = None,
    payments: Optional[Iterable[Any]] = None
) -> Tuple[List[PrincipalEvent], List[SkippedEvent]]:
    """
    Coerce every input event, isolating failures per event

    Returns:
        (valid events in input order, skipped events with reasons)
    """
    valid: List[PrincipalEvent] = []
    skipped: List[SkippedEvent] = []

    sources = [
        (events or [], coerce_event),
        (special_damages or [], coerce_special_damage),
        (payments or [], coerce_payment),
    ]
    for raw_events, coerce in sources:
        for raw in raw_events:
            try:
                valid.append(coerce(raw))
            except InvalidEventError as e:
                skipped.append(SkippedEvent(source=raw, reason=str(e)))

    return valid, skipped


def event_sort_key(event: PrincipalEvent, payments_first: bool = True) -> Tuple[date, int]:
    """
    Chronological order with a deterministic same-day tie-break

    By default a payment dated the same day as a special damage is allocated
    first, against the pre-damage principal. Python's sort is stable, so
    events of one kind on one day keep their input order.
    """
    is_payment = event.kind == EventKind.PAYMENT
    if payments_first:
        return event.date, 0 if is_payment else 1
    return event.date, 1 if is_payment else 0
