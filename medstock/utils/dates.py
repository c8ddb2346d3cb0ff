"""
Date helpers shared by the engine.
Every time-relative computation takes "now" explicitly; nothing here reads the clock.
"""
from datetime import date, datetime, time
from typing import Union

from medstock.exceptions import SnapshotValidationError

DateLike = Union[date, datetime, str]

def _parse_iso(value: str, field: str) -> datetime:
    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min)
        # JS clients send "...Z" for UTC
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise SnapshotValidationError(f"invalid ISO 8601 value {value!r}", field)

def coerce_date(value: DateLike, field: str = "date") -> date:
    """Return a calendar date from a date, datetime or ISO 8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _parse_iso(value, field).date()
    raise SnapshotValidationError(f"expected a date, got {type(value).__name__}", field)

def coerce_datetime(value: DateLike, field: str = "timestamp") -> datetime:
    """Return a datetime; bare dates become midnight."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return _parse_iso(value, field)
    raise SnapshotValidationError(f"expected a timestamp, got {type(value).__name__}", field)

def align_to(value: datetime, reference: datetime) -> datetime:
    """
    Express value in the same timezone convention as reference.
    Naive reference = local wall clock; naive value with aware reference is
    taken to be in the reference's zone.
    """
    if reference.tzinfo is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)
    if value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    return value.astimezone(reference.tzinfo)

def months_until(expiry: DateLike, now: DateLike) -> int:
    """
    Whole calendar months from now to expiry.

    Day-of-month is ignored on purpose: a medicine expiring on the 1st of next
    month is "1 month" away even on the 31st. Negative once the expiry month
    has passed.
    """
    expiry_day = coerce_date(expiry, "expiry_date")
    now_day = coerce_date(now, "now")
    return (expiry_day.year - now_day.year) * 12 + (expiry_day.month - now_day.month)

def same_calendar_day(value: DateLike, now: datetime) -> bool:
    """True when value falls on the same calendar day as now (not a rolling 24h)."""
    moment = align_to(coerce_datetime(value), now)
    return moment.date() == now.date()
