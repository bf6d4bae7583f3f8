"""FitTrack API - Calendar date helpers (ISO ``YYYY-MM-DD`` strings)."""

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def today_iso() -> str:
    return date.today().isoformat()


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (a trailing time part is ignored)."""
    return date.fromisoformat(value[:10])


def add_days(value: str, days: int) -> str:
    return (parse_iso_date(value) + timedelta(days=days)).isoformat()


def date_range(start: str, days: int) -> List[str]:
    """Consecutive ISO dates beginning at ``start``."""
    first = parse_iso_date(start)
    return [(first + timedelta(days=offset)).isoformat() for offset in range(days)]


def next_weekday(day_name: str, reference: Optional[date] = None) -> Optional[str]:
    """
    Next occurrence of ``day_name`` on or after ``reference`` (default today).

    Returns None for an unknown day name.
    """
    name = (day_name or "").strip().lower()
    if name not in WEEKDAYS:
        return None
    reference = reference or date.today()
    ahead = (WEEKDAYS.index(name) - reference.weekday()) % 7
    return (reference + timedelta(days=ahead)).isoformat()


def utcnow() -> datetime:
    return datetime.utcnow()


def start_of_week(reference: Optional[datetime] = None) -> datetime:
    """Midnight of the Sunday that starts the week containing ``reference``."""
    reference = reference or utcnow()
    days_since_sunday = (reference.weekday() + 1) % 7
    return datetime.combine(reference.date() - timedelta(days=days_since_sunday), datetime.min.time())


def as_naive_utc(value: datetime) -> datetime:
    """``value`` in UTC without tzinfo; naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
