"""
dates.py — Calendar-day normalization
Every stored or client-supplied date passes through to_day() so that
comparisons happen on plain calendar days, never on timestamps.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import APP_TIMEZONE
from errors import ValidationError

SUNDAY = 6  # date.weekday() numbering, Monday == 0


def to_day(value) -> date:
    """Normalize a date, datetime or ISO string to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        # Only the calendar part of "YYYY-MM-DDTHH:MM:SS..." is meaningful
        raw = value.strip().split("T", 1)[0].split(" ", 1)[0]
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
    raise ValidationError("Invalid date")


def day_key(value) -> str:
    return to_day(value).isoformat()


def _zone(tz_name: str | None):
    name = tz_name or APP_TIMEZONE
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")


def local_today(tz_name: str | None = None, now: datetime | None = None) -> date:
    """Today's calendar day in the given IANA zone (APP_TIMEZONE by default)."""
    zone = _zone(tz_name)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone).date()


def resolve_today(today: str | None = None, tz: str | None = None) -> date:
    """The client's own calendar day wins; otherwise derive it from a timezone."""
    if today:
        return to_day(today)
    return local_today(tz)


def week_start(day: date, first_weekday: int = SUNDAY) -> date:
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def days_back(today: date, count: int) -> list[date]:
    """The last `count` calendar days ending with today, oldest first."""
    return [today - timedelta(days=i) for i in range(count - 1, -1, -1)]
