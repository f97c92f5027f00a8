from calendar import monthrange
from datetime import date, datetime, timedelta

from errors import InvalidDate


def to_date(value) -> date:
    """Normalize a date-like value to a calendar date (time of day dropped).

    Accepts ``date``, ``datetime`` and ISO strings (``YYYY-MM-DD`` or a full
    ISO timestamp such as ``2024-01-31T00:00:00.000Z``).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise InvalidDate(value) from exc
    raise InvalidDate(value)


def today(clock=None) -> date:
    """Current calendar date, read from ``clock`` when one is injected."""
    if clock is None:
        clock = date.today
    return to_date(clock())


def add_days_capped(d: date, days: int) -> date:
    """``d + days``, stopping at ``date.max`` instead of overflowing."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return date.max


def last_day_of_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def add_weeks(d: date, weeks: int) -> date:
    return d + timedelta(days=7 * weeks)


def add_months(d: date, months: int) -> date:
    # clamp to last day of the target month, never roll over
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, last_day_of_month(year, month))
    return date(year, month, day)


def add_years(d: date, years: int) -> date:
    year = d.year + years
    day = min(d.day, last_day_of_month(year, d.month))  # Feb 29 -> Feb 28
    return date(year, d.month, day)


def months_between(start: date, end: date) -> int:
    """Calendar month difference, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)
