"""
Recurrence Resolver: finds where a subscription lands relative to a date.

Every occurrence is computed from the anchor as ``anchor + k periods`` so
month-end anchors keep their month-end across short months (Jan 31 ->
Feb 29 -> Mar 31). Pure functions; the only ambient input is the clock.
"""
from datetime import date

from errors import UnsupportedFrequency
from models.subscription import Frequency
from utils.dates import (
    add_months,
    add_weeks,
    add_years,
    months_between,
    to_date,
    today,
)


def coerce_frequency(value) -> Frequency:
    if isinstance(value, Frequency):
        return value
    if isinstance(value, str):
        try:
            return Frequency(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedFrequency(value)


def occurrence_at(start_date: date, frequency, index: int) -> date:
    """The ``index``-th occurrence after the anchor (0 is the anchor itself)."""
    frequency = coerce_frequency(frequency)
    if frequency is Frequency.WEEKLY:
        return add_weeks(start_date, index)
    if frequency is Frequency.MONTHLY:
        return add_months(start_date, index)
    if frequency is Frequency.QUARTERLY:
        return add_months(start_date, index * 3)
    if frequency is Frequency.YEARLY:
        return add_years(start_date, index)
    raise UnsupportedFrequency(frequency)


def advance(d: date, frequency) -> date:
    """Move ``d`` forward by exactly one recurrence period."""
    return occurrence_at(d, frequency, 1)


def _estimate_index(start_date: date, frequency: Frequency, reference: date) -> int:
    # Never overshoots: the day of month is ignored, so the estimate is
    # at most one period short of the answer.
    if frequency is Frequency.WEEKLY:
        return (reference - start_date).days // 7
    if frequency is Frequency.MONTHLY:
        return months_between(start_date, reference)
    if frequency is Frequency.QUARTERLY:
        return months_between(start_date, reference) // 3
    if frequency is Frequency.YEARLY:
        return reference.year - start_date.year
    raise UnsupportedFrequency(frequency)


def resolve_index(start_date, frequency, reference_date) -> int:
    """Smallest k such that occurrence k falls on or after ``reference_date``."""
    frequency = coerce_frequency(frequency)
    start = to_date(start_date)
    reference = to_date(reference_date)

    if reference <= start:
        return 0

    index = _estimate_index(start, frequency, reference)
    while occurrence_at(start, frequency, index) < reference:
        index += 1
    return index


def next_occurrence(start_date, frequency, reference_date=None, clock=None) -> date:
    """First occurrence on or after ``reference_date`` (today when omitted).

    A subscription never occurs before its anchor, so any reference on or
    before ``start_date`` returns ``start_date`` itself.

    Raises:
        InvalidDate: either date cannot be read as a calendar date.
        UnsupportedFrequency: ``frequency`` is not one of the four kinds.
    """
    frequency = coerce_frequency(frequency)
    start = to_date(start_date)
    reference = to_date(reference_date) if reference_date is not None else today(clock)

    index = resolve_index(start, frequency, reference)
    return occurrence_at(start, frequency, index)
