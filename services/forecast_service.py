### Forecast service looks ahead at subscriptions and lists the charges that fall in a date window.
import logging
from decimal import Decimal
from itertools import groupby

from errors import UnsupportedFrequency
from models.projection_dto import UpcomingDay
from models.subscription import Occurrence
from services.recurrence_service import coerce_frequency, occurrence_at, resolve_index
from utils.dates import add_days_capped, to_date, today

logger = logging.getLogger(__name__)

SOON_DAYS = 7


def _resolve_index_or_none(start, frequency, reference):
    # past date.max there is no next occurrence
    try:
        return resolve_index(start, frequency, reference)
    except (OverflowError, ValueError):
        return None


def _occurrence_or_none(start, frequency, index):
    if index is None:
        return None
    try:
        return occurrence_at(start, frequency, index)
    except (OverflowError, ValueError):
        return None


def generate_occurrences(subscription, window_start, window_end):
    """All occurrences of one subscription in ``[window_start, window_end]``.

    Disabled subscriptions and unsupported frequencies yield an empty list.
    """
    if not subscription.enabled:
        return []

    try:
        frequency = coerce_frequency(subscription.frequency)
    except UnsupportedFrequency:
        logger.warning(
            f"Skipping subscription {subscription.id}: unsupported frequency {subscription.frequency!r}"
        )
        return []

    start = to_date(subscription.start_date)
    window_start = to_date(window_start)
    window_end = to_date(window_end)

    occurrences = []
    if window_start > window_end:
        return occurrences

    index = _resolve_index_or_none(start, frequency, window_start)
    next_date = _occurrence_or_none(start, frequency, index)
    while next_date is not None and next_date <= window_end:
        occurrences.append(Occurrence(
            subscription_id=subscription.id,
            name=subscription.name,
            amount=subscription.amount,
            frequency=frequency,
            date=next_date,
        ))
        index += 1
        next_date = _occurrence_or_none(start, frequency, index)

    return occurrences


def collect_occurrences(subscriptions, window_start, window_end, frequency=None):
    """Occurrences of every subscription, ordered by date then name.

    ``frequency`` restricts the result to subscriptions of that kind.
    """
    if frequency is not None:
        frequency = coerce_frequency(frequency)

    occurrences = []
    for subscription in subscriptions:
        if frequency is not None and subscription.frequency != frequency:
            continue
        occurrences.extend(generate_occurrences(subscription, window_start, window_end))

    return sorted(occurrences, key=lambda occ: (occ.date, occ.name.lower()))


def sum_amounts(occurrences) -> Decimal:
    return sum((Decimal(occ.amount) for occ in occurrences), Decimal("0"))


def group_by_day(occurrences, as_of):
    """Bucket date-ordered occurrences into UpcomingDay entries."""
    as_of = to_date(as_of)
    days = []
    for day, items in groupby(occurrences, key=lambda occ: occ.date):
        items = list(items)
        days_away = (day - as_of).days
        days.append(UpcomingDay(
            date=day,
            days_away=days_away,
            is_today=days_away == 0,
            is_soon=0 < days_away <= SOON_DAYS,
            total=sum_amounts(items),
            items=items,
        ))
    return days


def total_due(subscriptions, days, clock=None) -> Decimal:
    """Sum of every charge from today through ``today + days`` inclusive."""
    start = today(clock)
    end = add_days_capped(start, days)
    return sum_amounts(collect_occurrences(subscriptions, start, end))


def next_charge(subscription, clock=None):
    """Next charge date on or after today, or None when it cannot be resolved."""
    try:
        frequency = coerce_frequency(subscription.frequency)
    except UnsupportedFrequency:
        return None
    as_of = today(clock)
    start = to_date(subscription.start_date)
    return _occurrence_or_none(start, frequency, _resolve_index_or_none(start, frequency, as_of))
