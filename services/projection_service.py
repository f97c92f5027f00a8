import os
from decimal import Decimal

from models.projection_dto import ProjectionResult
from services.forecast_service import (
    collect_occurrences,
    group_by_day,
    sum_amounts,
)
from utils.dates import add_days_capped, today
from utils.money import round_money

YEAR_WINDOW_DAYS = 365
DEFAULT_PROJECTION_DAYS = int(os.getenv("SUBTRACK_PROJECTION_DAYS", "30"))
MAX_PROJECTION_DAYS = 3660


def estimate_monthly_average(subscriptions, clock=None) -> Decimal:
    """Average monthly spend, amortizing quarterly and yearly charges.

    Sums every charge in the 365 calendar days starting today and divides
    by 12. Pure function of the subscriptions and the clock.
    """
    start = today(clock)
    end = add_days_capped(start, YEAR_WINDOW_DAYS - 1)

    annual_total = sum_amounts(collect_occurrences(subscriptions, start, end))
    return round_money(annual_total / 12)


def calculate_projection(subscriptions, days=None, frequency=None, clock=None) -> ProjectionResult:
    """Upcoming charges for the next ``days`` days plus the monthly average.

    The frequency filter narrows the upcoming list only; the monthly average
    always covers every subscription.
    """
    if days is None:
        days = DEFAULT_PROJECTION_DAYS
    if days < 0:
        raise ValueError("days must be >= 0")

    start = today(clock)
    end_date = add_days_capped(start, days)

    occurrences = collect_occurrences(subscriptions, start, end_date, frequency=frequency)

    return ProjectionResult(
        start_date=start,
        end_date=end_date,
        upcoming_total=sum_amounts(occurrences),
        monthly_average=estimate_monthly_average(subscriptions, clock=lambda: start),
        days=group_by_day(occurrences, start),
    )
