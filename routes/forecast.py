from fastapi import APIRouter, HTTPException, Query
from typing import Optional
from errors import InvalidDate, UnsupportedFrequency
from services.forecast_service import total_due
from services.projection_service import (
    DEFAULT_PROJECTION_DAYS,
    MAX_PROJECTION_DAYS,
    calculate_projection,
    estimate_monthly_average,
)
from services.subscription_service import list_subscriptions
from utils.dates import add_days_capped, to_date, today

router = APIRouter()


def _clock(as_of_date: Optional[str]):
    """Fixed clock for ``as_of_date``; None falls back to today."""
    if not as_of_date:
        return None
    try:
        as_of = to_date(as_of_date)
    except InvalidDate:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD.")
    return lambda: as_of


@router.get("/forecast/upcoming")
def get_upcoming(
    days: int = Query(DEFAULT_PROJECTION_DAYS, ge=0, le=MAX_PROJECTION_DAYS),
    frequency: Optional[str] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    """
    Return upcoming charges grouped by day, the window total and the
    average monthly spend.

    Query Parameters:
        days: window length after the reference date (inclusive).
        frequency (optional): only list subscriptions of this frequency.
        as_of_date (optional): reference date (YYYY-MM-DD), defaults to today.
    """
    clock = _clock(as_of_date)
    try:
        projection = calculate_projection(
            list_subscriptions(), days=days, frequency=frequency or None, clock=clock
        )
    except UnsupportedFrequency as e:
        raise HTTPException(status_code=400, detail=str(e))
    return projection.to_dict()


@router.get("/forecast/monthly-average")
def get_monthly_average(as_of_date: Optional[str] = Query(None)):
    as_of = today(_clock(as_of_date))
    average = estimate_monthly_average(list_subscriptions(), clock=lambda: as_of)
    return {
        "as_of": as_of.isoformat(),
        "monthly_average": str(average),
    }


@router.get("/forecast/total-due")
def get_total_due(
    days: int = Query(DEFAULT_PROJECTION_DAYS, ge=0, le=MAX_PROJECTION_DAYS),
    as_of_date: Optional[str] = Query(None),
):
    start = today(_clock(as_of_date))
    return {
        "start_date": start.isoformat(),
        "end_date": add_days_capped(start, days).isoformat(),
        "total_due": str(total_due(list_subscriptions(), days, clock=lambda: start)),
    }
