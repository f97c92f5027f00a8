"""Tests for the monthly-average estimate and the projection summary."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import fixed_clock, make_subscription
from errors import UnsupportedFrequency
from services.projection_service import calculate_projection, estimate_monthly_average


class TestEstimateMonthlyAverage:

    @pytest.mark.parametrize("anchor", [
        date(2020, 3, 1),
        date(2023, 7, 15),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ])
    def test_yearly_charge_amortized(self, anchor):
        subs = [make_subscription("yearly", anchor, amount="12.00")]
        assert estimate_monthly_average(subs, clock=fixed_clock(date(2024, 3, 1))) == Decimal("1.00")

    def test_yearly_anchored_today_in_common_year(self):
        subs = [make_subscription("yearly", date(2025, 3, 1), amount="12.00")]
        assert estimate_monthly_average(subs, clock=fixed_clock(date(2025, 3, 1))) == Decimal("1.00")

    def test_monthly(self):
        subs = [make_subscription("monthly", date(2024, 1, 1), amount="12.99")]
        assert estimate_monthly_average(subs, clock=fixed_clock(date(2024, 1, 1))) == Decimal("12.99")

    def test_quarterly(self):
        subs = [make_subscription("quarterly", date(2024, 1, 1), amount="30.00")]
        assert estimate_monthly_average(subs, clock=fixed_clock(date(2024, 1, 1))) == Decimal("10.00")

    def test_weekly_rounds_half_up(self):
        # 53 charges of 1.00 in the year
        subs = [make_subscription("weekly", date(2024, 1, 1), amount="1.00")]
        assert estimate_monthly_average(subs, clock=fixed_clock(date(2024, 1, 1))) == Decimal("4.42")

    def test_mixed_and_disabled(self):
        clock = fixed_clock(date(2024, 1, 1))
        subs = [
            make_subscription("monthly", date(2024, 1, 1), amount="10.00", name="A"),
            make_subscription("yearly", date(2024, 6, 1), amount="120.00", name="B"),
            make_subscription("monthly", date(2024, 1, 1), amount="50.00", name="C", enabled=False),
            make_subscription("daily", date(2024, 1, 1), amount="1.00", name="D"),
        ]
        assert estimate_monthly_average(subs, clock=clock) == Decimal("20.00")

    def test_empty(self):
        assert estimate_monthly_average([], clock=fixed_clock(date(2024, 1, 1))) == Decimal("0.00")


class TestCalculateProjection:

    def _subs(self):
        return [
            make_subscription("weekly", date(2024, 1, 1), amount="5.00", name="Gym"),
            make_subscription("yearly", date(2024, 1, 15), amount="99.00", name="Pro Cloud"),
        ]

    def test_window_total_and_average_are_separate(self):
        result = calculate_projection(self._subs(), days=30, clock=fixed_clock(date(2024, 1, 1)))

        assert result.start_date == date(2024, 1, 1)
        assert result.end_date == date(2024, 1, 31)
        assert result.upcoming_total == Decimal("124.00")
        assert result.monthly_average == Decimal("30.33")
        assert [d.date for d in result.days] == [
            date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22), date(2024, 1, 29),
        ]
        assert [i.name for i in result.days[2].items] == ["Gym", "Pro Cloud"]
        assert result.days[2].total == Decimal("104.00")

    def test_frequency_filter_only_narrows_upcoming(self):
        result = calculate_projection(
            self._subs(), days=30, frequency="yearly", clock=fixed_clock(date(2024, 1, 1))
        )
        assert result.upcoming_total == Decimal("99.00")
        assert result.monthly_average == Decimal("30.33")

    def test_to_dict(self):
        data = calculate_projection(self._subs(), days=7, clock=fixed_clock(date(2024, 1, 1))).to_dict()
        assert data["start_date"] == "2024-01-01"
        assert data["upcoming_total"] == "10.00"
        assert data["days"][0]["is_today"] is True
        assert data["days"][0]["items"][0]["frequency"] == "weekly"

    def test_negative_days_rejected(self):
        with pytest.raises(ValueError):
            calculate_projection(self._subs(), days=-1, clock=fixed_clock(date(2024, 1, 1)))

    def test_unknown_frequency_filter(self):
        with pytest.raises(UnsupportedFrequency):
            calculate_projection(self._subs(), frequency="daily", clock=fixed_clock(date(2024, 1, 1)))


class TestUpperBound:

    def test_projection_near_date_max(self):
        subs = [make_subscription("monthly", date(2024, 1, 15), amount="10.00")]
        result = calculate_projection(subs, days=30, clock=fixed_clock(date(9999, 12, 20)))
        assert result.end_date == date.max
        assert result.upcoming_total == Decimal("0")
        assert result.monthly_average == Decimal("0.00")
