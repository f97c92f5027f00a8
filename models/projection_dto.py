from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from models.subscription import Occurrence, Subscription


@dataclass
class UpcomingDay:
    date: date
    days_away: int
    is_today: bool
    is_soon: bool
    total: Decimal
    items: List[Occurrence] = field(default_factory=list)


@dataclass
class ProjectionResult:
    start_date: date
    end_date: date
    upcoming_total: Decimal
    monthly_average: Decimal
    days: List[UpcomingDay]

    def to_dict(self):
        """JSON-serializable form; amounts as strings, dates in ISO format."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "upcoming_total": str(self.upcoming_total),
            "monthly_average": str(self.monthly_average),
            "days": [
                {
                    "date": day.date.isoformat(),
                    "days_away": day.days_away,
                    "is_today": day.is_today,
                    "is_soon": day.is_soon,
                    "total": str(day.total),
                    "items": [item.to_dict() for item in day.items],
                }
                for day in self.days
            ],
        }


@dataclass
class SubscriptionOverview:
    """Subscription plus its next charge, as shown in the list view."""
    subscription: Subscription
    next_charge: Optional[date]
    days_until: Optional[int]

    def to_dict(self):
        data = self.subscription.to_dict()
        data["next_charge"] = self.next_charge.isoformat() if self.next_charge else None
        data["days_until"] = self.days_until
        return data
