from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Union


class Frequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Subscription:
    id: str
    name: str
    amount: Decimal
    start_date: date
    # raw value kept when loaded from unvalidated data; the engine rejects it
    frequency: Union[Frequency, str]
    enabled: bool = True
    auto_renew: bool = True

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "amount": str(self.amount),
            "start_date": self.start_date.isoformat(),
            "frequency": getattr(self.frequency, "value", self.frequency),
            "enabled": self.enabled,
            "auto_renew": self.auto_renew,
        }


@dataclass(frozen=True)
class Occurrence:
    """One concrete charge of a subscription on a calendar date."""
    subscription_id: str
    name: str
    amount: Decimal
    frequency: Frequency
    date: date

    def to_dict(self):
        return {
            "subscription_id": self.subscription_id,
            "name": self.name,
            "amount": str(self.amount),
            "frequency": self.frequency.value,
            "date": self.date.isoformat(),
        }
