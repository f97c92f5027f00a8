"""
Error taxonomy for the subscription tracker.

All errors are ValueErrors so callers that only care about "bad input"
can catch the builtin.
"""


class SubscriptionError(ValueError):
    pass


class InvalidDate(SubscriptionError):
    """A value could not be read as a calendar date."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class UnsupportedFrequency(SubscriptionError):
    """Frequency is not one of weekly/monthly/quarterly/yearly."""

    def __init__(self, frequency):
        self.frequency = frequency
        super().__init__(f"Unsupported frequency: {frequency!r}")


class InvalidSubscription(SubscriptionError):
    """Raised at the input boundary; ``errors`` lists the offending fields."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(f"Invalid subscription fields: {', '.join(self.errors)}")
