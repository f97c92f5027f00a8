"""
Validation boundary: turns raw payloads into Subscription records.

The recurrence engine assumes validated input; everything that can be
wrong with a user-supplied record is caught here.
"""
from errors import InvalidDate, InvalidSubscription, UnsupportedFrequency
from helpers.normalize import new_subscription_id, normalize_payload
from models.subscription import Subscription
from services.recurrence_service import coerce_frequency
from utils.dates import to_date
from utils.money import MAX_AMOUNT, parse_money


def validate_subscription(payload: dict) -> list:
    """
    Return the names of invalid fields (empty list when valid).

    Field names follow the client payload: ``name``, ``amount``,
    ``startDate``, ``frequency``.
    """
    data = normalize_payload(payload)
    errors = []

    name = data.get("name")
    if not isinstance(name, str) or not name:
        errors.append("name")

    try:
        amount = parse_money(data.get("amount"))
        if amount <= 0 or amount >= MAX_AMOUNT:
            errors.append("amount")
    except ValueError:
        errors.append("amount")

    try:
        to_date(data.get("start_date"))
    except InvalidDate:
        errors.append("startDate")

    try:
        coerce_frequency(data.get("frequency"))
    except UnsupportedFrequency:
        errors.append("frequency")

    return errors


def build_subscription(payload: dict, subscription_id=None) -> Subscription:
    """Validate ``payload`` and return a Subscription.

    Raises InvalidSubscription listing every bad field at once.
    """
    errors = validate_subscription(payload)
    if errors:
        raise InvalidSubscription(errors)

    data = normalize_payload(payload)
    return Subscription(
        id=subscription_id or data.get("id") or new_subscription_id(),
        name=data["name"],
        amount=parse_money(data["amount"]),
        start_date=to_date(data["start_date"]),
        frequency=coerce_frequency(data["frequency"]),
        enabled=bool(data["enabled"]),
        auto_renew=bool(data["auto_renew"]),
    )
