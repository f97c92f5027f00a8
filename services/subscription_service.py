import logging

from db import get_db
from repositories.subscriptions_repository import (
    delete_subscription as repo_delete_subscription,
    get_all_subscriptions as repo_get_all_subscriptions,
    get_subscription_by_id as repo_get_subscription_by_id,
    insert_subscription as repo_insert_subscription,
    update_subscription as repo_update_subscription,
)
from models.projection_dto import SubscriptionOverview
from services.forecast_service import next_charge
from services.validation_service import build_subscription
from utils.dates import today

logger = logging.getLogger(__name__)

EXAMPLE_SUBSCRIPTIONS = [
    {"name": "Streaming Plus", "amount": "12.99", "frequency": "monthly"},
    {"name": "Pro Cloud", "amount": "99.00", "frequency": "yearly"},
]


def list_subscriptions(search=None):
    """Return subscriptions sorted by name, optionally filtered by name.

    Opens and closes a database connection on the caller's behalf.
    """
    conn = get_db()
    try:
        return repo_get_all_subscriptions(conn, search=search)
    finally:
        conn.close()


def get_subscription(subscription_id):
    conn = get_db()
    try:
        return repo_get_subscription_by_id(conn, subscription_id)
    finally:
        conn.close()


def list_subscription_overviews(search=None, clock=None):
    """Subscriptions with their next charge date and days until it."""
    as_of = today(clock)
    overviews = []
    for subscription in list_subscriptions(search=search):
        charge = next_charge(subscription, clock=lambda: as_of)
        overviews.append(SubscriptionOverview(
            subscription=subscription,
            next_charge=charge,
            days_until=(charge - as_of).days if charge else None,
        ))
    return overviews


def create_subscription(payload):
    """Validate a raw payload and store it.

    Raises InvalidSubscription when the payload is rejected.
    """
    subscription = build_subscription(payload)
    conn = get_db()
    try:
        repo_insert_subscription(conn, subscription)
    finally:
        conn.close()
    logger.info(f"Subscription {subscription.id} created ({subscription.name})")
    return subscription


def replace_subscription(subscription_id, payload):
    """Validate and overwrite an existing subscription.

    Returns None when no subscription has that id.
    """
    subscription = build_subscription(payload, subscription_id=subscription_id)
    conn = get_db()
    try:
        if not repo_update_subscription(conn, subscription):
            return None
    finally:
        conn.close()
    logger.info(f"Subscription {subscription_id} updated")
    return subscription


def remove_subscription(subscription_id):
    conn = get_db()
    try:
        removed = repo_delete_subscription(conn, subscription_id)
    finally:
        conn.close()
    if removed:
        logger.info(f"Subscription {subscription_id} deleted")
    return removed


def import_example_subscriptions(clock=None):
    """Append the two example subscriptions, anchored today."""
    start = today(clock).isoformat()
    return [
        create_subscription({**example, "start_date": start})
        for example in EXAMPLE_SUBSCRIPTIONS
    ]
