from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from errors import InvalidSubscription
from services.subscription_service import (
    create_subscription,
    get_subscription,
    import_example_subscriptions,
    list_subscription_overviews,
    remove_subscription,
    replace_subscription,
)

router = APIRouter()


class SubscriptionPayload(BaseModel):
    """Raw subscription form; field checks happen in the validation service."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    amount: Any = None
    start_date: Any = Field(None, alias="startDate")
    frequency: Optional[str] = None
    enabled: bool = True
    auto_renew: bool = Field(True, alias="autoRenew")


def _invalid(exc: InvalidSubscription):
    return HTTPException(status_code=422, detail={"errors": exc.errors})


@router.get("/subscriptions")
def list_subscriptions_route(search: Optional[str] = Query(None)):
    overviews = list_subscription_overviews(search=search)
    return {
        "count": len(overviews),
        "subscriptions": [o.to_dict() for o in overviews]
    }


@router.post("/subscriptions/import-examples")
def import_examples():
    created = import_example_subscriptions()
    return {
        "imported": len(created),
        "subscriptions": [s.to_dict() for s in created]
    }


@router.get("/subscriptions/{subscription_id}")
def get_subscription_route(subscription_id: str):
    subscription = get_subscription(subscription_id)
    if subscription is None:
        raise HTTPException(status_code=404, detail="Subscription not found")
    return subscription.to_dict()


@router.post("/subscriptions", status_code=201)
def create_subscription_route(payload: SubscriptionPayload):
    try:
        subscription = create_subscription(payload.model_dump())
    except InvalidSubscription as e:
        raise _invalid(e)
    except ValueError as e:
        # duplicate id
        raise HTTPException(status_code=409, detail=str(e))
    return subscription.to_dict()


@router.put("/subscriptions/{subscription_id}")
def replace_subscription_route(subscription_id: str, payload: SubscriptionPayload):
    try:
        subscription = replace_subscription(subscription_id, payload.model_dump())
    except InvalidSubscription as e:
        raise _invalid(e)
    if subscription is None:
        raise HTTPException(status_code=404, detail="Subscription not found")
    return subscription.to_dict()


@router.delete("/subscriptions/{subscription_id}")
def delete_subscription_route(subscription_id: str):
    if not remove_subscription(subscription_id):
        raise HTTPException(status_code=404, detail="Subscription not found")
    return {"status": "subscription deleted", "id": subscription_id}
