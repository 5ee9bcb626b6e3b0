from fastapi import APIRouter, Depends

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import subscriptions as subscription_service
from videotube.services.common import parse_id

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


@router.post("/c/{channel_id}")
def toggle_subscription(
    channel_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("toggling the subscription"), database.session() as db:
        result = subscription_service.toggle_subscription(db, user_id, channel_id)
        subscription = (
            subscription_service.subscription_dict(result.record) if result.added else None
        )
    if result.added:
        return api_response(subscription, "Subscribed to the channel successfully", status_code=201)
    return api_response(None, "Unsubscribed from the channel successfully")


@router.get("/c/{channel_id}")
def get_channel_subscribers(
    channel_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    channel_id = parse_id(channel_id, "channel")
    with operation_boundary("fetching subscribers"), database.session() as db:
        subscribers = subscription_service.get_channel_subscribers(db, channel_id, user_id)
    return api_response(subscribers, "Channel subscribers fetched successfully")


@router.get("/u/{subscriber_id}")
def get_subscribed_channels(
    subscriber_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    subscriber_id = parse_id(subscriber_id, "subscriber")
    with operation_boundary("fetching subscribed channels"), database.session() as db:
        channels = subscription_service.get_subscribed_channels(db, subscriber_id)
    return api_response(channels, "Subscribed channels fetched successfully")
