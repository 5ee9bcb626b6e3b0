from typing import Dict, List

from sqlalchemy.orm import Session

from videotube.errors import Forbidden, InvalidRequest
from videotube.models import Subscription, User
from videotube.services.common import parse_id
from videotube.services.ownership import get_or_404
from videotube.services.toggles import ToggleResult, toggle
from videotube.services.views import identity


def toggle_subscription(db: Session, subscriber_id: str, raw_channel_id: str) -> ToggleResult:
    """
    Subscribe to or unsubscribe from a channel.

    Self-subscription is rejected before the channel id is even parsed,
    so it fails the same way whatever the channel looks like.
    """
    if (raw_channel_id or "").strip().lower() == subscriber_id:
        raise InvalidRequest("You cannot subscribe to your own channel")
    channel_id = parse_id(raw_channel_id, "channel")
    get_or_404(db, User, channel_id, "channel")
    return toggle(db, Subscription, subscriber_id=subscriber_id, channel_id=channel_id)


def subscription_dict(subscription: Subscription) -> Dict:
    return {
        "id": subscription.id,
        "subscriber_id": subscription.subscriber_id,
        "channel_id": subscription.channel_id,
        "created_at": subscription.created_at,
    }


def get_channel_subscribers(db: Session, channel_id: str, user_id: str) -> List[Dict]:
    """List who subscribes to ``channel_id``; only the channel itself may look."""
    if channel_id != user_id:
        raise Forbidden("You are not authorized to view subscribers of this channel")
    rows = (
        db.query(User, Subscription.created_at)
        .join(Subscription, Subscription.subscriber_id == User.id)
        .filter(Subscription.channel_id == channel_id)
        .order_by(Subscription.created_at.desc())
        .all()
    )
    return [{**identity(user), "subscribed_at": since} for user, since in rows]


def get_subscribed_channels(db: Session, subscriber_id: str) -> List[Dict]:
    get_or_404(db, User, subscriber_id, "user")
    rows = (
        db.query(User, Subscription.created_at)
        .join(Subscription, Subscription.channel_id == User.id)
        .filter(Subscription.subscriber_id == subscriber_id)
        .order_by(Subscription.created_at.desc())
        .all()
    )
    return [{**identity(user), "subscribed_at": since} for user, since in rows]
