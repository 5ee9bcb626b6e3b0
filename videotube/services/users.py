import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from videotube.errors import InvalidRequest, NotFound
from videotube.models import Subscription, User, Video, WatchHistory
from videotube.services.ownership import visible_videos
from videotube.services.views import identity, user_profile, video_fields

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    username: str,
    email: str,
    full_name: str,
    avatar: Optional[str] = None,
    cover_image: Optional[str] = None,
) -> Dict:
    fields = [username, email, full_name]
    if any(not f or not f.strip() for f in fields):
        raise InvalidRequest("Username, email and full name are required")
    username = username.strip().lower()
    email = email.strip().lower()

    taken = db.query(User).filter(or_(User.username == username, User.email == email)).first()
    if taken is not None:
        raise InvalidRequest("User with this username or email already exists")

    user = User(
        username=username,
        email=email,
        full_name=full_name.strip(),
        avatar=avatar,
        cover_image=cover_image,
    )
    db.add(user)
    db.flush()
    logger.info("Registered user %s (%s)", user.id, username)
    return user_profile(user)


def get_current_user(db: Session, user_id: str) -> Dict:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user_profile(user)


def get_channel_profile(db: Session, username: str, viewer_id: str) -> Dict:
    if not username or not username.strip():
        raise InvalidRequest("Username is missing")
    channel = db.query(User).filter(User.username == username.strip().lower()).first()
    if channel is None:
        raise NotFound("Channel does not exist")

    subscribers = (
        db.query(func.count(Subscription.id)).filter(Subscription.channel_id == channel.id).scalar()
    )
    subscribed_to = (
        db.query(func.count(Subscription.id)).filter(Subscription.subscriber_id == channel.id).scalar()
    )
    is_subscribed = (
        db.query(Subscription)
        .filter(Subscription.channel_id == channel.id, Subscription.subscriber_id == viewer_id)
        .first()
        is not None
    )
    return {
        **user_profile(channel),
        "subscribers_count": subscribers,
        "channels_subscribed_to_count": subscribed_to,
        "is_subscribed": is_subscribed,
    }


def get_watch_history(db: Session, user_id: str) -> List[Dict]:
    rows = (
        db.query(Video, WatchHistory.watched_at, User)
        .join(WatchHistory, WatchHistory.video_id == Video.id)
        .join(User, User.id == Video.owner_id)
        .filter(WatchHistory.user_id == user_id)
        .filter(visible_videos(user_id))
        .order_by(WatchHistory.watched_at.desc())
        .all()
    )
    return [
        {**video_fields(video), "owner": identity(owner), "watched_at": watched_at}
        for video, watched_at, owner in rows
    ]
