# videotube/services/dashboard.py
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from videotube.models import Like, Subscription, Tweet, Video
from videotube.services.views import video_fields


def get_channel_stats(session: Session, channel_id: str) -> Dict[str, Any]:
    """
    Aggregate totals for one channel.

    Args:
        session: Database session
        channel_id: User id of the channel owner

    Returns:
        Dict with total_video_views, total_subscribers, total_videos,
        total_video_likes and total_tweets
    """
    total_views, total_videos = (
        session.query(func.coalesce(func.sum(Video.views), 0), func.count(Video.id))
        .filter(Video.owner_id == channel_id)
        .one()
    )
    total_subscribers = (
        session.query(func.count(Subscription.id))
        .filter(Subscription.channel_id == channel_id)
        .scalar()
    )
    total_video_likes = (
        session.query(func.count(Like.id))
        .join(Video, Like.video_id == Video.id)
        .filter(Video.owner_id == channel_id)
        .scalar()
    )
    total_tweets = session.query(func.count(Tweet.id)).filter(Tweet.owner_id == channel_id).scalar()

    return {
        "total_video_views": int(total_views or 0),
        "total_subscribers": total_subscribers or 0,
        "total_videos": total_videos or 0,
        "total_video_likes": total_video_likes or 0,
        "total_tweets": total_tweets or 0,
    }


def get_channel_videos(session: Session, channel_id: str) -> List[Dict[str, Any]]:
    """All of a channel's videos, published or not, newest first, with like counts."""
    rows = (
        session.query(Video, func.count(Like.id))
        .outerjoin(Like, Like.video_id == Video.id)
        .filter(Video.owner_id == channel_id)
        .group_by(Video.id)
        .order_by(Video.created_at.desc())
        .all()
    )
    return [{**video_fields(video), "likes_count": likes} for video, likes in rows]
