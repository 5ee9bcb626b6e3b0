"""Like toggles and the caller's liked-content listings."""

from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from videotube.models import Comment, Like, Tweet, User, Video
from videotube.services.ownership import get_or_404, get_visible_video, visible_videos
from videotube.services.toggles import ToggleResult, toggle
from videotube.services.views import identity, video_fields


class LikeTarget(str, Enum):
    video = "video"
    comment = "comment"
    tweet = "tweet"


_TARGETS = {
    LikeTarget.video: (Video, "video_id"),
    LikeTarget.comment: (Comment, "comment_id"),
    LikeTarget.tweet: (Tweet, "tweet_id"),
}


def like_dict(like: Optional[Like]) -> Optional[Dict]:
    if like is None:
        return None
    return {
        "id": like.id,
        "video_id": like.video_id,
        "comment_id": like.comment_id,
        "tweet_id": like.tweet_id,
        "liked_by_id": like.liked_by_id,
        "created_at": like.created_at,
    }


def toggle_like(db: Session, user_id: str, target: LikeTarget, target_id: str) -> ToggleResult:
    """Like the target if the user has not liked it yet, otherwise remove the like."""
    model, column = _TARGETS[target]
    if target is LikeTarget.video:
        get_visible_video(db, target_id, user_id)
    else:
        entity = get_or_404(db, model, target_id, target.value)
        if target is LikeTarget.comment:
            get_visible_video(db, entity.video_id, user_id)
    return toggle(db, Like, liked_by_id=user_id, **{column: target_id})


def _owners(db: Session, owner_ids) -> Dict[str, User]:
    if not owner_ids:
        return {}
    return {u.id: u for u in db.query(User).filter(User.id.in_(owner_ids))}


def get_liked_videos(db: Session, user_id: str) -> List[Dict]:
    rows = (
        db.query(Like, Video)
        .join(Video, Like.video_id == Video.id)
        .filter(Like.liked_by_id == user_id)
        .filter(visible_videos(user_id))
        .order_by(Like.created_at.desc())
        .all()
    )
    owners = _owners(db, {video.owner_id for _, video in rows})
    return [
        {"liked_at": like.created_at, "video": {**video_fields(video), "owner": identity(owners.get(video.owner_id))}}
        for like, video in rows
    ]


def get_liked_tweets(db: Session, user_id: str) -> List[Dict]:
    rows = (
        db.query(Like, Tweet)
        .join(Tweet, Like.tweet_id == Tweet.id)
        .filter(Like.liked_by_id == user_id)
        .order_by(Like.created_at.desc())
        .all()
    )
    owners = _owners(db, {tweet.owner_id for _, tweet in rows})
    return [
        {
            "liked_at": like.created_at,
            "tweet": {
                "id": tweet.id,
                "content": tweet.content,
                "created_at": tweet.created_at,
                "owner": identity(owners.get(tweet.owner_id)),
            },
        }
        for like, tweet in rows
    ]


def get_liked_comments(db: Session, user_id: str) -> List[Dict]:
    rows = (
        db.query(Like, Comment)
        .join(Comment, Like.comment_id == Comment.id)
        .join(Video, Comment.video_id == Video.id)
        .filter(Like.liked_by_id == user_id)
        .filter(visible_videos(user_id))
        .order_by(Like.created_at.desc())
        .all()
    )
    owners = _owners(db, {comment.owner_id for _, comment in rows})
    return [
        {
            "liked_at": like.created_at,
            "comment": {
                "id": comment.id,
                "content": comment.content,
                "video_id": comment.video_id,
                "created_at": comment.created_at,
                "owner": identity(owners.get(comment.owner_id)),
            },
        }
        for like, comment in rows
    ]
