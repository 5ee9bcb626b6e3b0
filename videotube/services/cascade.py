"""
Cascade deletes for videos, comments and tweets.

All statements run in the caller's session, so a failure at any step rolls
back the whole delete and leaves the parent visible for a retry. The parent
row is always removed last.
"""

import logging

from sqlalchemy.orm import Session

from videotube.models import Comment, Like, PlaylistVideo, Tweet, Video, WatchHistory
from videotube.services.media import MediaStore

logger = logging.getLogger(__name__)


def delete_comment_cascade(db: Session, comment: Comment) -> None:
    db.query(Like).filter(Like.comment_id == comment.id).delete(synchronize_session=False)
    db.delete(comment)
    db.flush()


def delete_tweet_cascade(db: Session, tweet: Tweet) -> None:
    db.query(Like).filter(Like.tweet_id == tweet.id).delete(synchronize_session=False)
    db.delete(tweet)
    db.flush()


def delete_video_cascade(db: Session, video: Video, media: MediaStore) -> None:
    video_likes = db.query(Like).filter(Like.video_id == video.id).delete(synchronize_session=False)

    comment_ids = [row.id for row in db.query(Comment.id).filter(Comment.video_id == video.id)]
    comment_likes = 0
    if comment_ids:
        comment_likes = (
            db.query(Like).filter(Like.comment_id.in_(comment_ids)).delete(synchronize_session=False)
        )
        db.query(Comment).filter(Comment.id.in_(comment_ids)).delete(synchronize_session=False)

    db.query(PlaylistVideo).filter(PlaylistVideo.video_id == video.id).delete(synchronize_session=False)
    db.query(WatchHistory).filter(WatchHistory.video_id == video.id).delete(synchronize_session=False)

    media.delete(video.video_file_key)
    media.delete(video.thumbnail_key)

    db.delete(video)
    db.flush()
    logger.info(
        "Deleted video %s with %d comments, %d video likes, %d comment likes",
        video.id, len(comment_ids), video_likes, comment_likes,
    )
