"""Video service: listing, publishing, viewing, updating and deleting videos."""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from videotube.errors import InvalidRequest
from videotube.models import Comment, Like, User, Video, WatchHistory
from videotube.services.cascade import delete_video_cascade
from videotube.services.common import Page, compose_page, paginate
from videotube.services.media import AssetLedger, IncomingFile, MediaStore, store_incoming
from videotube.services.ownership import get_owned, get_visible_video
from videotube.services.views import compose_video_detail, compose_videos, video_fields

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Video.created_at,
    "updated_at": Video.updated_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_videos(
    db: Session,
    viewer_id: str,
    page: int = 1,
    limit: int = 10,
    query: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_type: Optional[str] = None,
    owner_id: Optional[str] = None,
) -> Page:
    """
    List videos with search, owner filter, sorting and pagination.

    Args:
        db: Database session
        viewer_id: User making the request; sees their own unpublished
            videos when filtering on their own id
        page: 1-based page number
        limit: Page size
        query: Case-insensitive substring matched against title or description
        sort_by: One of SORTABLE_FIELDS (default created_at)
        sort_type: "asc" or "desc" (default desc)
        owner_id: Only list videos owned by this user

    Returns:
        Page of video views with owner identity and likers
    """
    sort_key = sort_by or "created_at"
    if sort_key not in SORTABLE_FIELDS:
        raise InvalidRequest(f"Cannot sort videos by '{sort_key}'")
    direction = (sort_type or "desc").lower()
    if direction not in ("asc", "desc"):
        raise InvalidRequest("sortType must be 'asc' or 'desc'")

    q = db.query(Video)
    if owner_id:
        q = q.filter(Video.owner_id == owner_id)
    if owner_id != viewer_id:
        q = q.filter(Video.is_published.is_(True))
    if query and query.strip():
        pattern = f"%{_escape_like(query.strip())}%"
        q = q.filter(or_(
            Video.title.ilike(pattern, escape="\\"),
            Video.description.ilike(pattern, escape="\\"),
        ))

    column = SORTABLE_FIELDS[sort_key]
    q = q.order_by(column.asc() if direction == "asc" else column.desc(), Video.id)

    rows, total = paginate(q, page, limit)
    return compose_page(db, Like.video_id, rows, total, page, limit, compose_videos)


def publish_video(
    db: Session,
    media: MediaStore,
    assets: AssetLedger,
    owner_id: str,
    title: Optional[str],
    description: Optional[str],
    video_file: Optional[IncomingFile],
    thumbnail: Optional[IncomingFile],
    duration: float = 0.0,
) -> Dict[str, Any]:
    """
    Upload the video and thumbnail, then insert the row.

    Uploaded keys go into ``assets`` so the caller can remove them if the
    insert or its commit fails.
    """
    if not title or not title.strip() or not description or not description.strip():
        raise InvalidRequest("Title and description are required")
    if video_file is None:
        raise InvalidRequest("Video file is required")
    if thumbnail is None:
        raise InvalidRequest("Thumbnail is required")
    if not math.isfinite(duration) or duration < 0:
        raise InvalidRequest("Duration must be a finite, non-negative number")

    video_asset = store_incoming(media, video_file, "videos")
    assets.uploaded.append(video_asset.key)
    thumbnail_asset = store_incoming(media, thumbnail, "thumbnails")
    assets.uploaded.append(thumbnail_asset.key)

    video = Video(
        title=title.strip(),
        description=description.strip(),
        video_file=video_asset.url,
        video_file_key=video_asset.key,
        thumbnail=thumbnail_asset.url,
        thumbnail_key=thumbnail_asset.key,
        duration=duration,
        owner_id=owner_id,
    )
    db.add(video)
    db.flush()
    logger.info("User %s published video %s", owner_id, video.id)
    return video_fields(video)


def record_watch(db: Session, user_id: str, video_id: str) -> None:
    """
    Put the video at the top of the user's watch history.

    One entry per (user, video); a repeat view moves its timestamp forward.
    """
    entry = db.get(WatchHistory, (user_id, video_id))
    if entry is not None:
        entry.watched_at = datetime.utcnow()
        return
    try:
        with db.begin_nested():
            db.add(WatchHistory(user_id=user_id, video_id=video_id))
    except IntegrityError:
        # A concurrent view of the same video inserted the entry first.
        logger.warning("Watch history entry for %s/%s already recorded", user_id, video_id)


def view_video(db: Session, video_id: str, viewer_id: str) -> Dict[str, Any]:
    """
    Return a video's detail view, counting the view and recording it in the
    viewer's watch-history.
    """
    video = get_visible_video(db, video_id, viewer_id)

    db.query(Video).filter(Video.id == video_id).update(
        {Video.views: Video.views + 1}, synchronize_session=False
    )
    record_watch(db, viewer_id, video_id)
    db.flush()
    db.refresh(video)

    likes_count = db.query(Like).filter(Like.video_id == video_id).count()
    comments_count = db.query(Comment).filter(Comment.video_id == video_id).count()
    is_liked = (
        db.query(Like).filter(Like.video_id == video_id, Like.liked_by_id == viewer_id).first()
        is not None
    )
    owner = db.get(User, video.owner_id)
    return compose_video_detail(video, owner, likes_count, comments_count, is_liked)


def update_video(
    db: Session,
    media: MediaStore,
    assets: AssetLedger,
    video_id: str,
    user_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    thumbnail: Optional[IncomingFile] = None,
) -> Dict[str, Any]:
    """A replaced thumbnail is only marked stale; it is removed once the change commits."""
    if not (title and title.strip()) and not (description and description.strip()) and thumbnail is None:
        raise InvalidRequest("Provide a title, description or thumbnail to update")

    video = get_owned(db, Video, video_id, user_id, "video")

    if title and title.strip():
        video.title = title.strip()
    if description and description.strip():
        video.description = description.strip()
    if thumbnail is not None:
        asset = store_incoming(media, thumbnail, "thumbnails")
        assets.uploaded.append(asset.key)
        assets.stale.append(video.thumbnail_key)
        video.thumbnail = asset.url
        video.thumbnail_key = asset.key
    db.flush()
    return video_fields(video)


def toggle_publish_status(db: Session, video_id: str, user_id: str) -> Dict[str, Any]:
    video = get_owned(db, Video, video_id, user_id, "video")
    video.is_published = not video.is_published
    db.flush()
    return video_fields(video)


def delete_video(db: Session, media: MediaStore, video_id: str, user_id: str) -> None:
    video = get_owned(db, Video, video_id, user_id, "video")
    delete_video_cascade(db, video, media)
