# videotube/services/comments.py
"""Comment service for video comment threads."""

from typing import Dict

from sqlalchemy.orm import Session

from videotube.errors import InvalidRequest
from videotube.models import Comment, Like
from videotube.services.cascade import delete_comment_cascade
from videotube.services.common import Page, compose_page, paginate
from videotube.services.ownership import get_owned, get_visible_video
from videotube.services.views import compose_comments


def _clean_content(content: str) -> str:
    if not content or not content.strip():
        raise InvalidRequest("Content is required")
    return content.strip()


def get_video_comments(db: Session, video_id: str, viewer_id: str, page: int = 1, limit: int = 10) -> Page:
    """
    Get a page of comments for a video, newest first.

    Args:
        db: Database session
        video_id: ID of the video
        viewer_id: User making the request
        page: 1-based page number
        limit: Page size

    Returns:
        Page of comment views with owner identity and likers
    """
    get_visible_video(db, video_id, viewer_id)
    query = (
        db.query(Comment)
        .filter(Comment.video_id == video_id)
        .order_by(Comment.created_at.desc(), Comment.id)
    )
    rows, total = paginate(query, page, limit)
    return compose_page(db, Like.comment_id, rows, total, page, limit, compose_comments)


def add_comment(db: Session, video_id: str, user_id: str, content: str) -> Dict:
    content = _clean_content(content)
    get_visible_video(db, video_id, user_id)
    comment = Comment(content=content, video_id=video_id, owner_id=user_id)
    db.add(comment)
    db.flush()
    return _comment_dict(comment)


def update_comment(db: Session, comment_id: str, user_id: str, content: str) -> Dict:
    content = _clean_content(content)
    comment = get_owned(db, Comment, comment_id, user_id, "comment")
    comment.content = content
    db.flush()
    return _comment_dict(comment)


def delete_comment(db: Session, comment_id: str, user_id: str) -> None:
    comment = get_owned(db, Comment, comment_id, user_id, "comment")
    delete_comment_cascade(db, comment)


def _comment_dict(comment: Comment) -> Dict:
    return {
        "id": comment.id,
        "content": comment.content,
        "video_id": comment.video_id,
        "owner_id": comment.owner_id,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
