# videotube/routes/comments.py
"""FastAPI routes for video comments."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from videotube.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import comments as comment_service
from videotube.services.common import parse_id


class CommentBody(BaseModel):
    """Request body for adding or editing a comment."""
    content: Optional[str] = Field(None, description="Comment text")


router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.get("/{video_id}")
def get_video_comments(
    video_id: str,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    """
    Get comments for a video, newest first.

    Each comment carries:
    - owner: public identity of the author
    - likes: identities of users who liked it
    - likes_count: number of likes
    """
    video_id = parse_id(video_id, "video")
    with operation_boundary("fetching video comments"), database.session() as db:
        comments = comment_service.get_video_comments(db, video_id, user_id, page=page, limit=limit)
    return api_response(comments.to_dict(), "Comments fetched successfully")


@router.post("/{video_id}", status_code=201)
def add_comment(
    video_id: str,
    body: CommentBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    video_id = parse_id(video_id, "video")
    with operation_boundary("adding comment"), database.session() as db:
        comment = comment_service.add_comment(db, video_id, user_id, body.content)
    return api_response(comment, "Comment added successfully", status_code=201)


@router.patch("/c/{comment_id}")
def update_comment(
    comment_id: str,
    body: CommentBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    comment_id = parse_id(comment_id, "comment")
    with operation_boundary("updating comment"), database.session() as db:
        comment = comment_service.update_comment(db, comment_id, user_id, body.content)
    return api_response(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}")
def delete_comment(
    comment_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    comment_id = parse_id(comment_id, "comment")
    with operation_boundary("deleting comment"), database.session() as db:
        comment_service.delete_comment(db, comment_id, user_id)
    return api_response(None, "Comment deleted successfully")
