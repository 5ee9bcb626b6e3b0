"""FastAPI routes for like toggles and liked-content listings."""

from fastapi import APIRouter, Depends

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import likes as like_service
from videotube.services.common import parse_id
from videotube.services.likes import LikeTarget

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


def _toggle(database: Database, user_id: str, target: LikeTarget, raw_id: str):
    target_id = parse_id(raw_id, target.value)
    with operation_boundary(f"toggling {target.value} like"), database.session() as db:
        result = like_service.toggle_like(db, user_id, target, target_id)
        like = like_service.like_dict(result.record)
    label = target.value.capitalize()
    if result.added:
        return api_response(like, f"{label} liked successfully", status_code=201)
    return api_response(None, f"{label} unliked successfully")


@router.post("/toggle/v/{video_id}")
def toggle_video_like(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    return _toggle(database, user_id, LikeTarget.video, video_id)


@router.post("/toggle/c/{comment_id}")
def toggle_comment_like(
    comment_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    return _toggle(database, user_id, LikeTarget.comment, comment_id)


@router.post("/toggle/t/{tweet_id}")
def toggle_tweet_like(
    tweet_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    return _toggle(database, user_id, LikeTarget.tweet, tweet_id)


@router.get("/videos")
def get_liked_videos(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("getting liked videos"), database.session() as db:
        liked = like_service.get_liked_videos(db, user_id)
    return api_response(liked, "Liked videos retrieved successfully")


@router.get("/tweets")
def get_liked_tweets(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("getting liked tweets"), database.session() as db:
        liked = like_service.get_liked_tweets(db, user_id)
    return api_response(liked, "Liked tweets retrieved successfully")


@router.get("/comments")
def get_liked_comments(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("getting liked comments"), database.session() as db:
        liked = like_service.get_liked_comments(db, user_id)
    return api_response(liked, "Liked comments retrieved successfully")
