"""
FastAPI routes for the channel dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services.dashboard import get_channel_stats, get_channel_videos


class ChannelStats(BaseModel):
    """Totals for the caller's channel."""

    total_video_views: int = Field(..., description="Sum of views across all videos")
    total_subscribers: int = Field(..., description="Number of subscribers")
    total_videos: int = Field(..., description="Number of uploaded videos")
    total_video_likes: int = Field(..., description="Likes across all videos")
    total_tweets: int = Field(..., description="Number of tweets")


router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats")
def get_channel_stats_endpoint(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    """
    Get channel stats like total video views, total subscribers, total
    videos and total likes for the caller's channel.
    """
    with operation_boundary("fetching channel stats"), database.session() as db:
        stats = ChannelStats(**get_channel_stats(db, user_id))
    return api_response(stats.model_dump(), "Channel stats fetched successfully")


@router.get("/videos")
def get_channel_videos_endpoint(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    """Get every video uploaded by the caller's channel, published or not."""
    with operation_boundary("getting channel videos"), database.session() as db:
        videos: List[dict] = get_channel_videos(db, user_id)
    return api_response(videos, "Channel videos fetched successfully")
