"""
Health check endpoints for monitoring system status.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from videotube.db import Database
from videotube.deps import get_database, get_media_store
from videotube.errors import MediaStoreError
from videotube.models import Comment, Tweet, User, Video
from videotube.services.media import MediaStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def check_database_health(database: Database) -> Dict[str, str]:
    """
    Check database connectivity and health.

    Returns:
        Dict with status and optional error details
    """
    try:
        if database.ping():
            return {"status": "ok"}
        return {"status": "down", "error": "Unexpected query result"}
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return {"status": "down", "error": f"Database error: {str(e)}"}


def check_media_health(media: MediaStore) -> Dict[str, str]:
    """
    Check that the media bucket is reachable.

    Returns:
        Dict with status and optional error details
    """
    try:
        if media.ping():
            return {"status": "ok"}
        return {"status": "down", "error": "Media bucket does not exist"}
    except MediaStoreError as e:
        logger.warning("Media store health check failed: %s", e)
        return {"status": "down", "error": f"Media store error: {str(e)}"}


@router.get("/")
def health_check(
    database: Database = Depends(get_database),
    media: MediaStore = Depends(get_media_store),
) -> Dict[str, Any]:
    """
    Comprehensive health check endpoint.

    Returns:
        Dict containing:
        - status: "ok" | "degraded" | "down"
        - db: database health status
        - media: media store health status
        - version: API version
        - timestamp: current UTC timestamp
    """
    db_health = check_database_health(database)
    media_health = check_media_health(media)

    overall_status = "ok"
    if db_health["status"] == "down":
        overall_status = "down"  # Database is critical
    elif media_health["status"] == "down":
        overall_status = "degraded"  # reads still work without the media store

    return {
        "status": overall_status,
        "db": db_health,
        "media": media_health,
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/db")
def database_health(database: Database = Depends(get_database)) -> Dict[str, Any]:
    """
    Database-specific health check.

    Returns:
        Dict with detailed database health information
    """
    health_status = check_database_health(database)

    try:
        with database.session() as db:
            health_status.update({
                "tables": {
                    "users": db.query(func.count(User.id)).scalar(),
                    "videos": db.query(func.count(Video.id)).scalar(),
                    "comments": db.query(func.count(Comment.id)).scalar(),
                    "tweets": db.query(func.count(Tweet.id)).scalar(),
                },
                "timestamp": datetime.utcnow().isoformat(),
            })
    except SQLAlchemyError as e:
        health_status["error"] = f"Extended check failed: {str(e)}"

    return health_status


@router.get("/media")
def media_health(media: MediaStore = Depends(get_media_store)) -> Dict[str, Any]:
    """Media-store-specific health check."""
    health_status = check_media_health(media)
    health_status["timestamp"] = datetime.utcnow().isoformat()
    return health_status
