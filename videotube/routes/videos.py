"""FastAPI routes for videos."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from videotube.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from videotube.db import Database
from videotube.deps import get_current_user_id, get_database, get_media_store
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import videos as video_service
from videotube.services.common import parse_id
from videotube.services.media import IncomingFile, MediaStore, track_assets

router = APIRouter(prefix="/api/v1/videos", tags=["videos"])


def _incoming(upload: Optional[UploadFile]) -> Optional[IncomingFile]:
    if upload is None or not upload.filename:
        return None
    return IncomingFile(stream=upload.file, filename=upload.filename)


@router.get("/")
def get_all_videos(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    query: Optional[str] = Query(None, description="Substring matched against title or description"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_type: Optional[str] = Query(None, alias="sortType"),
    owner_id: Optional[str] = Query(None, alias="userId"),
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    """
    List published videos, newest first unless sortBy/sortType say otherwise.

    Filtering on your own userId also returns your unpublished videos.
    """
    if owner_id:
        owner_id = parse_id(owner_id, "user")
    with operation_boundary("fetching videos"), database.session() as db:
        result = video_service.list_videos(
            db,
            viewer_id=user_id,
            page=page,
            limit=limit,
            query=query,
            sort_by=sort_by,
            sort_type=sort_type,
            owner_id=owner_id,
        )
    return api_response(result.to_dict(), "Videos fetched successfully")


@router.post("/", status_code=201)
def publish_a_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    duration: float = Form(0.0),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
    media: MediaStore = Depends(get_media_store),
):
    with track_assets(media) as assets, operation_boundary("publishing video"), database.session() as db:
        video = video_service.publish_video(
            db,
            media,
            assets,
            owner_id=user_id,
            title=title,
            description=description,
            video_file=_incoming(video_file),
            thumbnail=_incoming(thumbnail),
            duration=duration,
        )
    return api_response(video, "Video published successfully", status_code=201)


@router.get("/{video_id}")
def get_video_by_id(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    video_id = parse_id(video_id, "video")
    with operation_boundary("fetching video"), database.session() as db:
        video = video_service.view_video(db, video_id, user_id)
    return api_response(video, "Video found successfully")


@router.patch("/toggle/publish/{video_id}")
def toggle_publish_status(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    video_id = parse_id(video_id, "video")
    with operation_boundary("updating publish status"), database.session() as db:
        video = video_service.toggle_publish_status(db, video_id, user_id)
    return api_response(video, "Video publish status updated")


@router.patch("/{video_id}")
def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
    media: MediaStore = Depends(get_media_store),
):
    video_id = parse_id(video_id, "video")
    with track_assets(media) as assets, operation_boundary("updating video"), database.session() as db:
        video = video_service.update_video(
            db, media, assets, video_id, user_id,
            title=title, description=description, thumbnail=_incoming(thumbnail),
        )
    return api_response(video, "Video updated successfully")


@router.delete("/{video_id}")
def delete_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
    media: MediaStore = Depends(get_media_store),
):
    video_id = parse_id(video_id, "video")
    with operation_boundary("deleting video"), database.session() as db:
        video_service.delete_video(db, media, video_id, user_id)
    return api_response(None, "Video deleted successfully")
