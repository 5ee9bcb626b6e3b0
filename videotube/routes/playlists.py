"""FastAPI routes for playlists."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import playlists as playlist_service
from videotube.services.common import parse_id


class PlaylistBody(BaseModel):
    """Request body for creating or updating a playlist."""
    name: Optional[str] = Field(None, description="Playlist name")
    description: Optional[str] = Field(None, description="Playlist description")


router = APIRouter(prefix="/api/v1/playlist", tags=["playlists"])


@router.post("/", status_code=201)
def create_playlist(
    body: PlaylistBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("creating playlist"), database.session() as db:
        playlist = playlist_service.create_playlist(db, user_id, body.name, body.description)
    return api_response(playlist, "Playlist created successfully", status_code=201)


@router.get("/user/{owner_id}")
def get_user_playlists(
    owner_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    owner_id = parse_id(owner_id, "user")
    with operation_boundary("fetching user playlists"), database.session() as db:
        playlists = playlist_service.get_user_playlists(db, owner_id, user_id)
    return api_response(playlists, "User playlists fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}")
def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    video_id = parse_id(video_id, "video")
    playlist_id = parse_id(playlist_id, "playlist")
    with operation_boundary("adding video to playlist"), database.session() as db:
        playlist = playlist_service.add_video_to_playlist(db, playlist_id, video_id, user_id)
    return api_response(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}")
def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    video_id = parse_id(video_id, "video")
    playlist_id = parse_id(playlist_id, "playlist")
    with operation_boundary("removing video from playlist"), database.session() as db:
        playlist = playlist_service.remove_video_from_playlist(db, playlist_id, video_id, user_id)
    return api_response(playlist, "Video removed from playlist successfully")


@router.get("/{playlist_id}")
def get_playlist_by_id(
    playlist_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    playlist_id = parse_id(playlist_id, "playlist")
    with operation_boundary("fetching playlist"), database.session() as db:
        playlist = playlist_service.get_playlist(db, playlist_id, user_id)
    return api_response(playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}")
def update_playlist(
    playlist_id: str,
    body: PlaylistBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    playlist_id = parse_id(playlist_id, "playlist")
    with operation_boundary("updating playlist"), database.session() as db:
        playlist = playlist_service.update_playlist(
            db, playlist_id, user_id, name=body.name, description=body.description
        )
    return api_response(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}")
def delete_playlist(
    playlist_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    playlist_id = parse_id(playlist_id, "playlist")
    with operation_boundary("deleting playlist"), database.session() as db:
        playlist_service.delete_playlist(db, playlist_id, user_id)
    return api_response(None, "Playlist deleted successfully")
