"""Playlist service."""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from videotube.errors import InvalidRequest
from videotube.models import Playlist, PlaylistVideo, User, Video
from videotube.services.ownership import get_or_404, get_owned, get_visible_video, visible_videos
from videotube.services.views import compose_playlist


def _playlist_videos(db: Session, playlist_id: str, viewer_id: str) -> List[Video]:
    return (
        db.query(Video)
        .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        .filter(PlaylistVideo.playlist_id == playlist_id)
        .filter(visible_videos(viewer_id))
        .order_by(PlaylistVideo.added_at, Video.id)
        .all()
    )


def _view(db: Session, playlist: Playlist, viewer_id: str) -> Dict:
    """Drafts in the playlist are only listed for their own owner."""
    videos = _playlist_videos(db, playlist.id, viewer_id)
    return compose_playlist(playlist, db.get(User, playlist.owner_id), videos)


def create_playlist(db: Session, user_id: str, name: str, description: Optional[str] = None) -> Dict:
    if not name or not name.strip():
        raise InvalidRequest("Playlist name is required")
    playlist = Playlist(name=name.strip(), description=(description or "").strip(), owner_id=user_id)
    db.add(playlist)
    db.flush()
    return _view(db, playlist, user_id)


def get_user_playlists(db: Session, user_id: str, viewer_id: str) -> List[Dict]:
    get_or_404(db, User, user_id, "user")
    playlists = (
        db.query(Playlist)
        .filter(Playlist.owner_id == user_id)
        .order_by(Playlist.created_at.desc())
        .all()
    )
    return [_view(db, p, viewer_id) for p in playlists]


def get_playlist(db: Session, playlist_id: str, viewer_id: str) -> Dict:
    return _view(db, get_or_404(db, Playlist, playlist_id, "playlist"), viewer_id)


def add_video_to_playlist(db: Session, playlist_id: str, video_id: str, user_id: str) -> Dict:
    playlist = get_owned(db, Playlist, playlist_id, user_id, "playlist")
    get_visible_video(db, video_id, user_id)
    # Adding a video twice leaves a single entry.
    if db.get(PlaylistVideo, (playlist_id, video_id)) is None:
        db.add(PlaylistVideo(playlist_id=playlist_id, video_id=video_id))
        db.flush()
    return _view(db, playlist, user_id)


def remove_video_from_playlist(db: Session, playlist_id: str, video_id: str, user_id: str) -> Dict:
    playlist = get_owned(db, Playlist, playlist_id, user_id, "playlist")
    db.query(PlaylistVideo).filter(
        PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id
    ).delete(synchronize_session=False)
    return _view(db, playlist, user_id)


def update_playlist(
    db: Session,
    playlist_id: str,
    user_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict:
    if not (name and name.strip()) and description is None:
        raise InvalidRequest("Provide a name or description to update")
    playlist = get_owned(db, Playlist, playlist_id, user_id, "playlist")
    if name and name.strip():
        playlist.name = name.strip()
    if description is not None:
        playlist.description = description.strip()
    db.flush()
    return _view(db, playlist, user_id)


def delete_playlist(db: Session, playlist_id: str, user_id: str) -> None:
    playlist = get_owned(db, Playlist, playlist_id, user_id, "playlist")
    db.query(PlaylistVideo).filter(PlaylistVideo.playlist_id == playlist_id).delete(
        synchronize_session=False
    )
    db.delete(playlist)
    db.flush()
