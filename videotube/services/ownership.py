from typing import Optional, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Session

from videotube.errors import Forbidden, NotFound
from videotube.models import Video

T = TypeVar("T")


def assert_owner(entity: Optional[T], acting_user_id: str, label: str) -> T:
    """Return ``entity`` if ``acting_user_id`` owns it; NotFound/Forbidden otherwise."""
    if entity is None:
        raise NotFound(f"{label.capitalize()} not found")
    if entity.owner_id != acting_user_id:
        raise Forbidden(f"You are not the owner of this {label}")
    return entity


def get_owned(db: Session, model: Type[T], entity_id: str, acting_user_id: str, label: str) -> T:
    return assert_owner(db.get(model, entity_id), acting_user_id, label)


def get_or_404(db: Session, model: Type[T], entity_id: str, label: str) -> T:
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFound(f"{label.capitalize()} not found")
    return entity


def visible_videos(viewer_id: str):
    """Filter clause: published videos plus the viewer's own drafts."""
    return or_(Video.is_published.is_(True), Video.owner_id == viewer_id)


def get_visible_video(db: Session, video_id: str, viewer_id: str) -> Video:
    """An unpublished video does not exist for anyone but its owner."""
    video = db.get(Video, video_id)
    if video is None or (not video.is_published and video.owner_id != viewer_id):
        raise NotFound("Video not found")
    return video
