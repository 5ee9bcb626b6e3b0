from typing import Optional

from fastapi import Depends, Header, Request

from videotube.db import Database
from videotube.errors import InvalidRequest, Unauthorized
from videotube.models import User
from videotube.services.common import parse_id
from videotube.services.media import MediaStore


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    database: Database = Depends(get_database),
) -> str:
    """Resolve the caller from the X-User-Id header set by the upstream auth layer."""
    if not x_user_id:
        raise Unauthorized("Missing X-User-Id header")
    try:
        user_id = parse_id(x_user_id, "user")
    except InvalidRequest:
        raise Unauthorized("Invalid user id")
    with database.session() as db:
        if db.get(User, user_id) is None:
            raise Unauthorized("Invalid user id")
    return user_id
