from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import users as user_service


class RegisterBody(BaseModel):
    username: Optional[str] = Field(None, description="Unique handle, stored lowercase")
    email: Optional[str] = Field(None, description="Unique email address")
    full_name: Optional[str] = Field(None, description="Display name")
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    cover_image: Optional[str] = Field(None, description="Cover image URL")


router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/register", status_code=201)
def register_user(body: RegisterBody, database: Database = Depends(get_database)):
    with operation_boundary("registering user"), database.session() as db:
        user = user_service.register_user(
            db,
            username=body.username,
            email=body.email,
            full_name=body.full_name,
            avatar=body.avatar,
            cover_image=body.cover_image,
        )
    return api_response(user, "User registered successfully", status_code=201)


@router.get("/current-user")
def get_current_user(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("fetching current user"), database.session() as db:
        user = user_service.get_current_user(db, user_id)
    return api_response(user, "Current user fetched successfully")


@router.get("/c/{username}")
def get_channel_profile(
    username: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("fetching channel profile"), database.session() as db:
        channel = user_service.get_channel_profile(db, username, user_id)
    return api_response(channel, "User channel fetched successfully")


@router.get("/history")
def get_watch_history(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("fetching watch history"), database.session() as db:
        history = user_service.get_watch_history(db, user_id)
    return api_response(history, "Watch history fetched successfully")
