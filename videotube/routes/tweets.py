from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from videotube.db import Database
from videotube.deps import get_current_user_id, get_database
from videotube.errors import operation_boundary
from videotube.responses import api_response
from videotube.services import tweets as tweet_service
from videotube.services.common import parse_id


class TweetBody(BaseModel):
    content: Optional[str] = Field(None, description="Tweet text")


router = APIRouter(prefix="/api/v1/tweets", tags=["tweets"])


@router.post("/", status_code=201)
def create_tweet(
    body: TweetBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("creating tweet"), database.session() as db:
        tweet = tweet_service.create_tweet(db, user_id, body.content)
    return api_response(tweet, "Tweet created successfully", status_code=201)


@router.get("/")
def get_all_tweets(
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    with operation_boundary("fetching all tweets"), database.session() as db:
        tweets = tweet_service.get_all_tweets(db)
    return api_response(tweets, "All tweets fetched successfully")


@router.get("/user/{owner_id}")
def get_user_tweets(
    owner_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    owner_id = parse_id(owner_id, "user")
    with operation_boundary("fetching user tweets"), database.session() as db:
        tweets = tweet_service.get_user_tweets(db, owner_id)
    return api_response(tweets, "User tweets fetched successfully")


@router.patch("/{tweet_id}")
def update_tweet(
    tweet_id: str,
    body: TweetBody,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    tweet_id = parse_id(tweet_id, "tweet")
    with operation_boundary("updating tweet"), database.session() as db:
        tweet = tweet_service.update_tweet(db, tweet_id, user_id, body.content)
    return api_response(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}")
def delete_tweet(
    tweet_id: str,
    user_id: str = Depends(get_current_user_id),
    database: Database = Depends(get_database),
):
    tweet_id = parse_id(tweet_id, "tweet")
    with operation_boundary("deleting tweet"), database.session() as db:
        tweet_service.delete_tweet(db, tweet_id, user_id)
    return api_response(None, "Tweet deleted successfully")
