from typing import Dict, List

from sqlalchemy.orm import Session

from videotube.errors import InvalidRequest
from videotube.models import Like, Tweet, User
from videotube.services.cascade import delete_tweet_cascade
from videotube.services.common import load_likes_and_users
from videotube.services.ownership import get_or_404, get_owned
from videotube.services.views import compose_tweets


def _clean_content(content: str) -> str:
    if not content or not content.strip():
        raise InvalidRequest("Content is required")
    return content.strip()


def _tweet_dict(tweet: Tweet) -> Dict:
    return {
        "id": tweet.id,
        "content": tweet.content,
        "owner_id": tweet.owner_id,
        "created_at": tweet.created_at,
        "updated_at": tweet.updated_at,
    }


def _compose(db: Session, tweets: List[Tweet]) -> List[Dict]:
    likes, users = load_likes_and_users(db, Like.tweet_id, tweets)
    return compose_tweets(tweets, users, likes)


def create_tweet(db: Session, user_id: str, content: str) -> Dict:
    tweet = Tweet(content=_clean_content(content), owner_id=user_id)
    db.add(tweet)
    db.flush()
    return _tweet_dict(tweet)


def get_user_tweets(db: Session, user_id: str) -> List[Dict]:
    get_or_404(db, User, user_id, "user")
    tweets = db.query(Tweet).filter(Tweet.owner_id == user_id).order_by(Tweet.created_at.desc()).all()
    return _compose(db, tweets)


def get_all_tweets(db: Session) -> List[Dict]:
    tweets = db.query(Tweet).order_by(Tweet.created_at.desc()).all()
    return _compose(db, tweets)


def update_tweet(db: Session, tweet_id: str, user_id: str, content: str) -> Dict:
    content = _clean_content(content)
    tweet = get_owned(db, Tweet, tweet_id, user_id, "tweet")
    tweet.content = content
    db.flush()
    return _tweet_dict(tweet)


def delete_tweet(db: Session, tweet_id: str, user_id: str) -> None:
    tweet = get_owned(db, Tweet, tweet_id, user_id, "tweet")
    delete_tweet_cascade(db, tweet)
