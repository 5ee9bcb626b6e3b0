from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    return uuid4().hex


class TimestampMixin:
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class User(TimestampMixin, Base):
    __tablename__ = "users"
    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(64), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(128), nullable=False)
    avatar = Column(String(512), nullable=True)
    cover_image = Column(String(512), nullable=True)

    videos = relationship("Video", back_populates="owner")


class Video(TimestampMixin, Base):
    __tablename__ = "videos"
    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    video_file = Column(String(512), nullable=False)
    video_file_key = Column(String(255), nullable=False)
    thumbnail = Column(String(512), nullable=False)
    thumbnail_key = Column(String(255), nullable=False)
    duration = Column(Float, nullable=False, default=0.0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="videos")

Index("idx_videos_owner_created", Video.owner_id, Video.created_at)


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"
    id = Column(String(32), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    video_id = Column(String(32), ForeignKey("videos.id"), nullable=False, index=True)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User")


class Tweet(TimestampMixin, Base):
    __tablename__ = "tweets"
    id = Column(String(32), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User")


class Like(TimestampMixin, Base):
    __tablename__ = "likes"
    id = Column(String(32), primary_key=True, default=new_id)
    video_id = Column(String(32), ForeignKey("videos.id"), nullable=True, index=True)
    comment_id = Column(String(32), ForeignKey("comments.id"), nullable=True, index=True)
    tweet_id = Column(String(32), ForeignKey("tweets.id"), nullable=True, index=True)
    liked_by_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    liked_by = relationship("User")

    __table_args__ = (
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
    )


class Playlist(TimestampMixin, Base):
    __tablename__ = "playlists"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User")


class PlaylistVideo(Base):
    __tablename__ = "playlist_videos"
    playlist_id = Column(String(32), ForeignKey("playlists.id"), primary_key=True)
    video_id = Column(String(32), ForeignKey("videos.id"), primary_key=True)
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)

Index("idx_playlist_videos_video", PlaylistVideo.video_id)


class Subscription(TimestampMixin, Base):
    __tablename__ = "subscriptions"
    id = Column(String(32), primary_key=True, default=new_id)
    subscriber_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    channel_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
    )


class WatchHistory(Base):
    __tablename__ = "watch_history"
    user_id = Column(String(32), ForeignKey("users.id"), primary_key=True)
    video_id = Column(String(32), ForeignKey("videos.id"), primary_key=True)
    watched_at = Column(DateTime, default=datetime.utcnow, nullable=False)

Index("idx_watch_history_video", WatchHistory.video_id)
