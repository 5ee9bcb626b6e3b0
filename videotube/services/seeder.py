from __future__ import annotations
import random
from datetime import timedelta
from typing import Sequence
from faker import Faker
from sqlalchemy.orm import Session

from videotube.config import SEED
from videotube.models import (
    User, Video, Comment, Tweet, Like, Playlist, PlaylistVideo, Subscription, WatchHistory
)

fake = Faker()


def seed_random_generators(seed: int = SEED) -> None:
    random.seed(seed)
    Faker.seed(seed)
    fake.seed_instance(seed)
    fake.unique.clear()


def make_users(db: Session, n_users: int) -> list[User]:
    users = []
    for _ in range(n_users):
        username = fake.unique.user_name().lower()
        users.append(User(
            username=username,
            email=f"{username}@{fake.free_email_domain()}",
            full_name=fake.name(),
            avatar=fake.image_url(),
            created_at=fake.date_time_between(start_date="-1y", end_date="-60d"),
        ))
    db.add_all(users); db.flush()
    return users


def make_videos(db: Session, users: Sequence[User], n_videos: int) -> list[Video]:
    """Video rows point at placeholder asset keys; nothing is uploaded."""
    videos: list[Video] = []
    for _ in range(n_videos):
        u = random.choice(users)
        video_key = f"videos/{fake.uuid4().replace('-', '')}.mp4"
        thumb_key = f"thumbnails/{fake.uuid4().replace('-', '')}.jpg"
        v = Video(
            title=fake.sentence(nb_words=random.randint(3, 8)).rstrip("."),
            description=fake.paragraph(nb_sentences=3),
            video_file=f"https://media.example.com/{video_key}",
            video_file_key=video_key,
            thumbnail=f"https://media.example.com/{thumb_key}",
            thumbnail_key=thumb_key,
            duration=round(random.uniform(15, 1800), 2),
            views=random.randint(0, 50_000),
            is_published=random.random() < 0.9,
            owner_id=u.id,
            created_at=fake.date_time_between(start_date="-60d", end_date="now"),
        )
        db.add(v); videos.append(v)
    db.flush()
    return videos


def make_comments(db: Session, videos: Sequence[Video], users: Sequence[User], max_per_video=8) -> list[Comment]:
    comments: list[Comment] = []
    for v in videos:
        for _ in range(random.randint(0, max_per_video)):
            c = Comment(
                content=fake.sentence(),
                video_id=v.id,
                owner_id=random.choice(users).id,
                created_at=v.created_at + timedelta(minutes=random.randint(1, 5000)),
            )
            db.add(c); comments.append(c)
    db.flush()
    return comments


def make_tweets(db: Session, users: Sequence[User], n_tweets: int) -> list[Tweet]:
    tweets = [
        Tweet(
            content=fake.text(max_nb_chars=200),
            owner_id=random.choice(users).id,
            created_at=fake.date_time_between(start_date="-60d", end_date="now"),
        )
        for _ in range(n_tweets)
    ]
    db.add_all(tweets); db.flush()
    return tweets


def make_likes(db: Session, users: Sequence[User], videos: Sequence[Video],
               comments: Sequence[Comment], tweets: Sequence[Tweet], max_per_target=10):
    """
    Each user likes a target at most once, mirroring the unique constraints.
    """
    for column, targets in (("video_id", videos), ("comment_id", comments), ("tweet_id", tweets)):
        for t in targets:
            k = random.randint(0, min(max_per_target, len(users)))
            for u in random.sample(list(users), k):
                db.add(Like(liked_by_id=u.id, **{column: t.id}))
    db.flush()


def make_subscriptions(db: Session, users: Sequence[User], max_per_user=15):
    for u in users:
        others = [c for c in users if c.id != u.id]
        for channel in random.sample(others, random.randint(0, min(max_per_user, len(others)))):
            db.add(Subscription(subscriber_id=u.id, channel_id=channel.id))
    db.flush()


def make_playlists(db: Session, users: Sequence[User], videos: Sequence[Video], frac_with_playlists=0.3):
    for u in users:
        if random.random() >= frac_with_playlists:
            continue
        p = Playlist(name=fake.catch_phrase(), description=fake.sentence(), owner_id=u.id)
        db.add(p); db.flush()
        for v in random.sample(list(videos), random.randint(0, min(10, len(videos)))):
            db.add(PlaylistVideo(playlist_id=p.id, video_id=v.id))
    db.flush()


def make_watch_history(db: Session, users: Sequence[User], videos: Sequence[Video], max_per_user=20):
    for u in users:
        for v in random.sample(list(videos), random.randint(0, min(max_per_user, len(videos)))):
            db.add(WatchHistory(
                user_id=u.id, video_id=v.id,
                watched_at=v.created_at + timedelta(minutes=random.randint(1, 10000)),
            ))
    db.flush()
