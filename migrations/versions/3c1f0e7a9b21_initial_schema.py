"""initial schema

Revision ID: 3c1f0e7a9b21
Revises:
Create Date: 2026-10-19 10:12:44.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0e7a9b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=128), nullable=False),
        sa.Column('avatar', sa.String(length=512), nullable=True),
        sa.Column('cover_image', sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'videos',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_file', sa.String(length=512), nullable=False),
        sa.Column('video_file_key', sa.String(length=255), nullable=False),
        sa.Column('thumbnail', sa.String(length=512), nullable=False),
        sa.Column('thumbnail_key', sa.String(length=255), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('owner_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])
    op.create_index('idx_videos_owner_created', 'videos', ['owner_id', 'created_at'])

    op.create_table(
        'comments',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('video_id', sa.String(length=32), nullable=False),
        sa.Column('owner_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_comments_video_id', 'comments', ['video_id'])
    op.create_index('ix_comments_owner_id', 'comments', ['owner_id'])

    op.create_table(
        'tweets',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tweets_owner_id', 'tweets', ['owner_id'])

    op.create_table(
        'likes',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('video_id', sa.String(length=32), nullable=True),
        sa.Column('comment_id', sa.String(length=32), nullable=True),
        sa.Column('tweet_id', sa.String(length=32), nullable=True),
        sa.Column('liked_by_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name='ck_likes_single_target',
        ),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id']),
        sa.ForeignKeyConstraint(['liked_by_id'], ['users.id']),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweets.id']),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('liked_by_id', 'video_id', name='uq_likes_user_video'),
        sa.UniqueConstraint('liked_by_id', 'comment_id', name='uq_likes_user_comment'),
        sa.UniqueConstraint('liked_by_id', 'tweet_id', name='uq_likes_user_tweet'),
    )
    for column in ('video_id', 'comment_id', 'tweet_id', 'liked_by_id'):
        op.create_index(f'ix_likes_{column}', 'likes', [column])

    op.create_table(
        'playlists',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_playlists_owner_id', 'playlists', ['owner_id'])

    op.create_table(
        'playlist_videos',
        sa.Column('playlist_id', sa.String(length=32), nullable=False),
        sa.Column('video_id', sa.String(length=32), nullable=False),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['playlist_id'], ['playlists.id']),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id']),
        sa.PrimaryKeyConstraint('playlist_id', 'video_id'),
    )
    op.create_index('idx_playlist_videos_video', 'playlist_videos', ['video_id'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('subscriber_id', sa.String(length=32), nullable=False),
        sa.Column('channel_id', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('subscriber_id <> channel_id', name='ck_subscriptions_not_self'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id']),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_pair'),
    )
    op.create_index('ix_subscriptions_subscriber_id', 'subscriptions', ['subscriber_id'])
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'])

    op.create_table(
        'watch_history',
        sa.Column('user_id', sa.String(length=32), nullable=False),
        sa.Column('video_id', sa.String(length=32), nullable=False),
        sa.Column('watched_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id']),
        sa.PrimaryKeyConstraint('user_id', 'video_id'),
    )
    op.create_index('idx_watch_history_video', 'watch_history', ['video_id'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'watch_history', 'subscriptions', 'playlist_videos', 'playlists',
        'likes', 'tweets', 'comments', 'videos', 'users',
    ):
        op.drop_table(table)
