# videotube/cli.py
import typer
from sqlalchemy.exc import SQLAlchemyError

from videotube.db import Database
from videotube.errors import ApiError
from videotube.models import User
from videotube.services import seeder
from videotube.services.common import parse_id
from videotube.services.dashboard import get_channel_stats

app = typer.Typer(help="VideoTube admin CLI with subcommands")


@app.command("init-db")
def init_db_cmd():
    """Create all tables that do not exist yet."""
    try:
        Database().create_all()
    except SQLAlchemyError as e:
        typer.echo(f"❌ Error creating tables: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("✓ Tables created")


@app.command("seed")
def seed_cmd(
    users: int = typer.Option(50, help="Number of users", min=1),
    videos: int = typer.Option(200, help="Number of videos", min=0),
    tweets: int = typer.Option(300, help="Number of tweets", min=0),
):
    """Populate the database with mock data."""
    # Set deterministic seeds for reproducible data
    seeder.seed_random_generators()

    try:
        with Database().session() as db:
            us = seeder.make_users(db, users)
            vs = seeder.make_videos(db, us, videos)
            cs = seeder.make_comments(db, vs, us)
            ts = seeder.make_tweets(db, us, tweets)
            seeder.make_likes(db, us, vs, cs, ts)
            seeder.make_subscriptions(db, us)
            seeder.make_playlists(db, us, vs)
            seeder.make_watch_history(db, us, vs)
    except SQLAlchemyError as e:
        typer.echo(f"❌ Error seeding database: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Seed complete: users={users}, videos={videos}, comments={len(cs)}, tweets={tweets}")


@app.command("channel-stats")
def channel_stats_cmd(
    user_id: str = typer.Argument(..., help="Id of the channel owner"),
):
    """Show dashboard totals for one channel."""
    try:
        channel_id = parse_id(user_id, "user")
        with Database().session() as db:
            user = db.get(User, channel_id)
            if user is None:
                typer.echo(f"❌ No user with id {channel_id}", err=True)
                raise typer.Exit(1)
            stats = get_channel_stats(db, channel_id)
    except ApiError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(1)
    except SQLAlchemyError as e:
        typer.echo(f"❌ Error fetching channel stats: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n📊 Channel stats for @{user.username}:")
    typer.echo("─" * 40)
    typer.echo(f"Total videos:        {stats['total_videos']:,}")
    typer.echo(f"Total video views:   {stats['total_video_views']:,}")
    typer.echo(f"Total video likes:   {stats['total_video_likes']:,}")
    typer.echo(f"Total subscribers:   {stats['total_subscribers']:,}")
    typer.echo(f"Total tweets:        {stats['total_tweets']:,}")


if __name__ == "__main__":
    app()
