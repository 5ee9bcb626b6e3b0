"""Tests for the admin CLI."""

from unittest.mock import patch

from typer.testing import CliRunner

from videotube.cli import app
from videotube.models import User, Video

runner = CliRunner()


class TestCli:

    def test_seed_and_channel_stats(self, database):
        with patch("videotube.cli.Database", return_value=database):
            seeded = runner.invoke(app, ["seed", "--users", "5", "--videos", "6", "--tweets", "4"])
            with database.session() as db:
                channel = db.query(User).first().id
                videos = db.query(Video).count()
            stats = runner.invoke(app, ["channel-stats", channel])

        assert seeded.exit_code == 0
        assert "Seed complete: users=5, videos=6" in seeded.output
        assert videos == 6
        assert stats.exit_code == 0
        assert "Total videos:" in stats.output

    def test_channel_stats_for_unknown_user(self, database):
        with patch("videotube.cli.Database", return_value=database):
            result = runner.invoke(app, ["channel-stats", "0" * 32])

        assert result.exit_code == 1

    def test_channel_stats_with_malformed_id(self, database):
        with patch("videotube.cli.Database", return_value=database):
            result = runner.invoke(app, ["channel-stats", "nope"])

        assert result.exit_code == 1

    def test_init_db(self, database):
        with patch("videotube.cli.Database", return_value=database):
            result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Tables created" in result.output
