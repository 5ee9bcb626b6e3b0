"""Test deterministic seeding functionality."""

import random

from faker import Faker

from videotube.models import Like, Subscription, User, Video
from videotube.services import seeder
from videotube.services.seeder import seed_random_generators


class TestDeterministicSeeding:
    """Test that seeding produces deterministic results."""

    def test_random_seed_deterministic(self):
        """Test that random.seed produces deterministic results."""
        random.seed(1337)
        values1 = [random.randint(1, 100) for _ in range(10)]

        random.seed(1337)
        values2 = [random.randint(1, 100) for _ in range(10)]

        assert values1 == values2

    def test_faker_seed_deterministic(self):
        """Test that Faker.seed produces deterministic results."""
        fake1 = Faker()
        fake1.seed_instance(1337)
        names1 = [fake1.user_name() for _ in range(5)]

        fake2 = Faker()
        fake2.seed_instance(1337)
        names2 = [fake2.user_name() for _ in range(5)]

        assert names1 == names2

    def test_seed_random_generators_function(self):
        """Test that our seed_random_generators function resets the module generators."""
        seed_random_generators()
        random_values1 = [random.randint(1, 100) for _ in range(5)]
        fake_names1 = [seeder.fake.unique.user_name() for _ in range(3)]

        seed_random_generators()
        random_values2 = [random.randint(1, 100) for _ in range(5)]
        fake_names2 = [seeder.fake.unique.user_name() for _ in range(3)]

        assert random_values1 == random_values2
        assert fake_names1 == fake_names2


class TestSeeder:
    """The seeder respects the relation constraints."""

    def _seed(self, database):
        seed_random_generators(42)
        with database.session() as db:
            users = seeder.make_users(db, 8)
            videos = seeder.make_videos(db, users, 10)
            comments = seeder.make_comments(db, videos, users, max_per_video=3)
            tweets = seeder.make_tweets(db, users, 5)
            seeder.make_likes(db, users, videos, comments, tweets, max_per_target=4)
            seeder.make_subscriptions(db, users, max_per_user=4)
            seeder.make_playlists(db, users, videos, frac_with_playlists=0.5)
            seeder.make_watch_history(db, users, videos, max_per_user=5)

    def test_seed_populates_tables(self, database):
        self._seed(database)

        with database.session() as db:
            assert db.query(User).count() == 8
            assert db.query(Video).count() == 10
            assert all(u.username == u.username.lower() for u in db.query(User))

    def test_seed_never_creates_self_subscriptions(self, database):
        self._seed(database)

        with database.session() as db:
            pairs = [(s.subscriber_id, s.channel_id) for s in db.query(Subscription)]
        assert all(a != b for a, b in pairs)
        assert len(pairs) == len(set(pairs))

    def test_seed_likes_have_single_target(self, database):
        self._seed(database)

        with database.session() as db:
            for like in db.query(Like):
                targets = [like.video_id, like.comment_id, like.tweet_id]
                assert sum(t is not None for t in targets) == 1
