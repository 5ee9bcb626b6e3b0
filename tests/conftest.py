"""Shared fixtures: an in-memory database, a fake media store and a wired test client."""

import io

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from videotube.db import Database
from videotube.errors import MediaStoreError
from videotube.main import create_app
from videotube.models import User, Video
from videotube.services.media import MediaStore, UploadedAsset


class FakeMediaStore(MediaStore):
    """Keeps uploaded keys in memory; flip ``fail_uploads``/``fail_deletes`` to simulate outages."""

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_uploads = False
        self.fail_folders = set()
        self.fail_deletes = False
        self.healthy = True
        self._counter = 0

    def upload(self, local_path, folder):
        if self.fail_uploads or folder in self.fail_folders:
            raise MediaStoreError("upload refused")
        self._counter += 1
        key = f"{folder}/asset{self._counter}"
        with open(local_path, "rb") as fh:
            self.objects[key] = fh.read()
        return UploadedAsset(key=key, url=f"http://media.test/{key}")

    def delete(self, key):
        if self.fail_deletes:
            raise MediaStoreError("delete refused")
        self.objects.pop(key, None)
        self.deleted.append(key)

    def ping(self):
        return self.healthy


def _sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@pytest.fixture
def database():
    db = Database(engine=_sqlite_engine())
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def media():
    return FakeMediaStore()


@pytest.fixture(autouse=True)
def upload_temp_dir(tmp_path, monkeypatch):
    temp_dir = tmp_path / "temp"
    monkeypatch.setattr("videotube.services.media.UPLOAD_TEMP_DIR", str(temp_dir))
    return temp_dir


@pytest.fixture
def client(database, media):
    return TestClient(create_app(database=database, media_store=media))


@pytest.fixture
def make_user(database):
    counter = {"n": 0}

    def _make(username=None, full_name="Test User"):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        with database.session() as db:
            user = User(username=username, email=f"{username}@example.com", full_name=full_name)
            db.add(user)
            db.flush()
            return user.id

    return _make


@pytest.fixture
def make_video(database):
    def _make(owner_id, title="A video", description="Some description", is_published=True, views=0):
        with database.session() as db:
            video = Video(
                title=title,
                description=description,
                video_file="http://media.test/videos/seed",
                video_file_key=f"videos/{title}",
                thumbnail="http://media.test/thumbnails/seed",
                thumbnail_key=f"thumbnails/{title}",
                duration=12.5,
                views=views,
                is_published=is_published,
                owner_id=owner_id,
            )
            db.add(video)
            db.flush()
            return video.id

    return _make


def auth(user_id):
    return {"X-User-Id": user_id}


def upload_files(video=b"video-bytes", thumb=b"thumb-bytes"):
    return {
        "videoFile": ("clip.mp4", io.BytesIO(video), "video/mp4"),
        "thumbnail": ("thumb.jpg", io.BytesIO(thumb), "image/jpeg"),
    }
