"""Tests for upload staging and the MinIO-backed media store."""

import io
from unittest.mock import patch

import pytest
from minio.error import MinioException

from videotube.errors import MediaStoreError
from videotube.services.media import IncomingFile, MinioMediaStore, stage_upload, store_incoming, track_assets


class TestStaging:

    def test_stage_upload_writes_temp_file(self, upload_temp_dir):
        path = stage_upload(IncomingFile(stream=io.BytesIO(b"abc"), filename="Clip.MP4"))

        assert path.startswith(str(upload_temp_dir))
        assert path.endswith(".mp4")
        with open(path, "rb") as fh:
            assert fh.read() == b"abc"

    def test_store_incoming_removes_temp_file_on_failure(self, media, upload_temp_dir):
        media.fail_uploads = True

        with pytest.raises(MediaStoreError):
            store_incoming(media, IncomingFile(stream=io.BytesIO(b"abc"), filename="a.mp4"), "videos")

        assert list(upload_temp_dir.iterdir()) == []

    def test_store_incoming_removes_temp_file_on_success(self, media, upload_temp_dir):
        asset = store_incoming(media, IncomingFile(stream=io.BytesIO(b"abc"), filename="a.jpg"), "thumbnails")

        assert asset.key.startswith("thumbnails/")
        assert media.objects[asset.key] == b"abc"
        assert list(upload_temp_dir.iterdir()) == []


class TestAssetTracking:
    """Uploads are rolled back with the transaction; replaced assets go after it commits."""

    def test_failure_removes_uploads_and_keeps_stale(self, media):
        with pytest.raises(RuntimeError):
            with track_assets(media) as assets:
                assets.uploaded.append("thumbnails/new")
                assets.stale.append("thumbnails/old")
                raise RuntimeError("commit failed")

        assert media.deleted == ["thumbnails/new"]

    def test_success_removes_only_stale(self, media):
        with track_assets(media) as assets:
            assets.uploaded.append("thumbnails/new")
            assets.stale.append("thumbnails/old")

        assert media.deleted == ["thumbnails/old"]

    def test_cleanup_errors_are_logged_not_raised(self, media, caplog):
        media.fail_deletes = True

        with track_assets(media) as assets:
            assets.stale.append("thumbnails/old")

        assert "thumbnails/old" in caplog.text


class TestMinioMediaStore:
    """The MinIO client is mocked; only key layout and error wrapping are checked."""

    @pytest.fixture
    def store(self):
        with patch("videotube.services.media.Minio"):
            store = MinioMediaStore(endpoint="minio:9000", bucket="media", public_url="https://cdn.test/media")
            yield store

    def test_upload_builds_key_and_public_url(self, store, tmp_path):
        local = tmp_path / "clip.MP4"
        local.write_bytes(b"x")

        asset = store.upload(str(local), "videos")

        assert asset.key.startswith("videos/")
        assert asset.key.endswith(".mp4")
        assert asset.url == f"https://cdn.test/media/{asset.key}"
        store._client.fput_object.assert_called_once()
        kwargs = store._client.fput_object.call_args.kwargs
        assert (kwargs["bucket_name"], kwargs["object_name"]) == ("media", asset.key)

    def test_delete_wraps_client_errors(self, store):
        store._client.remove_object.side_effect = MinioException("connection reset")

        with pytest.raises(MediaStoreError):
            store.delete("videos/a.mp4")

    def test_ping_checks_bucket(self, store):
        store._client.bucket_exists.return_value = True

        assert store.ping() is True
        store._client.bucket_exists.assert_called_once_with(bucket_name="media")

    def test_missing_endpoint_is_rejected(self):
        with pytest.raises(RuntimeError):
            MinioMediaStore(endpoint="", bucket="media")
