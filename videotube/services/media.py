"""Media store access for video and thumbnail assets."""

from __future__ import annotations

import logging
import mimetypes
import os
import shutil
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional
from uuid import uuid4

import urllib3
from minio import Minio
from minio.error import MinioException

from videotube.config import (
    MEDIA_ACCESS_KEY, MEDIA_BUCKET, MEDIA_ENDPOINT, MEDIA_PUBLIC_URL, MEDIA_SECRET_KEY,
    MEDIA_SECURE, MEDIA_TIMEOUT_SECONDS, UPLOAD_TEMP_DIR,
)
from videotube.errors import MediaStoreError

logger = logging.getLogger(__name__)


@dataclass
class UploadedAsset:
    key: str
    url: str


class MediaStore(ABC):
    @abstractmethod
    def upload(self, local_path: str, folder: str) -> UploadedAsset:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        raise NotImplementedError


class MinioMediaStore(MediaStore):
    def __init__(
        self,
        endpoint: str = MEDIA_ENDPOINT,
        access_key: str = MEDIA_ACCESS_KEY,
        secret_key: str = MEDIA_SECRET_KEY,
        bucket: str = MEDIA_BUCKET,
        secure: bool = MEDIA_SECURE,
        public_url: str = MEDIA_PUBLIC_URL,
        timeout: float = MEDIA_TIMEOUT_SECONDS,
    ) -> None:
        if not endpoint or not bucket:
            raise RuntimeError("MEDIA_ENDPOINT and MEDIA_BUCKET must be set")
        # Each call is attempted once with bounded connect/read time.
        http_client = urllib3.PoolManager(
            timeout=urllib3.Timeout(connect=timeout, read=timeout),
            retries=urllib3.Retry(total=0),
        )
        self._client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            http_client=http_client,
        )
        self._bucket = bucket
        scheme = "https" if secure else "http"
        self._public_url = (public_url or f"{scheme}://{endpoint}/{bucket}").rstrip("/")

    def upload(self, local_path: str, folder: str) -> UploadedAsset:
        key = f"{folder}/{uuid4().hex}{Path(local_path).suffix.lower()}"
        content_type = mimetypes.guess_type(local_path)[0] or "application/octet-stream"
        try:
            self._client.fput_object(
                bucket_name=self._bucket, object_name=key, file_path=local_path, content_type=content_type
            )
        except (MinioException, urllib3.exceptions.HTTPError) as exc:
            raise MediaStoreError(f"upload of {key} failed: {exc}") from exc
        logger.info("Uploaded %s to bucket %s", key, self._bucket)
        return UploadedAsset(key=key, url=f"{self._public_url}/{key}")

    def delete(self, key: str) -> None:
        try:
            self._client.remove_object(bucket_name=self._bucket, object_name=key)
        except (MinioException, urllib3.exceptions.HTTPError) as exc:
            raise MediaStoreError(f"delete of {key} failed: {exc}") from exc
        logger.info("Deleted %s from bucket %s", key, self._bucket)

    def ping(self) -> bool:
        try:
            return self._client.bucket_exists(bucket_name=self._bucket)
        except (MinioException, urllib3.exceptions.HTTPError) as exc:
            raise MediaStoreError(f"bucket check failed: {exc}") from exc


@dataclass
class IncomingFile:
    """A multipart file part as received by a route."""

    stream: BinaryIO
    filename: str


def stage_upload(incoming: IncomingFile, temp_dir: Optional[str] = None) -> str:
    """Copy an incoming multipart stream into a local scratch file and return its path."""
    temp_dir = temp_dir or UPLOAD_TEMP_DIR
    os.makedirs(temp_dir, exist_ok=True)
    path = os.path.join(temp_dir, f"{uuid4().hex}{Path(incoming.filename or '').suffix.lower()}")
    with open(path, "wb") as out:
        shutil.copyfileobj(incoming.stream, out)
    return path


def store_incoming(
    store: MediaStore,
    incoming: IncomingFile,
    folder: str,
    temp_dir: Optional[str] = None,
) -> UploadedAsset:
    """Stage and upload one file; the local copy is removed whether the upload succeeds or not."""
    local_path = stage_upload(incoming, temp_dir)
    try:
        return store.upload(local_path, folder)
    finally:
        if os.path.exists(local_path):
            os.remove(local_path)


def discard_assets(store: MediaStore, keys: Iterable[str]) -> None:
    """Best-effort removal; a key that cannot be deleted is logged and left orphaned."""
    for key in keys:
        try:
            store.delete(key)
        except MediaStoreError:
            logger.exception("Could not remove orphaned asset %s", key)


@dataclass
class AssetLedger:
    """Keys uploaded by a request, and keys its changes make obsolete."""

    uploaded: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)


@contextmanager
def track_assets(store: MediaStore) -> Iterator[AssetLedger]:
    """
    Reconcile the media store with the outcome of the enclosed database work.

    Enter this outside the session so the commit happens inside the block:
    on failure the new uploads are removed and the old assets kept, on
    success the stale assets are removed.
    """
    ledger = AssetLedger()
    try:
        yield ledger
    except Exception:
        discard_assets(store, ledger.uploaded)
        raise
    discard_assets(store, ledger.stale)
