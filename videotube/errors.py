"""Error taxonomy shared by services and routes."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status and a client-visible message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class InternalError(ApiError):
    status_code = 500


class MediaStoreError(Exception):
    """Raised when the media store cannot upload or delete an asset."""


@contextmanager
def operation_boundary(action: str) -> Iterator[None]:
    """
    Normalize store and media failures raised inside the block.

    ApiError subclasses pass through untouched; database, media and local
    file errors are logged with their traceback and re-raised as
    InternalError("Error while <action>").
    """
    try:
        yield
    except ApiError:
        raise
    except (SQLAlchemyError, MediaStoreError, OSError) as exc:
        logger.exception("Error while %s", action)
        raise InternalError(f"Error while {action}") from exc
