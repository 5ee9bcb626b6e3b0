import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from videotube.config import DATABASE_URL, DB_CONNECT_TIMEOUT, DB_STATEMENT_TIMEOUT_MS
from videotube.models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create an engine with bounded connect and statement timeouts for PostgreSQL."""
    if url.startswith("postgresql") and "connect_args" not in kwargs:
        kwargs["connect_args"] = {
            "connect_timeout": DB_CONNECT_TIMEOUT,
            "options": f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}",
        }
    return create_engine(url, pool_pre_ping=True, **kwargs)


class Database:
    """Owns the engine and session factory for one process."""

    def __init__(self, engine: Optional[Engine] = None, url: str = DATABASE_URL):
        self.engine = engine if engine is not None else build_engine(url)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()
