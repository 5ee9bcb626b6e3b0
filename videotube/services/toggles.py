"""
Toggle engine behind like/unlike and subscribe/unsubscribe.

A toggle looks up the relation keyed by (actor, target): an existing row is
deleted, a missing one is inserted. The caller's session wraps the whole
operation in one transaction, and the unique constraints on the relation
tables guarantee a pair can never be stored twice.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ToggleOutcome(str, Enum):
    added = "added"
    removed = "removed"


@dataclass
class ToggleResult:
    outcome: ToggleOutcome
    record: Optional[Any] = None

    @property
    def added(self) -> bool:
        return self.outcome is ToggleOutcome.added


def toggle(db: Session, model: Type[Any], **key: Any) -> ToggleResult:
    existing = db.query(model).filter_by(**key).first()
    if existing is not None:
        db.delete(existing)
        db.flush()
        return ToggleResult(ToggleOutcome.removed)

    record = model(**key)
    try:
        with db.begin_nested():
            db.add(record)
    except IntegrityError:
        # Another request inserted the same pair between our lookup and insert.
        logger.warning("Concurrent toggle on %s %s; keeping the existing row", model.__tablename__, key)
        return ToggleResult(ToggleOutcome.added, db.query(model).filter_by(**key).one())
    return ToggleResult(ToggleOutcome.added, record)
