"""Helpers shared by the resource services: id parsing, pagination and related-row loading."""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from sqlalchemy.orm import Query, Session

from videotube.errors import InvalidRequest
from videotube.models import Like, User

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def parse_id(value: str, label: str) -> str:
    """Validate an opaque id taken from a path or query string."""
    candidate = (value or "").strip().lower()
    if not _ID_PATTERN.match(candidate):
        raise InvalidRequest(f"Invalid {label} id")
    return candidate


@dataclass
class Page:
    docs: List[Any]
    total_docs: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_docs / self.limit) if self.limit else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "docs": self.docs,
            "total_docs": self.total_docs,
            "limit": self.limit,
            "page": self.page,
            "total_pages": self.total_pages,
            "has_next_page": self.page < self.total_pages,
            "has_prev_page": self.page > 1,
        }


def paginate(query: Query, page: int, limit: int) -> Tuple[list, int]:
    """Return (rows for the requested page, total matching rows)."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, total


def load_likes_and_users(
    db: Session,
    target_column,
    entities: Sequence[Any],
) -> Tuple[List[Like], List[User]]:
    """Fetch likes on ``entities`` plus every user referenced as owner or liker."""
    ids = [e.id for e in entities]
    if not ids:
        return [], []
    likes = db.query(Like).filter(target_column.in_(ids)).all()
    user_ids = {e.owner_id for e in entities} | {like.liked_by_id for like in likes}
    users = db.query(User).filter(User.id.in_(user_ids)).all()
    return likes, users


def compose_page(
    db: Session,
    target_column,
    rows: Sequence[Any],
    total: int,
    page: int,
    limit: int,
    composer: Callable[[Iterable[Any], Iterable[User], Iterable[Like]], List[Dict[str, Any]]],
) -> Page:
    likes, users = load_likes_and_users(db, target_column, rows)
    return Page(docs=composer(rows, users, likes), total_docs=total, page=page, limit=limit)
