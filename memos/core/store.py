"""In-memory memo store.

Memos live in an insertion-ordered dict keyed by id, next to a counter that
only ever grows, so ids are never reused after a delete. All access goes
through one lock because FastAPI runs sync endpoints on a worker pool.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from memos.core.errors import NotFoundError, ValidationError
from memos.models import Memo, format_timestamp
from memos.validation import ValidationResult, validate_memo_fields

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoStore:
    """Ordered collection of memos plus the next-id counter."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._memos: Dict[int, Memo] = {}
        self._next_id = 1
        self._clock = clock or _utcnow
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._memos)

    def _now(self) -> str:
        return format_timestamp(self._clock())

    @staticmethod
    def _validated(title: Any, content: Any) -> ValidationResult:
        result = validate_memo_fields(title, content)
        if not result.ok:
            raise ValidationError(result.failure)
        return result

    def list(self) -> List[Memo]:
        with self._lock:
            return list(self._memos.values())

    def get(self, memo_id: int) -> Memo:
        with self._lock:
            memo = self._memos.get(memo_id)
        if memo is None:
            raise NotFoundError(memo_id)
        return memo

    def create(self, title: Any, content: Any) -> Memo:
        fields = self._validated(title, content)
        with self._lock:
            memo = Memo(
                id=self._next_id,
                title=fields.title,
                content=fields.content,
                created_at=self._now(),
            )
            self._next_id += 1
            self._memos[memo.id] = memo
        logger.debug("Stored memo id=%s", memo.id)
        return memo

    def update(self, memo_id: int, title: Any, content: Any) -> Memo:
        with self._lock:
            current = self._memos.get(memo_id)
            if current is None:
                raise NotFoundError(memo_id)
            fields = self._validated(title, content)
            # Reassigning an existing key keeps its position in the dict.
            memo = current.model_copy(
                update={
                    "title": fields.title,
                    "content": fields.content,
                    "updated_at": self._now(),
                }
            )
            self._memos[memo_id] = memo
        return memo

    def delete(self, memo_id: int) -> None:
        with self._lock:
            if self._memos.pop(memo_id, None) is None:
                raise NotFoundError(memo_id)
