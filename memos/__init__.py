from memos.core.errors import MemoError, NotFoundError, ValidationError
from memos.core.store import MemoStore
from memos.models import Memo, MemoPayload

__all__ = [
    "Memo",
    "MemoError",
    "MemoPayload",
    "MemoStore",
    "NotFoundError",
    "ValidationError",
]
