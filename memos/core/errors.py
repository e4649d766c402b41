from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memos.validation import ValidationFailure


class MemoError(Exception):
    """Base class for expected memo store failures."""


class ValidationError(MemoError):
    """A memo field was missing, not a string, blank or too long."""

    def __init__(self, failure: "ValidationFailure") -> None:
        self.failure = failure
        self.message = failure.message
        super().__init__(self.message)


class NotFoundError(MemoError):
    def __init__(self, memo_id: object) -> None:
        self.memo_id = memo_id
        super().__init__(f"memo not found: {memo_id!r}")
