from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 2000


class ValidationFailure(Enum):
    TITLE_REQUIRED = "title required"
    TITLE_TOO_LONG = "title too long"
    CONTENT_REQUIRED = "content required"
    CONTENT_TOO_LONG = "content too long"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a title/content pair.

    Exactly one of ``failure`` or the trimmed fields is meaningful: when
    ``failure`` is set, ``title`` and ``content`` are empty.
    """

    title: str = ""
    content: str = ""
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_memo_fields(title: Any, content: Any) -> ValidationResult:
    # Lengths are measured on the raw input; stored values are trimmed.
    if _is_blank(title):
        return ValidationResult(failure=ValidationFailure.TITLE_REQUIRED)
    if len(title) > MAX_TITLE_LENGTH:
        return ValidationResult(failure=ValidationFailure.TITLE_TOO_LONG)
    if _is_blank(content):
        return ValidationResult(failure=ValidationFailure.CONTENT_REQUIRED)
    if len(content) > MAX_CONTENT_LENGTH:
        return ValidationResult(failure=ValidationFailure.CONTENT_TOO_LONG)
    return ValidationResult(title=title.strip(), content=content.strip())
