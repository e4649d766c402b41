from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 string with milliseconds, e.g.
    ``2024-01-01T12:00:00.000Z``."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class Memo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., gt=0)
    title: str
    content: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def to_dict(self) -> Dict[str, Any]:
        # updatedAt is omitted until the first update
        return self.model_dump(by_alias=True, exclude_none=True)


class MemoPayload(BaseModel):
    """Request body for create/update.

    Fields stay untyped so that wrong types reach field validation and are
    reported the same way as missing ones.
    """

    title: Any = Field(default=None, description="Memo title, up to 100 characters")
    content: Any = Field(default=None, description="Memo body, up to 2000 characters")
