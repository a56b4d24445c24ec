"""Shared schema definitions."""

from __future__ import annotations

from enum import Enum
from typing import Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Standard shape for paginated listings."""

    items: Sequence[T]
    total: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    skip: int = Field(..., ge=0)


class SortOrder(str, Enum):
    """Orderings supported by record listings."""

    CREATED_AT_DESC = "created_at_desc"
    CREATED_AT_ASC = "created_at_asc"
    AMOUNT_DESC = "amount_desc"
    AMOUNT_ASC = "amount_asc"


def strip_required_text(value: Optional[str]) -> Optional[str]:
    """Trim surrounding whitespace and refuse blank text."""

    if value is None:
        return value
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped
