from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PaginatedResponse, strip_required_text


class AdSpendBase(BaseModel):
    description: str = Field(
        ..., min_length=1, max_length=255, description="Spend description, e.g. campaign label"
    )
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Amount spent")

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        return strip_required_text(value)


class AdSpendCreate(AdSpendBase):
    """Schema used to register advertising spend."""

    pass


class AdSpendUpdate(BaseModel):
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return strip_required_text(value)


class AdSpendRead(AdSpendBase):
    """Schema representing stored advertising spend."""

    id: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdSpendListResponse(PaginatedResponse[AdSpendRead]):
    pass
