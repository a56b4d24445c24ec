from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.sale import SaleKind, SalePlan
from .common import PaginatedResponse, strip_required_text


class SaleBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Customer name")
    plan: SalePlan = Field(..., description="Plan sold")
    kind: SaleKind = Field(default=SaleKind.ONE_TIME, description="Payment kind")
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Sale amount")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return strip_required_text(value)


class SaleCreate(SaleBase):
    """Schema used to register new sales."""

    pass


class SaleUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    plan: Optional[SalePlan] = None
    kind: Optional[SaleKind] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        return strip_required_text(value)


class SaleRead(SaleBase):
    """Schema representing stored sales."""

    id: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SaleListResponse(PaginatedResponse[SaleRead]):
    pass
