"""Response shapes for the aggregate reports."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..models.sale import SalePlan


class SalesSummary(BaseModel):
    total_sales: int = Field(..., ge=0)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    average_amount: Decimal = Field(default=Decimal("0"), ge=0)
    first_sale_at: Optional[datetime] = None
    last_sale_at: Optional[datetime] = None


class PlanBreakdown(BaseModel):
    plan: SalePlan
    quantity: int = Field(..., ge=0)
    total_amount: Decimal = Field(..., ge=0)
    average_amount: Decimal = Field(..., ge=0)


class AdSpendSummary(BaseModel):
    total_records: int = Field(..., ge=0)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    first_spend_at: Optional[datetime] = None
    last_spend_at: Optional[datetime] = None


class Dashboard(BaseModel):
    """Combined sales and ad spend figures with ROI."""

    total_sales: Decimal = Field(..., ge=0)
    sales_count: int = Field(..., ge=0)
    average_sale: Decimal = Field(..., ge=0)
    total_ad_spend: Decimal = Field(..., ge=0)
    ad_spend_count: int = Field(..., ge=0)
    net_profit: Decimal
    roi_percentage: Decimal


class DashboardStats(BaseModel):
    """Dashboard figures as returned by the stats query; ROI is exposed as ``roi``."""

    total_sales: Decimal = Field(..., ge=0)
    sales_count: int = Field(..., ge=0)
    average_sale: Decimal = Field(..., ge=0)
    total_ad_spend: Decimal = Field(..., ge=0)
    ad_spend_count: int = Field(..., ge=0)
    net_profit: Decimal
    roi: Decimal


class PlanTotal(BaseModel):
    plan: SalePlan
    quantity: int = Field(..., ge=0)
    total_amount: Decimal = Field(..., ge=0)
