"""Expose Pydantic schemas for convenient imports."""

from .ad_spend import (
    AdSpendBase,
    AdSpendCreate,
    AdSpendListResponse,
    AdSpendRead,
    AdSpendUpdate,
)
from .common import PaginatedResponse, SortOrder
from .reports import (
    AdSpendSummary,
    Dashboard,
    DashboardStats,
    PlanBreakdown,
    PlanTotal,
    SalesSummary,
)
from .sale import SaleBase, SaleCreate, SaleListResponse, SaleRead, SaleUpdate

__all__ = [
    "AdSpendBase",
    "AdSpendCreate",
    "AdSpendListResponse",
    "AdSpendRead",
    "AdSpendUpdate",
    "AdSpendSummary",
    "Dashboard",
    "DashboardStats",
    "PaginatedResponse",
    "PlanBreakdown",
    "PlanTotal",
    "SaleBase",
    "SaleCreate",
    "SaleListResponse",
    "SaleRead",
    "SaleUpdate",
    "SalesSummary",
    "SortOrder",
]
