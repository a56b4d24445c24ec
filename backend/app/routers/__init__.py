"""Routers package."""

from .ad_spend import router as ad_spend_router
from .reports import router as reports_router
from .sales import router as sales_router

__all__ = [
    "ad_spend_router",
    "reports_router",
    "sales_router",
]
