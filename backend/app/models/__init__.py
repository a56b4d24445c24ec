"""Expose SQLAlchemy models for convenient imports."""

from .ad_spend import AdSpend
from .mixins import TimestampMixin
from .sale import SALE_KIND_ENUM, SALE_PLAN_ENUM, Sale, SaleKind, SalePlan

__all__ = [
    "AdSpend",
    "Sale",
    "SaleKind",
    "SalePlan",
    "SALE_KIND_ENUM",
    "SALE_PLAN_ENUM",
    "TimestampMixin",
]
