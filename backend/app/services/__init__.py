"""Service layer encapsulating business logic for API routers."""

from ..errors import (
    AuthorizationError,
    RecordNotFoundError,
    RecordValidationError,
    SalesTrackerError,
)
from .ad_spend import AdSpendService
from .reports import ReportService, compute_roi
from .sales import SaleService

__all__ = [
    "AdSpendService",
    "AuthorizationError",
    "RecordNotFoundError",
    "RecordValidationError",
    "ReportService",
    "SaleService",
    "SalesTrackerError",
    "compute_roi",
]
