"""Router exposing aggregated sales and ad spend reports."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import Operation, Resource, require_permission
from ..services import ReportService

router = APIRouter()

_READ_SALES = Depends(require_permission(Resource.SALES, Operation.SELECT))
_READ_AD_SPEND = Depends(require_permission(Resource.AD_SPEND, Operation.SELECT))


@router.get("/sales-summary", response_model=schemas.SalesSummary, dependencies=[_READ_SALES])
def get_sales_summary(db: Session = Depends(get_db)) -> schemas.SalesSummary:
    return schemas.SalesSummary(**ReportService.sales_summary(db))


@router.get(
    "/sales-by-plan",
    response_model=List[schemas.PlanBreakdown],
    dependencies=[_READ_SALES],
)
def get_sales_by_plan(db: Session = Depends(get_db)) -> List[schemas.PlanBreakdown]:
    return [schemas.PlanBreakdown(**row) for row in ReportService.sales_by_plan(db)]


@router.get(
    "/ad-spend-summary",
    response_model=schemas.AdSpendSummary,
    dependencies=[_READ_AD_SPEND],
)
def get_ad_spend_summary(db: Session = Depends(get_db)) -> schemas.AdSpendSummary:
    return schemas.AdSpendSummary(**ReportService.ad_spend_summary(db))


@router.get(
    "/dashboard",
    response_model=schemas.Dashboard,
    dependencies=[_READ_SALES, _READ_AD_SPEND],
)
def get_dashboard(db: Session = Depends(get_db)) -> schemas.Dashboard:
    """Return totals for both stores together with net profit and ROI percentage."""

    return schemas.Dashboard(**ReportService.dashboard(db))


@router.get(
    "/dashboard-stats",
    response_model=schemas.DashboardStats,
    dependencies=[_READ_SALES, _READ_AD_SPEND],
)
def get_dashboard_stats(db: Session = Depends(get_db)) -> schemas.DashboardStats:
    return schemas.DashboardStats(**ReportService.dashboard_stats(db))


@router.get(
    "/sales-by-plan/payload",
    response_model=List[schemas.PlanTotal],
    dependencies=[_READ_SALES],
)
def get_sales_by_plan_payload(db: Session = Depends(get_db)) -> List[schemas.PlanTotal]:
    return [schemas.PlanTotal(**row) for row in ReportService.sales_by_plan_payload(db)]
