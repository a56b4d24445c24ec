"""Aggregated sales and ad spend figures used by dashboard visualisations.

Nothing here is cached: every call queries the current state of both stores.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def _money(value: Decimal | float | int | None) -> Decimal:
    return Decimal(str(value or 0)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_roi(total_sales: Decimal, total_spend: Decimal) -> Decimal:
    """Return ROI as a percentage, or zero when nothing was spent."""

    if total_spend <= 0:
        return Decimal("0")
    ratio = (total_sales - total_spend) / total_spend * HUNDRED
    return ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class ReportService:
    """Provides aggregated metrics over sales and advertising spend."""

    @staticmethod
    def _sales_totals(db: Session) -> tuple[int, Decimal, Decimal]:
        count, total, average = db.query(
            func.count(models.Sale.id),
            func.coalesce(func.sum(models.Sale.amount), 0),
            func.coalesce(func.avg(models.Sale.amount), 0),
        ).one()
        return int(count or 0), _money(total), _money(average)

    @staticmethod
    def _ad_spend_totals(db: Session) -> tuple[int, Decimal]:
        count, total = db.query(
            func.count(models.AdSpend.id),
            func.coalesce(func.sum(models.AdSpend.amount), 0),
        ).one()
        return int(count or 0), _money(total)

    @staticmethod
    def sales_summary(db: Session) -> Dict[str, Any]:
        count, total, average = ReportService._sales_totals(db)
        first_sale_at, last_sale_at = db.query(
            func.min(models.Sale.created_at),
            func.max(models.Sale.created_at),
        ).one()
        return {
            "total_sales": count,
            "total_amount": total,
            "average_amount": average,
            "first_sale_at": first_sale_at,
            "last_sale_at": last_sale_at,
        }

    @staticmethod
    def sales_by_plan(db: Session) -> List[Dict[str, Any]]:
        quantity = func.count(models.Sale.id).label("quantity")
        rows = (
            db.query(
                models.Sale.plan,
                quantity,
                func.sum(models.Sale.amount).label("total_amount"),
                func.avg(models.Sale.amount).label("average_amount"),
            )
            .group_by(models.Sale.plan)
            .order_by(quantity.desc(), models.Sale.plan.asc())
            .all()
        )
        return [
            {
                "plan": models.SalePlan(row.plan),
                "quantity": int(row.quantity),
                "total_amount": _money(row.total_amount),
                "average_amount": _money(row.average_amount),
            }
            for row in rows
        ]

    @staticmethod
    def ad_spend_summary(db: Session) -> Dict[str, Any]:
        count, total = ReportService._ad_spend_totals(db)
        first_spend_at, last_spend_at = db.query(
            func.min(models.AdSpend.created_at),
            func.max(models.AdSpend.created_at),
        ).one()
        return {
            "total_records": count,
            "total_amount": total,
            "first_spend_at": first_spend_at,
            "last_spend_at": last_spend_at,
        }

    @staticmethod
    def dashboard(db: Session) -> Dict[str, Any]:
        sales_count, total_sales, average_sale = ReportService._sales_totals(db)
        ad_spend_count, total_ad_spend = ReportService._ad_spend_totals(db)
        return {
            "total_sales": total_sales,
            "sales_count": sales_count,
            "average_sale": average_sale,
            "total_ad_spend": total_ad_spend,
            "ad_spend_count": ad_spend_count,
            "net_profit": total_sales - total_ad_spend,
            "roi_percentage": compute_roi(total_sales, total_ad_spend),
        }

    @staticmethod
    def dashboard_stats(db: Session) -> Dict[str, Any]:
        """Dashboard figures shaped as a single object for API consumers."""

        stats = ReportService.dashboard(db)
        stats["roi"] = stats.pop("roi_percentage")
        return stats

    @staticmethod
    def sales_by_plan_payload(db: Session) -> List[Dict[str, Any]]:
        """Per-plan quantity and total; an empty list when there are no sales."""

        return [
            {
                "plan": row["plan"].value,
                "quantity": row["quantity"],
                "total_amount": row["total_amount"],
            }
            for row in ReportService.sales_by_plan(db)
        ]
