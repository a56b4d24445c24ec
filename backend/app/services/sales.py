"""Business logic for sales."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import RecordNotFoundError
from .validation import (
    apply_changes,
    changed_fields,
    coerce_payload,
    commit_or_reject,
    parse_identifier,
)

LOGGER = logging.getLogger(__name__)

_SALE_ORDERINGS = {
    schemas.SortOrder.CREATED_AT_DESC: (models.Sale.created_at.desc(),),
    schemas.SortOrder.CREATED_AT_ASC: (models.Sale.created_at.asc(),),
    schemas.SortOrder.AMOUNT_DESC: (models.Sale.amount.desc(), models.Sale.created_at.desc()),
    schemas.SortOrder.AMOUNT_ASC: (models.Sale.amount.asc(), models.Sale.created_at.desc()),
}


class SaleService:
    """Encapsulates CRUD operations for sales."""

    @staticmethod
    def list_sales(
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        plan: Optional[models.SalePlan] = None,
        kind: Optional[models.SaleKind] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        order: schemas.SortOrder = schemas.SortOrder.CREATED_AT_DESC,
    ) -> Tuple[Iterable[models.Sale], int]:
        query = db.query(models.Sale)

        if plan is not None:
            query = query.filter(models.Sale.plan == models.SalePlan(plan))
        if kind is not None:
            query = query.filter(models.Sale.kind == models.SaleKind(kind))
        if search:
            normalized = f"%{search.strip().lower()}%"
            query = query.filter(func.lower(models.Sale.name).like(normalized))
        if start_date:
            query = query.filter(models.Sale.created_at >= start_date)
        if end_date:
            query = query.filter(models.Sale.created_at <= end_date)
        if min_amount is not None:
            query = query.filter(models.Sale.amount >= min_amount)
        if max_amount is not None:
            query = query.filter(models.Sale.amount <= max_amount)

        total = query.count()
        items = (
            query.order_by(*_SALE_ORDERINGS[schemas.SortOrder(order)])
            .offset(max(skip, 0))
            .limit(max(limit, 1))
            .all()
        )
        return items, total

    @staticmethod
    def get_sale(db: Session, sale_id: str | uuid.UUID) -> Optional[models.Sale]:
        identifier = parse_identifier(sale_id)
        if identifier is None:
            return None
        return db.query(models.Sale).filter(models.Sale.id == identifier).first()

    @staticmethod
    def require_sale(db: Session, sale_id: str) -> models.Sale:
        sale = SaleService.get_sale(db, sale_id)
        if sale is None:
            raise RecordNotFoundError(f"Sale {sale_id} not found")
        return sale

    @staticmethod
    def create_sale(
        db: Session, data: schemas.SaleCreate | Mapping[str, Any]
    ) -> models.Sale:
        payload = coerce_payload(schemas.SaleCreate, data)
        sale = models.Sale(**payload.model_dump())
        db.add(sale)
        commit_or_reject(db, "Sale violates a database constraint")
        db.refresh(sale)
        LOGGER.info("Registered sale %s (%s, %s)", sale.id, sale.plan.value, sale.amount)
        return sale

    @staticmethod
    def update_sale(
        db: Session, sale_id: str, data: schemas.SaleUpdate | Mapping[str, Any]
    ) -> models.Sale:
        payload = coerce_payload(schemas.SaleUpdate, data)
        update_data = changed_fields(payload, required=("name", "plan", "kind", "amount"))
        sale = SaleService.require_sale(db, sale_id)
        apply_changes(sale, update_data, touch_field="name")
        db.add(sale)
        commit_or_reject(db, "Sale violates a database constraint")
        db.refresh(sale)
        LOGGER.info("Updated sale %s fields=%s", sale.id, sorted(update_data))
        return sale

    @staticmethod
    def delete_sale(db: Session, sale_id: str) -> None:
        sale = SaleService.require_sale(db, sale_id)
        db.delete(sale)
        db.commit()
        LOGGER.info("Deleted sale %s", sale_id)
