"""Business logic for advertising spend."""

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

_AD_SPEND_ORDERINGS = {
    schemas.SortOrder.CREATED_AT_DESC: (models.AdSpend.created_at.desc(),),
    schemas.SortOrder.CREATED_AT_ASC: (models.AdSpend.created_at.asc(),),
    schemas.SortOrder.AMOUNT_DESC: (models.AdSpend.amount.desc(), models.AdSpend.created_at.desc()),
    schemas.SortOrder.AMOUNT_ASC: (models.AdSpend.amount.asc(), models.AdSpend.created_at.desc()),
}


class AdSpendService:
    """Encapsulates CRUD operations for advertising spend."""

    @staticmethod
    def list_ad_spend(
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        order: schemas.SortOrder = schemas.SortOrder.CREATED_AT_DESC,
    ) -> Tuple[Iterable[models.AdSpend], int]:
        query = db.query(models.AdSpend)

        if search:
            normalized = f"%{search.strip().lower()}%"
            query = query.filter(func.lower(models.AdSpend.description).like(normalized))
        if start_date:
            query = query.filter(models.AdSpend.created_at >= start_date)
        if end_date:
            query = query.filter(models.AdSpend.created_at <= end_date)
        if min_amount is not None:
            query = query.filter(models.AdSpend.amount >= min_amount)
        if max_amount is not None:
            query = query.filter(models.AdSpend.amount <= max_amount)

        total = query.count()
        items = (
            query.order_by(*_AD_SPEND_ORDERINGS[schemas.SortOrder(order)])
            .offset(max(skip, 0))
            .limit(max(limit, 1))
            .all()
        )
        return items, total

    @staticmethod
    def get_ad_spend(db: Session, ad_spend_id: str | uuid.UUID) -> Optional[models.AdSpend]:
        identifier = parse_identifier(ad_spend_id)
        if identifier is None:
            return None
        return db.query(models.AdSpend).filter(models.AdSpend.id == identifier).first()

    @staticmethod
    def require_ad_spend(db: Session, ad_spend_id: str) -> models.AdSpend:
        record = AdSpendService.get_ad_spend(db, ad_spend_id)
        if record is None:
            raise RecordNotFoundError(f"Ad spend {ad_spend_id} not found")
        return record

    @staticmethod
    def create_ad_spend(
        db: Session, data: schemas.AdSpendCreate | Mapping[str, Any]
    ) -> models.AdSpend:
        payload = coerce_payload(schemas.AdSpendCreate, data)
        record = models.AdSpend(**payload.model_dump())
        db.add(record)
        commit_or_reject(db, "Ad spend violates a database constraint")
        db.refresh(record)
        LOGGER.info("Registered ad spend %s (%s)", record.id, record.amount)
        return record

    @staticmethod
    def update_ad_spend(
        db: Session, ad_spend_id: str, data: schemas.AdSpendUpdate | Mapping[str, Any]
    ) -> models.AdSpend:
        payload = coerce_payload(schemas.AdSpendUpdate, data)
        update_data = changed_fields(payload, required=("description", "amount"))
        record = AdSpendService.require_ad_spend(db, ad_spend_id)
        apply_changes(record, update_data, touch_field="description")
        db.add(record)
        commit_or_reject(db, "Ad spend violates a database constraint")
        db.refresh(record)
        LOGGER.info("Updated ad spend %s fields=%s", record.id, sorted(update_data))
        return record

    @staticmethod
    def delete_ad_spend(db: Session, ad_spend_id: str) -> None:
        record = AdSpendService.require_ad_spend(db, ad_spend_id)
        db.delete(record)
        db.commit()
        LOGGER.info("Deleted ad spend %s", ad_spend_id)
