"""Router exposing advertising spend operations."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..clock import ensure_aware
from ..database import get_db
from ..security import Operation, Resource, require_permission
from ..services import AdSpendService, RecordNotFoundError, RecordValidationError

router = APIRouter()


@router.get(
    "/",
    response_model=schemas.AdSpendListResponse,
    dependencies=[Depends(require_permission(Resource.AD_SPEND, Operation.SELECT))],
)
def list_ad_spend(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of records to return"),
    search: Optional[str] = Query(None, description="Filter by description"),
    start_date: Optional[datetime] = Query(None, description="Return spend registered on or after this instant"),
    end_date: Optional[datetime] = Query(None, description="Return spend registered on or before this instant"),
    min_amount: Optional[Decimal] = Query(None, ge=0, description="Minimum amount"),
    max_amount: Optional[Decimal] = Query(None, ge=0, description="Maximum amount"),
    order: schemas.SortOrder = Query(schemas.SortOrder.CREATED_AT_DESC, description="Result ordering"),
) -> schemas.AdSpendListResponse:
    start_date = ensure_aware(start_date) if start_date else None
    end_date = ensure_aware(end_date) if end_date else None
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date cannot be after end_date",
        )
    if min_amount is not None and max_amount is not None and min_amount > max_amount:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="min_amount cannot be greater than max_amount",
        )

    items, total = AdSpendService.list_ad_spend(
        db,
        skip=skip,
        limit=limit,
        search=search,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
        order=order,
    )
    return schemas.AdSpendListResponse(items=items, total=total, limit=limit, skip=skip)


@router.post(
    "/",
    response_model=schemas.AdSpendRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Resource.AD_SPEND, Operation.INSERT))],
)
def create_ad_spend(
    spend_in: schemas.AdSpendCreate, db: Session = Depends(get_db)
) -> schemas.AdSpendRead:
    try:
        return AdSpendService.create_ad_spend(db, spend_in)
    except RecordValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get(
    "/{ad_spend_id}",
    response_model=schemas.AdSpendRead,
    dependencies=[Depends(require_permission(Resource.AD_SPEND, Operation.SELECT))],
)
def get_ad_spend(ad_spend_id: uuid.UUID, db: Session = Depends(get_db)) -> schemas.AdSpendRead:
    record = AdSpendService.get_ad_spend(db, ad_spend_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ad spend not found")
    return record


@router.patch(
    "/{ad_spend_id}",
    response_model=schemas.AdSpendRead,
    dependencies=[Depends(require_permission(Resource.AD_SPEND, Operation.UPDATE))],
)
def update_ad_spend(
    ad_spend_id: uuid.UUID,
    spend_in: schemas.AdSpendUpdate,
    db: Session = Depends(get_db),
) -> schemas.AdSpendRead:
    try:
        return AdSpendService.update_ad_spend(db, ad_spend_id, spend_in)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RecordValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete(
    "/{ad_spend_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Resource.AD_SPEND, Operation.DELETE))],
)
def delete_ad_spend(ad_spend_id: uuid.UUID, db: Session = Depends(get_db)) -> None:
    try:
        AdSpendService.delete_ad_spend(db, ad_spend_id)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
