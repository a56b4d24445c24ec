"""Router exposing sale operations."""

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
from ..models import SaleKind, SalePlan
from ..security import Operation, Resource, require_permission
from ..services import RecordNotFoundError, RecordValidationError, SaleService

router = APIRouter()


@router.get(
    "/",
    response_model=schemas.SaleListResponse,
    dependencies=[Depends(require_permission(Resource.SALES, Operation.SELECT))],
)
def list_sales(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0, description="Number of sales to skip"),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of sales to return"),
    plan: Optional[SalePlan] = Query(None, description="Filter by plan"),
    kind: Optional[SaleKind] = Query(None, description="Filter by payment kind"),
    search: Optional[str] = Query(None, description="Filter by customer name"),
    start_date: Optional[datetime] = Query(None, description="Return sales registered on or after this instant"),
    end_date: Optional[datetime] = Query(None, description="Return sales registered on or before this instant"),
    min_amount: Optional[Decimal] = Query(None, ge=0, description="Minimum sale amount"),
    max_amount: Optional[Decimal] = Query(None, ge=0, description="Maximum sale amount"),
    order: schemas.SortOrder = Query(schemas.SortOrder.CREATED_AT_DESC, description="Result ordering"),
) -> schemas.SaleListResponse:
    """Return sales with pagination and filtering, newest first by default."""

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

    items, total = SaleService.list_sales(
        db,
        skip=skip,
        limit=limit,
        plan=plan,
        kind=kind,
        search=search,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
        order=order,
    )
    return schemas.SaleListResponse(items=items, total=total, limit=limit, skip=skip)


@router.post(
    "/",
    response_model=schemas.SaleRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Resource.SALES, Operation.INSERT))],
)
def create_sale(sale_in: schemas.SaleCreate, db: Session = Depends(get_db)) -> schemas.SaleRead:
    try:
        return SaleService.create_sale(db, sale_in)
    except RecordValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get(
    "/{sale_id}",
    response_model=schemas.SaleRead,
    dependencies=[Depends(require_permission(Resource.SALES, Operation.SELECT))],
)
def get_sale(sale_id: uuid.UUID, db: Session = Depends(get_db)) -> schemas.SaleRead:
    sale = SaleService.get_sale(db, sale_id)
    if sale is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")
    return sale


@router.patch(
    "/{sale_id}",
    response_model=schemas.SaleRead,
    dependencies=[Depends(require_permission(Resource.SALES, Operation.UPDATE))],
)
def update_sale(
    sale_id: uuid.UUID,
    sale_in: schemas.SaleUpdate,
    db: Session = Depends(get_db),
) -> schemas.SaleRead:
    try:
        return SaleService.update_sale(db, sale_id, sale_in)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RecordValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete(
    "/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Resource.SALES, Operation.DELETE))],
)
def delete_sale(sale_id: uuid.UUID, db: Session = Depends(get_db)) -> None:
    try:
        SaleService.delete_sale(db, sale_id)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
