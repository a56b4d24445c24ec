"""Helpers shared by the record services to validate input before writing."""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from ..errors import RecordValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "payload"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def coerce_payload(schema: Type[SchemaT], data: SchemaT | Mapping[str, Any]) -> SchemaT:
    """Return ``data`` as an instance of ``schema``, validating raw mappings."""

    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise RecordValidationError(_describe(exc)) from exc


def parse_identifier(value: Any) -> Optional[str]:
    """Return the canonical text form of a record id, or ``None`` when it is not a UUID."""

    try:
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))
    except ValueError:
        return None


def changed_fields(payload: BaseModel, required: Iterable[str]) -> dict[str, Any]:
    """Extract the fields set on an update payload, refusing nulls for required columns."""

    update_data = payload.model_dump(exclude_unset=True)
    for field in required:
        if field in update_data and update_data[field] is None:
            raise RecordValidationError(f"{field}: field is required and cannot be null")
    return update_data


def commit_or_reject(db: Session, message: str) -> None:
    """Commit the session, turning constraint violations into validation errors."""

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise RecordValidationError(message) from exc


def apply_changes(record: Any, update_data: Mapping[str, Any], *, touch_field: str) -> None:
    """Assign validated values; an empty update still counts as a modification."""

    if not update_data:
        flag_modified(record, touch_field)
        return
    for field, value in update_data.items():
        setattr(record, field, value)
