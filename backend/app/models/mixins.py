"""Timestamp columns and the shared hook that maintains them."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import Column, event, func
from sqlalchemy.orm import attributes

from .. import clock
from ..db_types import TZDateTime

_RESOLUTION = timedelta(microseconds=1)


class TimestampMixin:
    """Adds ``created_at``/``updated_at`` columns kept in the application timezone."""

    created_at = Column(
        TZDateTime(),
        server_default=func.now(),
        nullable=False,
        comment="Date and time the record was registered",
    )
    updated_at = Column(
        TZDateTime(),
        server_default=func.now(),
        nullable=False,
        comment="Date and time of the last modification",
    )


def _previous_value(target: TimestampMixin, key: str) -> datetime | None:
    history = attributes.get_history(target, key)
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


def stamp_created(_mapper, _connection, target: TimestampMixin) -> None:
    if target.created_at is None:
        target.created_at = clock.now()
    target.updated_at = target.created_at


def stamp_updated(_mapper, _connection, target: TimestampMixin) -> None:
    """Refresh ``updated_at`` regardless of what the caller assigned."""

    stamp = clock.now()
    floor = _previous_value(target, "updated_at")
    created_at = target.created_at
    if created_at is not None and (floor is None or created_at > floor):
        floor = created_at
    if floor is not None and stamp <= floor:
        stamp = floor + _RESOLUTION
    target.updated_at = stamp


event.listen(TimestampMixin, "before_insert", stamp_created, propagate=True)
event.listen(TimestampMixin, "before_update", stamp_updated, propagate=True)
