"""Application clock pinned to a single configurable timezone."""

from __future__ import annotations

import os
from datetime import datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

APP_TIMEZONE_ENV = "APP_TIMEZONE"
DEFAULT_TIMEZONE = "America/Sao_Paulo"


@lru_cache(maxsize=1)
def app_timezone() -> tzinfo:
    """Return the timezone every stored timestamp is expressed in."""

    name = os.getenv(APP_TIMEZONE_ENV) or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"{APP_TIMEZONE_ENV}={name!r} is not a known timezone") from exc


def now() -> datetime:
    return datetime.now(app_timezone())


def to_app_timezone(value: datetime) -> datetime:
    """Convert an aware timestamp to the application timezone.

    Naive values are assumed to be UTC, which is how they are persisted on
    engines without native timezone support.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        value = value.replace(tzinfo=ZoneInfo("UTC"))
    return value.astimezone(app_timezone())


def ensure_aware(value: datetime) -> datetime:
    """Attach the application timezone to naive timestamps supplied by callers."""

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=app_timezone())
    return value
