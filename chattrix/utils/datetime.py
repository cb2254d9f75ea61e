"""Timestamp conversion between the domain and the database.

Entities carry aware datetimes. Columns store naive wall-clock values in the
zone named by ``APP_TIMEZONE`` so ordering by ``created_at`` stays consistent
across SQLite and server databases.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chattrix.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the zone timestamps are stored in, UTC when unset or unknown."""

    name = get_settings().app_timezone.strip()
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r, storing timestamps in UTC", name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at``-style fields."""

    return to_db_datetime(now_in_app_timezone())


def to_db_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the naive app-zone form written to columns.

    Naive input is assumed to already be app-zone wall-clock time.
    """

    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(get_app_timezone()).replace(tzinfo=None)


def from_db_datetime(value: datetime | None) -> datetime | None:
    """Attach the app zone to a value read from a column."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())
