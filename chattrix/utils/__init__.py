"""Utility helpers for reusable functionality."""

from .datetime import (
    from_db_datetime,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    to_db_datetime,
)

__all__ = [
    "from_db_datetime",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "to_db_datetime",
]
