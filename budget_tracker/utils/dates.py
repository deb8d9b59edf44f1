"""
Date helpers.

Datetimes are stored naive in UTC. Everything that arrives from a request is
normalized through ``to_utc_naive`` before it reaches a query.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone

from ..core.config import settings
from ..errors import InvalidRequestError


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive input is assumed to be UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def validate_date_range(start: datetime, end: datetime, *, max_days: int | None = None) -> tuple[datetime, datetime]:
    """Normalize an inclusive ``[start, end]`` range and enforce its bounds.

    Raises ``InvalidRequestError`` when ``start`` is after ``end`` or the range
    spans more than ``max_days`` (``MAX_DATE_RANGE_DAYS`` by default).
    """
    start = to_utc_naive(start)
    end = to_utc_naive(end)
    if start > end:
        raise InvalidRequestError("'from' must not be after 'to'")
    limit = settings.MAX_DATE_RANGE_DAYS if max_days is None else max_days
    if (end.date() - start.date()).days > limit:
        raise InvalidRequestError(f"Date range too big. Allowed range is {limit} days!")
    return start, end


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """Half-open ``[Jan 1, next Jan 1)`` for ``year``."""
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Half-open bounds for a 0-based ``month`` (0 = January)."""
    if not 0 <= month <= 11:
        raise InvalidRequestError("month must be between 0 and 11")
    start = datetime(year, month + 1, 1)
    days = calendar.monthrange(year, month + 1)[1]
    return start, start + timedelta(days=days)
