from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from budget_tracker.errors import BudgetTrackerError


@contextmanager
def http_errors() -> Iterator[None]:
    """Re-raise service errors as ``HTTPException`` with their status code."""
    try:
        yield
    except BudgetTrackerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
