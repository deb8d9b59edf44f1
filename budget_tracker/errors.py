"""Domain errors raised by the service layer.

Routers translate these into ``HTTPException`` responses; services never import
FastAPI.
"""

from __future__ import annotations


class BudgetTrackerError(Exception):
    """Base class for all service-level failures."""

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(BudgetTrackerError):
    status_code = 400


class NotFoundError(BudgetTrackerError):
    status_code = 404


class ConflictError(BudgetTrackerError):
    status_code = 409
