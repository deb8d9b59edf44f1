from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.data_access import QueryCache
from budget_tracker.errors import InvalidRequestError, NotFoundError
from budget_tracker.logging_setup import get_logger
from budget_tracker.table.rows import TransactionRecord
from budget_tracker.utils.dates import to_utc_naive

from .category_service import CategoryService

_logger = get_logger("budget_tracker.services.transactions")


class TransactionService:
    """Create, delete and list a user's transactions."""

    HISTORY_ENDPOINT = "transactions-history"

    def __init__(self, db: Session, cache: QueryCache[tuple[TransactionRecord, ...]] | None = None) -> None:
        self.db = db
        self.cache = cache

    def _invalidate(self, user_id: int) -> None:
        if self.cache is not None:
            self.cache.invalidate(self.HISTORY_ENDPOINT, user=user_id)

    def create(
        self,
        user_id: int,
        *,
        amount: float,
        description: str,
        date: datetime,
        category: str,
        type: models.TransactionType,
    ) -> models.Transaction:
        """Record a transaction against one of the user's categories.

        The category's name and icon are copied onto the row at this point, so
        later changes to the category never rewrite history.
        """
        category_row = CategoryService(self.db).get_by_name(user_id, category, type)
        if category_row is None:
            raise InvalidRequestError("Category not found")
        if amount is None or float(amount) <= 0:
            raise InvalidRequestError("Amount must be positive")

        row = models.Transaction(
            user_id=user_id,
            amount=abs(float(amount)),
            description=description or "",
            date=to_utc_naive(date),
            type=type,
            category=category_row.name,
            category_icon=category_row.icon,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        self._invalidate(user_id)
        _logger.info("user %s recorded %s %.2f in %r", user_id, type.value, row.amount, row.category)
        return row

    def delete(self, user_id: int, transaction_id: int) -> None:
        row = (
            self.db.query(models.Transaction)
            .filter(models.Transaction.id == transaction_id, models.Transaction.user_id == user_id)
            .first()
        )
        if row is None:
            raise NotFoundError("Transaction not found")
        self.db.delete(row)
        self.db.commit()
        self._invalidate(user_id)
        _logger.info("user %s deleted transaction %s", user_id, transaction_id)

    def history(self, user_id: int, start: datetime, end: datetime) -> list[TransactionRecord]:
        """Transactions dated within ``[start, end]`` (inclusive), newest first."""
        rows = (
            self.db.query(models.Transaction)
            .filter(
                models.Transaction.user_id == user_id,
                models.Transaction.date >= to_utc_naive(start),
                models.Transaction.date <= to_utc_naive(end),
            )
            .order_by(models.Transaction.date.desc(), models.Transaction.id.desc())
            .all()
        )
        return [TransactionRecord.from_model(r) for r in rows]

    def cached_history(self, user_id: int, start: datetime, end: datetime) -> tuple[TransactionRecord, ...]:
        """``history`` through the query cache when one is attached."""
        if self.cache is None:
            return tuple(self.history(user_id, start, end))

        def fetch(_endpoint: str, _params) -> tuple[TransactionRecord, ...]:
            return tuple(self.history(user_id, start, end))

        params = {"user": user_id, "from": to_utc_naive(start), "to": to_utc_naive(end)}
        return self.cache.get(self.HISTORY_ENDPOINT, params, fetch=fetch)
