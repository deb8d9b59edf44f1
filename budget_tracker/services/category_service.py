from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.errors import ConflictError, NotFoundError
from budget_tracker.logging_setup import get_logger

_logger = get_logger("budget_tracker.services.categories")


class CategoryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self, user_id: int, type: models.TransactionType | None = None) -> list[models.Category]:
        q = self.db.query(models.Category).filter(models.Category.user_id == user_id)
        if type is not None:
            q = q.filter(models.Category.type == type)
        return q.order_by(models.Category.name, models.Category.id).all()

    def get_by_name(self, user_id: int, name: str, type: models.TransactionType) -> models.Category | None:
        return (
            self.db.query(models.Category)
            .filter(
                models.Category.user_id == user_id,
                models.Category.name == name,
                models.Category.type == type,
            )
            .first()
        )

    def create(self, user_id: int, *, name: str, icon: str, type: models.TransactionType) -> models.Category:
        if self.get_by_name(user_id, name, type) is not None:
            raise ConflictError("Category already exists")
        row = models.Category(user_id=user_id, name=name, icon=icon or "", type=type)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent create of the same (name, type)
            self.db.rollback()
            raise ConflictError("Category already exists")
        self.db.refresh(row)
        _logger.info("user %s created %s category %r", user_id, type.value, name)
        return row

    def delete(self, user_id: int, category_id: int) -> None:
        """Delete a category. Transactions keep their copied name and icon."""
        row = (
            self.db.query(models.Category)
            .filter(models.Category.id == category_id, models.Category.user_id == user_id)
            .first()
        )
        if row is None:
            raise NotFoundError("Category not found")
        self.db.delete(row)
        self.db.commit()
        _logger.info("user %s deleted category %s", user_id, category_id)
