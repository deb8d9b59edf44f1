from __future__ import annotations

from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.core.config import settings
from budget_tracker.currencies import is_supported_currency
from budget_tracker.errors import InvalidRequestError
from budget_tracker.logging_setup import get_logger

_logger = get_logger("budget_tracker.services.settings")


class UserSettingsService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_or_create(self, user_id: int) -> models.UserSettings:
        """Return the user's settings, creating them with the default currency on first use."""
        row = self.db.get(models.UserSettings, user_id)
        if row is None:
            row = models.UserSettings(user_id=user_id, currency=settings.DEFAULT_CURRENCY)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            _logger.info("created settings for user %s with %s", user_id, row.currency)
        return row

    def currency_for(self, user_id: int) -> str:
        row = self.db.get(models.UserSettings, user_id)
        return row.currency if row is not None and row.currency else settings.DEFAULT_CURRENCY

    def update_currency(self, user_id: int, currency: str) -> models.UserSettings:
        code = (currency or "").strip().upper()
        if not is_supported_currency(code):
            raise InvalidRequestError(f"Unsupported currency: {currency}")
        row = self.get_or_create(user_id)
        row.currency = code
        self.db.commit()
        self.db.refresh(row)
        _logger.info("user %s switched currency to %s", user_id, code)
        return row
