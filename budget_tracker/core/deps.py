from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from budget_tracker.core.config import settings
from budget_tracker.core.database import get_db
from budget_tracker.data_access import QueryCache
from budget_tracker import models

# Process-wide cache of history queries, keyed per user and date range.
history_cache: QueryCache = QueryCache(max_entries=settings.HISTORY_CACHE_SIZE)


def get_history_cache() -> QueryCache:
    return history_cache


def get_current_user(db: Session = Depends(get_db)) -> models.User:
    """Very lightweight current user resolver.

    Authentication lives outside this service; until it is wired in, the first
    user is the current one (a demo user is created if none exist). Tests may
    override this dependency to simulate different users.
    """
    user = db.query(models.User).order_by(models.User.id).first()
    if not user:
        user = models.User(email="demo@example.com", is_active=True)
        db.add(user)
        db.commit()
        db.refresh(user)
    return user
