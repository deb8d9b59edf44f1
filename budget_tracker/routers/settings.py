from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.core.database import get_db
from budget_tracker.core.deps import get_current_user
from budget_tracker.currencies import CURRENCIES
from budget_tracker.schemas import CurrencyOut, UserSettingsOut, UserSettingsUpdate
from budget_tracker.services import UserSettingsService

from .errors import http_errors

router = APIRouter(tags=["settings"])


@router.get("/user-settings", response_model=UserSettingsOut)
def get_user_settings(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return UserSettingsService(db).get_or_create(current_user.id)


@router.put("/user-settings", response_model=UserSettingsOut)
def update_user_settings(
    payload: UserSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        return UserSettingsService(db).update_currency(current_user.id, payload.currency)


@router.get("/currencies", response_model=list[CurrencyOut])
def list_currencies():
    return [CurrencyOut(value=c.value, label=c.label, locale=c.locale) for c in CURRENCIES]
