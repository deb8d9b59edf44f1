from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.core.database import get_db
from budget_tracker.core.deps import get_current_user
from budget_tracker.schemas import CategoryCreate, CategoryOut
from budget_tracker.services import CategoryService

from .errors import http_errors

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(
    type: models.TransactionType | None = Query(None),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return CategoryService(db).list(current_user.id, type)


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        return CategoryService(db).create(current_user.id, name=payload.name, icon=payload.icon, type=payload.type)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        CategoryService(db).delete(current_user.id, category_id)
    return None
