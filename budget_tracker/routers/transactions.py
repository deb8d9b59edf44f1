"""Transaction endpoints: create/delete, the raw history and the table view."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.core.config import settings
from budget_tracker.core.database import get_db
from budget_tracker.core.deps import get_current_user, get_history_cache
from budget_tracker.data_access import QueryCache
from budget_tracker.schemas import (
    FacetOptionOut,
    FacetsOut,
    TransactionCreate,
    TransactionHistoryRow,
    TransactionOut,
    TransactionTableOut,
)
from budget_tracker.services import TransactionService, UserSettingsService
from budget_tracker.table import (
    FilterState,
    PageState,
    SortState,
    TableView,
    derive_rows,
    export_csv,
    export_filename,
    render,
)
from budget_tracker.utils.dates import validate_date_range

from .errors import http_errors

router = APIRouter(tags=["transactions"])


def _history_row(row) -> TransactionHistoryRow:
    return TransactionHistoryRow(**row.to_dict())


def _table_view(
    db: Session,
    cache: QueryCache,
    user_id: int,
    start: datetime,
    end: datetime,
    search: str | None,
    category: list[str] | None,
    type: list[models.TransactionType] | None,
    sort: str | None,
    desc: bool,
    page: int,
) -> tuple[TableView, str]:
    with http_errors():
        start, end = validate_date_range(start, end)
    records = TransactionService(db, cache).cached_history(user_id, start, end)
    currency = UserSettingsService(db).currency_for(user_id)
    filters = FilterState.build(
        search=search,
        category=category,
        type=[t.value for t in type] if type else None,
    )
    view = render(
        records,
        filters,
        SortState.by(sort, descending=desc),
        PageState(page_index=page, page_size=settings.TABLE_PAGE_SIZE),
        currency,
    )
    return view, currency


@router.post("/transactions", response_model=TransactionOut, status_code=201)
def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_history_cache),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        return TransactionService(db, cache).create(
            current_user.id,
            amount=payload.amount,
            description=payload.description,
            date=payload.date,
            category=payload.category,
            type=payload.type,
        )


@router.delete("/transactions/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: int,
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_history_cache),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        TransactionService(db, cache).delete(current_user.id, txn_id)
    return None


@router.get("/transactions-history", response_model=list[TransactionHistoryRow])
def transactions_history(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_history_cache),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        start, end = validate_date_range(start, end)
    records = TransactionService(db, cache).cached_history(current_user.id, start, end)
    currency = UserSettingsService(db).currency_for(current_user.id)
    return [_history_row(r) for r in derive_rows(records, currency)]


@router.get("/transactions-table", response_model=TransactionTableOut)
def transactions_table(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    search: str | None = Query(None, max_length=200),
    category: list[str] | None = Query(None),
    type: list[models.TransactionType] | None = Query(None),
    sort: str | None = Query(None, description="Column key to sort by; unknown keys keep the default order"),
    desc: bool = Query(False),
    page: int = Query(0, ge=0, description="0-based page index"),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_history_cache),
    current_user: models.User = Depends(get_current_user),
):
    view, currency = _table_view(db, cache, current_user.id, start, end, search, category, type, sort, desc, page)
    return TransactionTableOut(
        rows=[_history_row(r) for r in view.visible_rows],
        facets=FacetsOut(
            categories=[FacetOptionOut(label=o.label, value=o.value) for o in view.facets.categories],
            types=[FacetOptionOut(label=o.label, value=o.value) for o in view.facets.types],
        ),
        page_index=view.page_index,
        page_size=view.page.page_size,
        page_count=view.page_count,
        can_previous=view.page.can_previous,
        can_next=view.page.can_next,
        total_count=view.total_rows,
        filtered_count=view.filtered_count,
        has_active_filters=view.has_active_filters,
        currency=currency,
    )


@router.get("/transactions-table/export")
def export_transactions_table(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    search: str | None = Query(None, max_length=200),
    category: list[str] | None = Query(None),
    type: list[models.TransactionType] | None = Query(None),
    sort: str | None = Query(None),
    desc: bool = Query(False),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_history_cache),
    current_user: models.User = Depends(get_current_user),
):
    view, _currency = _table_view(db, cache, current_user.id, start, end, search, category, type, sort, desc, 0)
    return Response(
        content=export_csv(view.filtered_rows),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"',
            "X-Total-Count": str(view.filtered_count),
        },
    )
