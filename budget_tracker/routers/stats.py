from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.core.database import get_db
from budget_tracker.core.deps import get_current_user
from budget_tracker.schemas import BalanceStatsOut, CategoryStatsItem, HistoryDataItem, Timeframe
from budget_tracker.services import StatsService
from budget_tracker.utils.dates import validate_date_range

from .errors import http_errors

router = APIRouter(tags=["stats"])


@router.get("/stats/balance", response_model=BalanceStatsOut)
def balance_stats(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        start, end = validate_date_range(start, end)
    return StatsService(db).balance(current_user.id, start, end)


@router.get("/stats/categories", response_model=list[CategoryStatsItem])
def category_stats(
    start: datetime = Query(..., alias="from"),
    end: datetime = Query(..., alias="to"),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        start, end = validate_date_range(start, end)
    return StatsService(db).categories(current_user.id, start, end)


@router.get("/history-periods", response_model=list[int])
def history_periods(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return StatsService(db).history_periods(current_user.id)


@router.get("/history-data", response_model=list[HistoryDataItem])
def history_data(
    timeframe: Timeframe = Query(...),
    year: int = Query(..., ge=1900, le=9998),
    month: int = Query(0, ge=0, le=11),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    with http_errors():
        return StatsService(db).history_data(current_user.id, timeframe, year, month)
