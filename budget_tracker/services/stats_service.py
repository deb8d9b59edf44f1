from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from budget_tracker import models
from budget_tracker.schemas import BalanceStatsOut, CategoryStatsItem, HistoryDataItem, Timeframe
from budget_tracker.utils.dates import month_bounds, to_utc_naive, year_bounds


class StatsService:
    """Aggregations behind the overview cards, category breakdown and history chart."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _in_range(self, q, user_id: int, start: datetime, end: datetime):
        return q.filter(
            models.Transaction.user_id == user_id,
            models.Transaction.date >= to_utc_naive(start),
            models.Transaction.date <= to_utc_naive(end),
        )

    def balance(self, user_id: int, start: datetime, end: datetime) -> BalanceStatsOut:
        q = self.db.query(models.Transaction.type, func.sum(models.Transaction.amount))
        totals = dict(self._in_range(q, user_id, start, end).group_by(models.Transaction.type).all())
        return BalanceStatsOut(
            income=float(totals.get(models.TransactionType.INCOME) or 0),
            expense=float(totals.get(models.TransactionType.EXPENSE) or 0),
        )

    def categories(self, user_id: int, start: datetime, end: datetime) -> list[CategoryStatsItem]:
        total = func.sum(models.Transaction.amount)
        q = self.db.query(
            models.Transaction.type,
            models.Transaction.category,
            func.min(models.Transaction.category_icon),
            total,
        )
        rows = (
            self._in_range(q, user_id, start, end)
            .group_by(models.Transaction.type, models.Transaction.category)
            .order_by(total.desc(), models.Transaction.category)
            .all()
        )
        return [
            CategoryStatsItem(type=t, category=name, category_icon=icon or "", amount=float(amount or 0))
            for t, name, icon, amount in rows
        ]

    def history_periods(self, user_id: int) -> list[int]:
        """Years that have at least one transaction; the current year when there are none."""
        year = extract("year", models.Transaction.date)
        years = [
            int(y)
            for (y,) in self.db.query(year)
            .filter(models.Transaction.user_id == user_id)
            .distinct()
            .order_by(year)
            .all()
            if y is not None
        ]
        return years or [datetime.now(timezone.utc).year]

    def history_data(self, user_id: int, timeframe: Timeframe, year: int, month: int = 0) -> list[HistoryDataItem]:
        """Income/expense per month of ``year``, or per day of ``month`` (0-based).

        Every bucket is present, zero-filled when nothing happened.
        """
        if timeframe == "year":
            start, end = year_bounds(year)
            bucket = extract("month", models.Transaction.date)
        else:
            start, end = month_bounds(year, month)
            bucket = extract("day", models.Transaction.date)

        rows = (
            self.db.query(bucket, models.Transaction.type, func.sum(models.Transaction.amount))
            .filter(
                models.Transaction.user_id == user_id,
                models.Transaction.date >= start,
                models.Transaction.date < end,
            )
            .group_by(bucket, models.Transaction.type)
            .all()
        )
        sums: dict[int, dict[str, float]] = defaultdict(lambda: {"income": 0.0, "expense": 0.0})
        for b, t, amount in rows:
            sums[int(b)][models.TransactionType(t).value] += float(amount or 0)

        if timeframe == "year":
            # SQL months are 1-based, the wire format is 0-based
            return [
                HistoryDataItem(year=year, month=m - 1, **sums.get(m, {"income": 0.0, "expense": 0.0}))
                for m in range(1, 13)
            ]
        days = calendar.monthrange(year, month + 1)[1]
        return [
            HistoryDataItem(year=year, month=month, day=d, **sums.get(d, {"income": 0.0, "expense": 0.0}))
            for d in range(1, days + 1)
        ]
