"""CSV export of the filtered transaction rows."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import Sequence

from .rows import DerivedRow

EXPORT_FIELDS: tuple[str, ...] = (
    "category",
    "categoryIcon",
    "description",
    "type",
    "amount",
    "formattedAmount",
    "date",
)


def _raw_amount(amount: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def export_record(row: DerivedRow) -> dict[str, str]:
    return {
        "category": row.category,
        "categoryIcon": row.category_icon,
        "description": row.description,
        "type": row.type,
        "amount": _raw_amount(row.amount),
        "formattedAmount": row.formatted_amount,
        "date": row.record.date_text,
    }


def export_csv(rows: Sequence[DerivedRow]) -> str:
    """Serialize every row given (not just one page) as a CSV document.

    Output depends only on ``rows``; quoting follows the csv module's minimal
    quoting so commas, quotes and newlines in descriptions survive a re-parse.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_FIELDS, lineterminator="\r\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(export_record(row))
    return buffer.getvalue()


def export_filename(now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%S")
    return f"transactions-{stamp}.csv"
