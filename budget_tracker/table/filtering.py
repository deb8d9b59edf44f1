from __future__ import annotations

from typing import Sequence

from .columns import TRANSACTION_COLUMNS, Column, get_column
from .rows import DerivedRow
from .state import FilterState


def _search_fields(row: DerivedRow) -> tuple[str, ...]:
    return (row.description, row.category, row.type, row.formatted_amount)


def matches_search(row: DerivedRow, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in (field or "").lower() for field in _search_fields(row))


def matches_columns(
    row: DerivedRow,
    filters: FilterState,
    columns: tuple[Column, ...] = TRANSACTION_COLUMNS,
) -> bool:
    for key, accepted in filters.columns.items():
        if not accepted:
            continue
        column = get_column(key, columns)
        if column is None or not column.filterable:
            # unknown keys restrict nothing
            continue
        if column.value(row) not in accepted:
            return False
    return True


def filter_rows(
    rows: Sequence[DerivedRow],
    filters: FilterState,
    columns: tuple[Column, ...] = TRANSACTION_COLUMNS,
) -> list[DerivedRow]:
    """Return the rows passing every column filter and the search, in input order."""
    return [
        row
        for row in rows
        if matches_columns(row, filters, columns) and matches_search(row, filters.search)
    ]
