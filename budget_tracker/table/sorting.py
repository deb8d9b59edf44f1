from __future__ import annotations

from typing import Sequence

from .columns import TRANSACTION_COLUMNS, Column, get_column
from .rows import DerivedRow
from .state import SortState


def sort_rows(
    rows: Sequence[DerivedRow],
    sort: SortState,
    columns: tuple[Column, ...] = TRANSACTION_COLUMNS,
) -> list[DerivedRow]:
    """Order rows by the first known sortable column in ``sort``.

    ``sorted`` is stable in both directions, so equal keys keep their input
    order. With no usable key the input order is returned unchanged.
    """
    for key in sort.keys:
        column = get_column(key.column, columns)
        if column is None or not column.sortable:
            continue
        return sorted(rows, key=column.sort_key, reverse=key.descending)
    return list(rows)
