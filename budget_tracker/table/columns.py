"""Column definitions for the transaction table.

Each column says how to read a value off a row, how to order by it, whether it
can be faceted, and how to render it as text. The filter, sort and export
stages look columns up here instead of special-casing keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .rows import DerivedRow

Accessor = Callable[[DerivedRow], Any]
Renderer = Callable[[DerivedRow], str]


@dataclass(frozen=True)
class Column:
    key: str
    title: str
    accessor: Accessor
    sort_key: Accessor
    filterable: bool = False
    sortable: bool = True
    renderer: Renderer | None = None

    def value(self, row: DerivedRow) -> Any:
        return self.accessor(row)

    def render(self, row: DerivedRow) -> str:
        if self.renderer is not None:
            return self.renderer(row)
        value = self.accessor(row)
        return "" if value is None else str(value)


class ColumnBuilder:
    """Fluent builder for :class:`Column`.

    >>> col = ColumnBuilder("type").title("Type").filterable().build()
    >>> col.filterable
    True
    """

    def __init__(self, key: str) -> None:
        self._key = key
        self._title = key.replace("_", " ").title()
        self._accessor: Accessor = lambda row: getattr(row, key, None)
        self._sort_key: Accessor | None = None
        self._filterable = False
        self._sortable = True
        self._renderer: Renderer | None = None

    def title(self, title: str) -> "ColumnBuilder":
        self._title = title
        return self

    def accessor(self, fn: Accessor) -> "ColumnBuilder":
        self._accessor = fn
        return self

    def sort_by(self, fn: Accessor) -> "ColumnBuilder":
        self._sort_key = fn
        return self

    def filterable(self, flag: bool = True) -> "ColumnBuilder":
        self._filterable = flag
        return self

    def sortable(self, flag: bool = True) -> "ColumnBuilder":
        self._sortable = flag
        return self

    def render_with(self, fn: Renderer) -> "ColumnBuilder":
        self._renderer = fn
        return self

    def build(self) -> Column:
        return Column(
            key=self._key,
            title=self._title,
            accessor=self._accessor,
            sort_key=self._sort_key or _folded(self._accessor),
            filterable=self._filterable,
            sortable=self._sortable,
            renderer=self._renderer,
        )


def _folded(accessor: Accessor) -> Accessor:
    """Sort text case-insensitively; other values sort as they are."""

    def key(row: DerivedRow) -> Any:
        value = accessor(row)
        return value.casefold() if isinstance(value, str) else value

    return key

def _render_date(row: DerivedRow) -> str:
    # e.g. "Jan 5, 2024", always in UTC
    d = row.date
    return f"{d.strftime('%b')} {d.day}, {d.year}"


TRANSACTION_COLUMNS: tuple[Column, ...] = (
    ColumnBuilder("category")
    .title("Category")
    .filterable()
    .render_with(lambda row: f"{row.category_icon} {row.category}".strip())
    .build(),
    ColumnBuilder("description").title("Description").build(),
    ColumnBuilder("date").title("Date").render_with(_render_date).build(),
    ColumnBuilder("type").title("Type").filterable().build(),
    ColumnBuilder("amount")
    .title("Amount")
    .sort_by(lambda row: row.amount)
    .render_with(lambda row: row.formatted_amount)
    .build(),
)

_COLUMNS_BY_KEY = {c.key: c for c in TRANSACTION_COLUMNS}


def get_column(key: str | None, columns: tuple[Column, ...] = TRANSACTION_COLUMNS) -> Column | None:
    if not key:
        return None
    if columns is TRANSACTION_COLUMNS:
        return _COLUMNS_BY_KEY.get(key)
    return next((c for c in columns if c.key == key), None)
