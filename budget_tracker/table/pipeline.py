"""The transaction table as one explicit pipeline.

``render`` takes the loaded records and the three pieces of control state and
returns everything a view needs. ``TransactionTable`` keeps that state for a
single consumer and re-renders after each user action.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..core.config import settings
from .columns import TRANSACTION_COLUMNS, Column
from .export import export_csv
from .facets import Facets, build_facets
from .filtering import filter_rows
from .pagination import Page, go_to_page, next_page, paginate, previous_page
from .rows import DerivedRow, TransactionRecord, derive_rows
from .sorting import sort_rows
from .state import FilterState, PageState, SortState


@dataclass(frozen=True)
class TableView:
    """One rendered state of the table.

    ``filtered_rows`` keeps the filter order (what an export writes),
    ``ordered_rows`` is the same set after sorting (what pages are cut from).
    """

    visible_rows: list[DerivedRow]
    filtered_rows: list[DerivedRow]
    ordered_rows: list[DerivedRow]
    facets: Facets
    page: Page[DerivedRow]
    total_rows: int
    has_active_filters: bool

    @property
    def page_count(self) -> int:
        return self.page.page_count

    @property
    def page_index(self) -> int:
        return self.page.page_index

    @property
    def filtered_count(self) -> int:
        return len(self.filtered_rows)


def render(
    records: Iterable[TransactionRecord],
    filters: FilterState | None = None,
    sort: SortState | None = None,
    page: PageState | None = None,
    currency: str | None = None,
    columns: tuple[Column, ...] = TRANSACTION_COLUMNS,
) -> TableView:
    filters = filters or FilterState()
    sort = sort or SortState()
    page = page or PageState(page_size=settings.TABLE_PAGE_SIZE)
    rows = derive_rows(records, currency or settings.DEFAULT_CURRENCY)

    # facets always reflect the full loaded set, never the filtered one
    facets = build_facets(rows)
    filtered = filter_rows(rows, filters, columns)
    ordered = sort_rows(filtered, sort, columns)
    current = paginate(ordered, page)
    return TableView(
        visible_rows=current.rows,
        filtered_rows=filtered,
        ordered_rows=ordered,
        facets=facets,
        page=current,
        total_rows=len(rows),
        has_active_filters=filters.is_active,
    )


@dataclass
class TransactionTable:
    """Stateful table for a single owner; every mutation returns a fresh view."""

    records: Sequence[TransactionRecord] = ()
    currency: str = field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    page: PageState = field(default_factory=lambda: PageState(page_size=settings.TABLE_PAGE_SIZE))

    def view(self) -> TableView:
        return render(self.records, self.filters, self.sort, self.page, self.currency)

    def load(self, records: Sequence[TransactionRecord], currency: str | None = None) -> TableView:
        self.records = tuple(records)
        if currency:
            self.currency = currency
        return self.view()

    def search(self, text: str | None) -> TableView:
        self.filters = self.filters.with_search(text)
        return self.view()

    def set_column_filter(self, key: str, values: Iterable[str] | None) -> TableView:
        self.filters = self.filters.with_column(key, values)
        return self.view()

    def toggle_filter_value(self, key: str, value: str) -> TableView:
        self.filters = self.filters.toggle(key, value)
        return self.view()

    def clear_filters(self) -> TableView:
        self.filters = self.filters.cleared()
        return self.view()

    def sort_by(self, column: str | None, descending: bool = False) -> TableView:
        self.sort = SortState.by(column, descending)
        return self.view()

    def toggle_sort(self, column: str) -> TableView:
        self.sort = self.sort.toggled(column)
        return self.view()

    def next_page(self) -> TableView:
        self.page = next_page(self.page, self.view().filtered_count)
        return self.view()

    def previous_page(self) -> TableView:
        self.page = previous_page(self.page, self.view().filtered_count)
        return self.view()

    def go_to_page(self, page_index: int) -> TableView:
        self.page = go_to_page(self.page, page_index, self.view().filtered_count)
        return self.view()

    def export(self) -> str:
        return export_csv(self.view().filtered_rows)
