from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from .state import PageState

T = TypeVar("T")


def page_count(total_rows: int, page_size: int) -> int:
    """Number of pages for ``total_rows``; an empty set still has one page."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(max(total_rows, 0) / page_size))


def clamp_page_index(page_index: int, total_rows: int, page_size: int) -> int:
    return max(0, min(page_index, page_count(total_rows, page_size) - 1))


@dataclass(frozen=True)
class Page(Generic[T]):
    rows: list[T]
    page_index: int
    page_size: int
    page_count: int
    total_rows: int

    @property
    def can_previous(self) -> bool:
        return self.page_index > 0

    @property
    def can_next(self) -> bool:
        return self.page_index < self.page_count - 1


def paginate(rows: Sequence[T], state: PageState) -> Page[T]:
    """Slice out ``state.page_index``.

    The index is used as given: if it points past the last page (for example
    after a filter narrowed the rows) the page is simply empty.
    """
    start = state.page_index * state.page_size
    return Page(
        rows=list(rows[start:start + state.page_size]),
        page_index=state.page_index,
        page_size=state.page_size,
        page_count=page_count(len(rows), state.page_size),
        total_rows=len(rows),
    )


def go_to_page(state: PageState, page_index: int, total_rows: int) -> PageState:
    return PageState(
        page_index=clamp_page_index(page_index, total_rows, state.page_size),
        page_size=state.page_size,
    )


def next_page(state: PageState, total_rows: int) -> PageState:
    return go_to_page(state, state.page_index + 1, total_rows)


def previous_page(state: PageState, total_rows: int) -> PageState:
    return go_to_page(state, state.page_index - 1, total_rows)
