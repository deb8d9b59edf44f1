from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Mapping

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class FilterState:
    """Column filters plus the free-text search.

    ``columns`` maps a column key to the accepted values; an empty or missing
    entry means the column is unrestricted.
    """

    columns: Mapping[str, frozenset[str]] = field(default_factory=dict)
    search: str = ""

    @classmethod
    def build(cls, search: str | None = None, **columns: Iterable[str] | None) -> "FilterState":
        cleaned = {k: frozenset(v) for k, v in columns.items() if v}
        return cls(columns=cleaned, search=search or "")

    def accepted(self, key: str) -> frozenset[str]:
        return frozenset(self.columns.get(key) or ())

    @property
    def is_active(self) -> bool:
        return any(self.columns.values()) or bool(self.search)

    def with_column(self, key: str, values: Iterable[str] | None) -> "FilterState":
        updated = dict(self.columns)
        values = frozenset(values or ())
        if values:
            updated[key] = values
        else:
            updated.pop(key, None)
        return FilterState(columns=updated, search=self.search)

    def toggle(self, key: str, value: str) -> "FilterState":
        current = self.accepted(key)
        return self.with_column(key, current - {value} if value in current else current | {value})

    def with_search(self, search: str | None) -> "FilterState":
        return FilterState(columns=dict(self.columns), search=search or "")

    def cleared(self) -> "FilterState":
        return FilterState()


@dataclass(frozen=True)
class SortKey:
    column: str
    direction: SortDirection = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class SortState:
    keys: tuple[SortKey, ...] = ()

    @classmethod
    def by(cls, column: str | None, descending: bool = False) -> "SortState":
        if not column:
            return cls()
        return cls(keys=(SortKey(column, "desc" if descending else "asc"),))

    def toggled(self, column: str) -> "SortState":
        """Cycle a column through asc -> desc -> unsorted, like a header click."""
        current = self.keys[0] if self.keys else None
        if current is None or current.column != column:
            return SortState.by(column)
        if not current.descending:
            return SortState.by(column, descending=True)
        return SortState()


@dataclass(frozen=True)
class PageState:
    page_index: int = 0
    page_size: int = 8

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.page_index < 0:
            raise ValueError("page_index must not be negative")
