from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..models import TransactionType
from .rows import DerivedRow


@dataclass(frozen=True)
class FacetOption:
    label: str
    value: str


@dataclass(frozen=True)
class Facets:
    categories: tuple[FacetOption, ...]
    types: tuple[FacetOption, ...]


TYPE_OPTIONS: tuple[FacetOption, ...] = tuple(
    FacetOption(label=t.value.capitalize(), value=t.value) for t in TransactionType
)


def category_options(rows: Sequence[DerivedRow]) -> tuple[FacetOption, ...]:
    """Distinct categories in first-seen order; the first icon seen for a name wins."""
    seen: dict[str, FacetOption] = {}
    for row in rows:
        if row.category in seen:
            continue
        label = f"{row.category_icon} {row.category}" if row.category_icon else row.category
        seen[row.category] = FacetOption(label=label, value=row.category)
    return tuple(seen.values())


def build_facets(rows: Sequence[DerivedRow]) -> Facets:
    return Facets(categories=category_options(rows), types=TYPE_OPTIONS)
