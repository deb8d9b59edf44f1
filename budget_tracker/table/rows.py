"""Row model for the transaction table.

A ``TransactionRecord`` is what the history endpoint returns. A ``DerivedRow``
wraps one record together with presentation-only fields computed for the
user's currency; it is rebuilt on every render and never written back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..currencies import format_amount
from ..models import TransactionType


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(text))


def serialize_date(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    utc = _as_utc(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class TransactionRecord:
    id: str
    date: datetime
    description: str
    amount: float
    type: TransactionType
    category: str
    category_icon: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransactionRecord":
        """Build a record from a JSON-like mapping.

        Accepts both the wire keys (``categoryIcon``) and the Python ones
        (``category_icon``). ``amount`` is stored as its magnitude.
        """
        icon = data.get("categoryIcon", data.get("category_icon", ""))
        return cls(
            id=str(data["id"]),
            date=_parse_datetime(data["date"]),
            description=str(data.get("description") or ""),
            amount=abs(float(data.get("amount") or 0)),
            type=TransactionType(data["type"]),
            category=str(data.get("category") or ""),
            category_icon=str(icon or ""),
        )

    @classmethod
    def from_model(cls, row: Any) -> "TransactionRecord":
        return cls(
            id=str(row.id),
            date=_as_utc(row.date),
            description=row.description or "",
            amount=abs(float(row.amount or 0)),
            type=TransactionType(row.type),
            category=row.category,
            category_icon=row.category_icon or "",
        )

    @property
    def date_text(self) -> str:
        return serialize_date(self.date)


@dataclass(frozen=True)
class DerivedRow:
    record: TransactionRecord
    formatted_amount: str

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def date(self) -> datetime:
        return self.record.date

    @property
    def description(self) -> str:
        return self.record.description

    @property
    def amount(self) -> float:
        return self.record.amount

    @property
    def type(self) -> str:
        return self.record.type.value

    @property
    def category(self) -> str:
        return self.record.category

    @property
    def category_icon(self) -> str:
        return self.record.category_icon

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.record.date_text,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category": self.category,
            "categoryIcon": self.category_icon,
            "formattedAmount": self.formatted_amount,
        }


def derive_row(record: TransactionRecord, currency: str) -> DerivedRow:
    return DerivedRow(record=record, formatted_amount=format_amount(record.amount, currency))


def derive_rows(records: Iterable[TransactionRecord], currency: str) -> list[DerivedRow]:
    return [derive_row(r, currency) for r in records]
