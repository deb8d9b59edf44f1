from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .currencies import is_supported_currency
from .models import TransactionType

Timeframe = Literal["month", "year"]

_MIN_TRANSACTION_DATE = datetime(1900, 1, 1, tzinfo=timezone.utc)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CurrencyOut(BaseModel):
    value: str
    label: str
    locale: str


class UserSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    currency: str


class UserSettingsUpdate(BaseModel):
    currency: str = Field(min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def _supported(cls, value: str) -> str:
        code = value.strip().upper()
        if not is_supported_currency(code):
            raise ValueError(f"Unsupported currency: {value}")
        return code


class CategoryCreate(BaseModel):
    name: str = Field(min_length=3, max_length=20)
    icon: str = Field(default="", max_length=16)
    type: TransactionType

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Category name must be at least 3 characters")
        return value


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    icon: str
    type: TransactionType
    created_at: datetime


class TransactionCreate(BaseModel):
    amount: float = Field(gt=0)
    description: str = Field(default="", max_length=500)
    date: datetime
    category: str = Field(min_length=1, max_length=50)
    type: TransactionType

    @field_validator("date")
    @classmethod
    def _date_in_range(cls, value: datetime) -> datetime:
        value = _to_utc(value)
        if value < _MIN_TRANSACTION_DATE:
            raise ValueError("Transaction date must be on or after 1900-01-01")
        if value > datetime.now(timezone.utc):
            raise ValueError("Transaction date cannot be in the future")
        return value


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: float
    description: str
    date: datetime
    type: TransactionType
    category: str
    category_icon: str = Field(serialization_alias="categoryIcon")


class TransactionHistoryRow(BaseModel):
    """Wire shape of one history record (camelCase as the table consumes it)."""

    id: str
    date: str
    description: str
    amount: float
    type: TransactionType
    category: str
    categoryIcon: str
    formattedAmount: str


class FacetOptionOut(BaseModel):
    label: str
    value: str


class FacetsOut(BaseModel):
    categories: list[FacetOptionOut]
    types: list[FacetOptionOut]


class TransactionTableOut(BaseModel):
    rows: list[TransactionHistoryRow]
    facets: FacetsOut
    page_index: int
    page_size: int
    page_count: int
    can_previous: bool
    can_next: bool
    total_count: int
    filtered_count: int
    has_active_filters: bool
    currency: str


class BalanceStatsOut(BaseModel):
    income: float = 0
    expense: float = 0

    @property
    def balance(self) -> float:
        return self.income - self.expense


class CategoryStatsItem(BaseModel):
    type: TransactionType
    category: str
    category_icon: str = Field(serialization_alias="categoryIcon")
    amount: float


class HistoryDataItem(BaseModel):
    year: int
    month: int
    day: int | None = None
    income: float = 0
    expense: float = 0
