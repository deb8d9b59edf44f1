"""
Services package

Business logic used by the routers. Services raise ``budget_tracker.errors``
exceptions and never touch HTTP concerns.
"""

from .category_service import CategoryService
from .settings_service import UserSettingsService
from .stats_service import StatsService
from .transaction_service import TransactionService

__all__ = [
    "CategoryService",
    "UserSettingsService",
    "StatsService",
    "TransactionService",
]
