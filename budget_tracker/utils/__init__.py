"""
Utils package
"""

from .dates import month_bounds, to_utc_naive, validate_date_range, year_bounds

__all__ = [
    "month_bounds",
    "to_utc_naive",
    "validate_date_range",
    "year_bounds",
]
