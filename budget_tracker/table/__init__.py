"""
Transaction table engine: filter, sort, paginate, facet and export a loaded
list of transactions without touching the database.
"""

from .columns import TRANSACTION_COLUMNS, Column, ColumnBuilder, get_column
from .export import EXPORT_FIELDS, export_csv, export_filename
from .facets import FacetOption, Facets, build_facets
from .filtering import filter_rows
from .pagination import Page, page_count, paginate
from .pipeline import TableView, TransactionTable, render
from .rows import DerivedRow, TransactionRecord, derive_rows
from .sorting import sort_rows
from .state import FilterState, PageState, SortKey, SortState

__all__ = [
    "TRANSACTION_COLUMNS",
    "Column",
    "ColumnBuilder",
    "get_column",
    "EXPORT_FIELDS",
    "export_csv",
    "export_filename",
    "FacetOption",
    "Facets",
    "build_facets",
    "filter_rows",
    "Page",
    "page_count",
    "paginate",
    "TableView",
    "TransactionTable",
    "render",
    "DerivedRow",
    "TransactionRecord",
    "derive_rows",
    "sort_rows",
    "FilterState",
    "PageState",
    "SortKey",
    "SortState",
]
