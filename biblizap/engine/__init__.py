"""Record-management engine."""

from biblizap.engine.columns import COLUMNS, Column, UnknownColumnError, get_column
from biblizap.engine.filters import (
    AbsentFieldPolicy,
    ColumnFilters,
    apply_filters,
    matches_columns,
    matches_global,
)
from biblizap.engine.paginator import PAGE_SIZES, PageItem, PaginationError, Paginator
from biblizap.engine.selection import SelectionTracker
from biblizap.engine.sorting import SortController, SortState
from biblizap.engine.store import RecordStore
from biblizap.engine.view import ResultsView, ViewSnapshot, create_view

__all__ = [
    "AbsentFieldPolicy",
    "COLUMNS",
    "Column",
    "ColumnFilters",
    "PAGE_SIZES",
    "PageItem",
    "PaginationError",
    "Paginator",
    "RecordStore",
    "ResultsView",
    "SelectionTracker",
    "SortController",
    "SortState",
    "UnknownColumnError",
    "ViewSnapshot",
    "apply_filters",
    "create_view",
    "get_column",
    "matches_columns",
    "matches_global",
]
