"""Text filters over records: one global pattern plus one pattern per column."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Iterable

from biblizap.engine.columns import COLUMNS, get_column
from biblizap.models.record import Record


class AbsentFieldPolicy(str, Enum):
    """How a column filter treats a record that lacks the column's field.

    * ``EXCLUDE`` - the field must be present for the column test to pass,
      even when the filter text is empty. Incomplete records are hidden
      under the default (all empty) filters.
    * ``PASS`` - an empty filter accepts any record; a non-empty filter
      still rejects a record without the field.
    """

    EXCLUDE = "exclude"
    PASS = "pass"


@dataclass
class ColumnFilters:
    """Free text filter for each filterable column. Empty means unset."""

    first_author: str = ""
    year_published: str = ""
    title: str = ""
    journal: str = ""
    summary: str = ""
    doi: str = ""
    citations: str = ""
    score: str = ""

    def set(self, key: str, text: str) -> None:
        column = get_column(key)
        if not column.filterable:
            raise ValueError(f"Column '{key}' is not filterable")
        setattr(self, column.key, text)

    def get(self, key: str) -> str:
        return getattr(self, get_column(key).key)

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))

    def active(self) -> dict[str, str]:
        """Return only the columns that carry filter text."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


def matches_global(record: Record, pattern: str) -> bool:
    """True if *pattern* is empty or any present field contains it.

    Case-insensitive; numbers are matched on their decimal form.
    """
    if not pattern:
        return True
    needle = pattern.lower()
    for column in COLUMNS:
        text = column.text(record)
        if text is not None and needle in text.lower():
            return True
    return False


def matches_columns(
    record: Record,
    filters: ColumnFilters,
    policy: AbsentFieldPolicy = AbsentFieldPolicy.EXCLUDE,
) -> bool:
    """True if the record passes every column filter (AND).

    See :class:`AbsentFieldPolicy` for how absent fields are handled.
    """
    for column in COLUMNS:
        if not column.filterable:
            continue
        needle = filters.get(column.key).lower()
        text = column.text(record)
        if text is None:
            if policy is AbsentFieldPolicy.PASS and not needle:
                continue
            return False
        if needle not in text.lower():
            return False
    return True


def apply_filters(
    records: Iterable[Record],
    pattern: str,
    filters: ColumnFilters,
    policy: AbsentFieldPolicy = AbsentFieldPolicy.EXCLUDE,
) -> list[Record]:
    """Return the visible subset, in the given order."""
    return [
        r for r in records
        if matches_global(r, pattern) and matches_columns(r, filters, policy)
    ]


@dataclass
class FilterState:
    """Current global pattern, column filters and policy of one view."""

    pattern: str = ""
    columns: ColumnFilters = field(default_factory=ColumnFilters)
    policy: AbsentFieldPolicy = AbsentFieldPolicy.EXCLUDE

    def apply(self, records: Iterable[Record]) -> list[Record]:
        return apply_filters(records, self.pattern, self.columns, self.policy)

    def reset(self) -> None:
        self.pattern = ""
        self.columns = ColumnFilters()
