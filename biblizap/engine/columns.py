"""Column descriptor table shared by filtering, sorting, display and export."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

from biblizap.models.record import Record


class UnknownColumnError(KeyError):
    """Raised when an event names a column that is not in the table."""


@dataclass(frozen=True)
class Column:
    """Describes one record field as a table column.

    ``kind`` decides how an absent value sorts (``0`` for numbers, ``""``
    for text) and how the value is matched by text filters.
    """

    key: str
    label: str
    kind: Literal["text", "number"]
    sortable: bool = True
    filterable: bool = True

    def value(self, record: Record) -> Any:
        return getattr(record, self.key)

    def sort_key(self, record: Record) -> Any:
        """Return the comparison key; absent values sort lowest."""
        value = self.value(record)
        if value is None:
            return 0 if self.kind == "number" else ""
        return value

    def text(self, record: Record) -> Optional[str]:
        """Return the value as searchable text, or None when absent."""
        value = self.value(record)
        if value is None:
            return None
        return str(value)


# Order matches the results table.
COLUMNS: tuple[Column, ...] = (
    Column("doi", "DOI", "text"),
    Column("title", "Title", "text"),
    Column("journal", "Journal", "text"),
    Column("first_author", "First author", "text"),
    Column("year_published", "Year published", "number"),
    Column("summary", "Summary", "text"),
    Column("citations", "Citations", "number"),
    Column("score", "Score", "number"),
)

_BY_KEY = {c.key: c for c in COLUMNS}

SCORE = _BY_KEY["score"]


def get_column(key: str) -> Column:
    """Look up a column by key.

    Raises:
        UnknownColumnError: If no column has that key.
    """
    try:
        return _BY_KEY[key]
    except KeyError:
        raise UnknownColumnError(key) from None


def column_keys() -> list[str]:
    return [c.key for c in COLUMNS]
