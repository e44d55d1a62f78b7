"""Record data model."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional


class RecordFormatError(ValueError):
    """Raised when a search result document cannot be read as records."""


@dataclass(frozen=True)
class Record:
    """One bibliographic entry returned by the citation search.

    Every field is optional. ``None`` means the search service did not
    report the field and is kept distinct from ``""`` or ``0``.
    """

    first_author: Optional[str] = None
    year_published: Optional[int] = None
    journal: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    doi: Optional[str] = None
    citations: Optional[int] = None
    score: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Record":
        """Build a record from one JSON object of the search response.

        Unknown keys are ignored; missing keys and ``null`` become ``None``.

        Raises:
            RecordFormatError: If *data* is not a mapping or a numeric
                field holds something that is not an integer.
        """
        if not isinstance(data, dict):
            raise RecordFormatError(f"Expected an object, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is None:
                values[f.name] = None
            elif f.name in _INT_FIELDS:
                values[f.name] = _to_int(f.name, raw)
            else:
                values[f.name] = str(raw)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a JSON-ready dict."""
        return asdict(self)


_INT_FIELDS = {"year_published", "citations", "score"}


def _to_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise RecordFormatError(f"Field '{name}' must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise RecordFormatError(f"Field '{name}' must be an integer, got {raw!r}")


def parse_records(document: Any) -> list[Record]:
    """Parse a search response into records, keeping the response order.

    Accepts either a bare JSON array or an object holding the array under
    ``"articles"``.
    """
    if isinstance(document, dict):
        document = document.get("articles")
    if not isinstance(document, list):
        raise RecordFormatError("Expected a list of articles")
    return [Record.from_dict(item) for item in document]
