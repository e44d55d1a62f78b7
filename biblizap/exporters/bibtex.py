"""BibTeX serializer."""

from biblizap.models.record import Record
from biblizap.utils.text import citation_key, clean_summary, doi_url, escape_bibtex


def _unique_key(record: Record, used: set[str]) -> str:
    """Citation key, suffixed with a, b, c… when already taken in this file."""
    base = citation_key(record.first_author, record.year_published, record.title)
    key = base
    suffix = 0
    while key in used:
        key = f"{base}{_letters(suffix)}"
        suffix += 1
    used.add(key)
    return key


def _letters(n: int) -> str:
    out = ""
    n += 1
    while n:
        n, rem = divmod(n - 1, 26)
        out = chr(ord("a") + rem) + out
    return out


def record_to_bibtex(record: Record, key: str) -> str:
    fields: list[tuple[str, object]] = []
    if record.first_author:
        fields.append(("author", record.first_author))
    if record.title:
        fields.append(("title", record.title))
    if record.journal:
        fields.append(("journal", record.journal))
    if record.year_published is not None:
        fields.append(("year", record.year_published))
    if record.doi:
        fields.append(("doi", record.doi))
        fields.append(("url", doi_url(record.doi)))
    summary = clean_summary(record.summary)
    if summary:
        fields.append(("abstract", summary))

    notes = []
    if record.citations is not None:
        notes.append(f"Citations: {record.citations}")
    if record.score is not None:
        notes.append(f"BibliZap score: {record.score}")
    if notes:
        fields.append(("note", "; ".join(notes)))

    body = ",\n".join(f"  {name} = {{{escape_bibtex(value)}}}" for name, value in fields)
    if body:
        return f"@article{{{key},\n{body}\n}}"
    return f"@article{{{key}\n}}"


def to_bibtex(records: list[Record]) -> bytes:
    """Serialize *records* as UTF-8 BibTeX ``@article`` entries."""
    used: set[str] = set()
    entries = [record_to_bibtex(r, _unique_key(r, used)) for r in records]
    text = "\n\n".join(entries)
    return (text + "\n").encode("utf-8") if text else b""
