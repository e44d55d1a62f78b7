"""RIS serializer.

Tag mapping::

    TY  JOUR (always)
    AU  first_author
    PY  year_published
    TI  title
    JO  journal
    AB  summary (markup stripped)
    DO  doi
    UR  https://doi.org/<doi>
    N1  "Citations: <n>" and "BibliZap score: <n>", one line each
    ER  end of record
"""

from biblizap.models.record import Record
from biblizap.utils.text import clean_summary, doi_url, single_line


def _tag(tag: str, value: object) -> str:
    return f"{tag}  - {single_line(value)}"


def record_to_ris(record: Record) -> str:
    lines = ["TY  - JOUR"]
    if record.first_author:
        lines.append(_tag("AU", record.first_author))
    if record.year_published is not None:
        lines.append(_tag("PY", record.year_published))
    if record.title:
        lines.append(_tag("TI", record.title))
    if record.journal:
        lines.append(_tag("JO", record.journal))
    summary = clean_summary(record.summary)
    if summary:
        lines.append(_tag("AB", summary))
    if record.doi:
        lines.append(_tag("DO", record.doi))
        lines.append(_tag("UR", doi_url(record.doi)))
    if record.citations is not None:
        lines.append(_tag("N1", f"Citations: {record.citations}"))
    if record.score is not None:
        lines.append(_tag("N1", f"BibliZap score: {record.score}"))
    lines.append("ER  - ")
    return "\n".join(lines)


def to_ris(records: list[Record]) -> bytes:
    """Serialize *records* as UTF-8 RIS, one blank line between entries."""
    text = "\n\n".join(record_to_ris(r) for r in records)
    return (text + "\n").encode("utf-8") if text else b""
