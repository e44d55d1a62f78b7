"""Excel workbook serializer."""

from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter

from biblizap.models.record import Record

HEADERS = ["doi", "Title", "Journal", "Year published", "Summary", "Citations", "Score"]

ROW_HEIGHT = 150
WIDE_COLUMN_WIDTH = 52
# Title, Journal, Summary (1-based)
WIDE_COLUMNS = (2, 3, 5)

_CELL_ALIGNMENT = Alignment(wrap_text=True, vertical="top")


def _row(record: Record) -> list[str]:
    """Cells for one record; absent text is "" and absent numbers are "0"."""
    return [
        record.doi or "",
        record.title or "",
        record.journal or "",
        str(record.year_published or 0),
        record.summary or "",
        str(record.citations or 0),
        str(record.score or 0),
    ]


def _autofit_width(values: Iterable[str]) -> float:
    longest = max((len(v) for v in values), default=0)
    return max(8, longest + 2)


def to_xlsx(records: list[Record]) -> bytes:
    """Serialize *records* into an .xlsx workbook.

    One sheet: a header row and one row per record, every cell wrapped and
    top aligned, tall data rows, wide text columns and an autofilter over
    the whole table.
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Articles"

    rows = [HEADERS] + [_row(r) for r in records]
    for row in rows:
        sheet.append(row)

    for sheet_row in sheet.iter_rows(min_row=1, max_row=len(rows), max_col=len(HEADERS)):
        for cell in sheet_row:
            cell.alignment = _CELL_ALIGNMENT

    for row_index in range(2, len(rows) + 1):
        sheet.row_dimensions[row_index].height = ROW_HEIGHT

    for col_index in range(1, len(HEADERS) + 1):
        letter = get_column_letter(col_index)
        if col_index in WIDE_COLUMNS:
            sheet.column_dimensions[letter].width = WIDE_COLUMN_WIDTH
        else:
            sheet.column_dimensions[letter].width = _autofit_width(
                row[col_index - 1] for row in rows
            )

    last_col = get_column_letter(len(HEADERS))
    sheet.auto_filter.ref = f"A1:{last_col}{len(rows)}"

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
