"""Export orchestration: format dispatch, filenames, saving."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from biblizap.exporters.bibtex import to_bibtex
from biblizap.exporters.ris import to_ris
from biblizap.exporters.workbook import to_xlsx
from biblizap.models.record import Record

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Serializing or saving an export failed."""


class ExportFormat(str, Enum):
    XLSX = "xlsx"
    RIS = "ris"
    BIBTEX = "bib"

    @classmethod
    def parse(cls, name: str) -> "ExportFormat":
        """Accept ``xlsx``/``excel``, ``ris`` and ``bib``/``bibtex``."""
        key = name.strip().lower()
        aliases = {"excel": cls.XLSX, "bibtex": cls.BIBTEX}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown export format: {name!r}") from None

    @property
    def extension(self) -> str:
        return self.value

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def label(self) -> str:
        return {"xlsx": "Excel", "ris": "RIS", "bib": "BibTeX"}[self.value]


_MEDIA_TYPES = {
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.RIS: "application/x-research-info-systems",
    ExportFormat.BIBTEX: "application/x-bibtex",
}

_SERIALIZERS: dict[ExportFormat, Callable[[list[Record]], bytes]] = {
    ExportFormat.XLSX: to_xlsx,
    ExportFormat.RIS: to_ris,
    ExportFormat.BIBTEX: to_bibtex,
}


@dataclass
class ExportResult:
    """Serialized export ready to be downloaded or written."""

    filename: str
    content: bytes
    format: ExportFormat
    count: int
    qualifier: str

    @property
    def media_type(self) -> str:
        return self.format.media_type


class Exporter:
    """Turns a resolved record set into a named file buffer."""

    def __init__(
        self,
        product_name: str = "BibliZap",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.product_name = product_name
        self._clock = clock or (lambda: datetime.now().astimezone())

    @staticmethod
    def qualifier(resolved_count: int, store_count: int) -> str:
        """``"selected"`` when the export is a strict subset of the store."""
        return "selected" if resolved_count < store_count else "all"

    def filename(self, fmt: ExportFormat, qualifier: str) -> str:
        timestamp = self._clock().isoformat(timespec="seconds")
        return f"{self.product_name}-{qualifier}-{timestamp}.{fmt.extension}"

    def export(self, records: list[Record], store_count: int, fmt: ExportFormat) -> ExportResult:
        """Serialize *records* (already resolved from the selection).

        Args:
            records: Records to write, in store order
            store_count: Size of the full store, used for the filename
            fmt: Target format

        Raises:
            ExportError: If the serializer fails.
        """
        try:
            content = _SERIALIZERS[fmt](records)
        except Exception as e:
            logger.exception("Export to %s failed", fmt.label)
            raise ExportError(f"{fmt.label} export failed: {e}") from e

        qualifier = self.qualifier(len(records), store_count)
        result = ExportResult(
            filename=self.filename(fmt, qualifier),
            content=content,
            format=fmt,
            count=len(records),
            qualifier=qualifier,
        )
        logger.info("Exported %d records as %s", result.count, result.filename)
        return result

    def save(self, result: ExportResult, export_dir: Path) -> Path:
        """Write *result* into *export_dir* and return the file path."""
        try:
            export_dir.mkdir(parents=True, exist_ok=True)
            path = export_dir / result.filename
            path.write_bytes(result.content)
        except OSError as e:
            logger.exception("Could not write %s", result.filename)
            raise ExportError(f"Could not write {result.filename}: {e}") from e
        return path
