"""Export serializers and the export service."""

from biblizap.exporters.bibtex import to_bibtex
from biblizap.exporters.ris import to_ris
from biblizap.exporters.service import ExportError, Exporter, ExportFormat, ExportResult
from biblizap.exporters.workbook import to_xlsx

__all__ = [
    "ExportError",
    "ExportFormat",
    "ExportResult",
    "Exporter",
    "to_bibtex",
    "to_ris",
    "to_xlsx",
]
