"""Utility functions."""

from biblizap.utils.text import (
    citation_key,
    clean_summary,
    doi_url,
    escape_bibtex,
    single_line,
)

__all__ = [
    "citation_key",
    "clean_summary",
    "doi_url",
    "escape_bibtex",
    "single_line",
]
