"""BibliZap results view.

Displays, filters, sorts, paginates, selects and exports the articles
returned by a BibliZap citation search.
"""

__version__ = "1.0.0"

from biblizap.config import Settings
from biblizap.models.record import Record

__all__ = ["Record", "Settings", "__version__"]
