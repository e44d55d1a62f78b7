"""Application state and templates."""

import html
import os

from fastapi.templating import Jinja2Templates

from biblizap.config import Settings
from biblizap.engine.sorting import SortState
from biblizap.engine.view import ResultsView, create_view
from biblizap.utils.text import clean_summary, doi_url


# ============================================================================
# Global State
# ============================================================================


class AppState:
    """Mutable singleton holding the settings and the shared results view.

    Both presentation surfaces (table and cards) read ``view``; neither
    keeps its own copy of the records.
    """

    settings: Settings
    view: ResultsView
    # Bumped on every "view invalidated" signal
    revision: int = 0


state = AppState()


def _bump_revision() -> None:
    state.revision += 1


def init_state(settings: Settings) -> None:
    """(Re)create the shared view from *settings*."""
    state.settings = settings
    state.view = create_view(settings)
    state.revision = 0
    state.view.subscribe(_bump_revision)


# ============================================================================
# Templates & Filters
# ============================================================================

base_dir = os.path.dirname(__file__)
templates = Jinja2Templates(directory=os.path.join(base_dir, "templates"))

# Unescape HTML entities in titles and summaries
templates.env.filters["unescape_html"] = lambda s: html.unescape(s) if s else ""
templates.env.filters["clean_summary"] = clean_summary
templates.env.filters["doi_url"] = doi_url

_SORT_ICONS = {
    SortState.NONE: "bi-arrow-down-up",
    SortState.ASCENDING: "bi-sort-up",
    SortState.DESCENDING: "bi-sort-down",
}


def sort_icon(sort_state: SortState) -> str:
    """Bootstrap icon class for a column's sort indicator."""
    return _SORT_ICONS.get(sort_state, _SORT_ICONS[SortState.NONE])


templates.env.filters["sort_icon"] = sort_icon
