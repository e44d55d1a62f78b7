"""Results surfaces (HTMX partials) and the UI events that change them.

Every event route answers with ``HX-Trigger: viewInvalidated`` when the
view changed, and both the table and the card list re-fetch themselves on
that event.
"""

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from biblizap.engine.columns import COLUMNS, UnknownColumnError, get_column
from biblizap.engine.paginator import PaginationError
from biblizap.gui.state import state, templates

router = APIRouter()

# Sort headers offered above the card list
CARD_SORT_COLUMNS = ("year_published", "citations", "score")


def invalidation_headers(before: int) -> dict[str, str]:
    """HX-Trigger header if the view was invalidated since *before*."""
    if state.revision != before:
        return {"HX-Trigger": "viewInvalidated"}
    return {}


def _column_or_404(key: str):
    try:
        return get_column(key)
    except UnknownColumnError:
        raise HTTPException(status_code=404, detail=f"Unknown column: {key}") from None


# ============================================================================
# Surfaces
# ============================================================================


@router.get("/results/table", response_class=HTMLResponse)
async def results_table(request: Request):
    """Table surface: header sort toggles, rows and pager."""
    snap = state.view.snapshot()
    r = templates.TemplateResponse(
        request,
        "partials/table.html",
        {"snap": snap, "columns": COLUMNS},
    )
    r.headers["X-Visible-Count"] = str(snap.visible_count)
    return r


@router.get("/results/cards", response_class=HTMLResponse)
async def results_cards(request: Request):
    """Card surface for narrow screens, reading the same view as the table."""
    snap = state.view.snapshot()
    r = templates.TemplateResponse(
        request,
        "partials/cards.html",
        {
            "snap": snap,
            "sort_columns": [get_column(k) for k in CARD_SORT_COLUMNS],
        },
    )
    r.headers["X-Visible-Count"] = str(snap.visible_count)
    return r


@router.get("/results/filters", response_class=HTMLResponse)
async def results_filters(request: Request):
    """Search box and column filter inputs, filled from the current view.

    Re-fetched only when a new result set is loaded, so typing is never
    interrupted by a re-render.
    """
    snap = state.view.snapshot()
    return templates.TemplateResponse(
        request,
        "partials/filters.html",
        {"snap": snap, "columns": COLUMNS},
    )


# ============================================================================
# Events
# ============================================================================


@router.post("/results/sort/{column}")
async def column_sort_click(column: str):
    """Advance a column's sort toggle (none → asc → desc → none)."""
    _column_or_404(column)
    before = state.revision
    try:
        new_state = state.view.column_sort_click(column)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return JSONResponse(
        {"column": column, "state": new_state.value},
        headers=invalidation_headers(before),
    )


@router.post("/results/filter/{column}")
async def column_filter_input(column: str, text: str = Form("")):
    """Set one column's filter text."""
    _column_or_404(column)
    before = state.revision
    state.view.column_filter_input(column, text)
    return JSONResponse(
        {"column": column, "text": text},
        headers=invalidation_headers(before),
    )


@router.post("/results/search")
async def global_filter_input(q: str = Form("")):
    """Set the search-all-fields text."""
    before = state.revision
    state.view.global_filter_input(q)
    return JSONResponse({"q": q}, headers=invalidation_headers(before))


@router.post("/results/page-size")
async def page_size_select(size: int = Form(...)):
    """Change articles per page (back to the first page)."""
    before = state.revision
    try:
        state.view.page_size_select(size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return JSONResponse({"page_size": size}, headers=invalidation_headers(before))


@router.post("/results/page/{index}")
async def page_select(index: int):
    """Jump to a zero-based page."""
    before = state.revision
    try:
        state.view.page_select(index)
    except PaginationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return JSONResponse({"page_index": index}, headers=invalidation_headers(before))


@router.post("/results/select")
async def selection_toggle(doi: str = Form(""), checked: bool = Form(False)):
    """Check or uncheck one article, from either surface."""
    before = state.revision
    state.view.selection_toggle(doi or None, checked)
    return JSONResponse(
        {"doi": doi, "checked": checked, "count": state.view.selection.count()},
        headers=invalidation_headers(before),
    )
