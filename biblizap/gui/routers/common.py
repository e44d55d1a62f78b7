"""Common routes: index page, loading search results, view state, settings."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from biblizap import __version__
from biblizap.config import save_settings
from biblizap.engine.columns import COLUMNS
from biblizap.engine.filters import AbsentFieldPolicy
from biblizap.exporters.service import ExportFormat
from biblizap.gui.routers.results import invalidation_headers
from biblizap.gui.state import state, templates
from biblizap.models.record import RecordFormatError, parse_records

router = APIRouter()


# ============================================================================
# Main Page
# ============================================================================


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Main page: both result surfaces plus the export bar."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "version": __version__,
            "product_name": state.settings.product_name,
            "columns": COLUMNS,
            "formats": list(ExportFormat),
        },
    )


# ============================================================================
# Search Results
# ============================================================================


@router.post("/api/results")
async def load_results(document: Any = Body(...)):
    """Replace the displayed result set with a search response.

    Accepts a JSON array of articles or ``{"articles": [...]}``, already
    ordered by descending score.
    """
    before = state.revision
    try:
        records = parse_records(document)
    except RecordFormatError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    state.view.load(records)
    headers = invalidation_headers(before)
    # Filters were reset, so the inputs must be refilled too
    headers["HX-Trigger"] = "viewInvalidated, resultsLoaded"
    return JSONResponse({"count": len(records)}, headers=headers)


@router.get("/api/state")
async def view_state():
    """Return the current render pass as JSON."""
    snap = state.view.snapshot()
    return JSONResponse({
        "revision": state.revision,
        "rows": [r.to_dict() for r in snap.rows],
        "visible_count": snap.visible_count,
        "total_count": snap.total_count,
        "page_index": snap.page_index,
        "page_size": snap.page_size,
        "total_pages": snap.total_pages,
        "pages": [p.index for p in snap.pages],
        "summary": snap.summary,
        "sort": {k: v.value for k, v in snap.sort_states.items()},
        "selected": sorted(snap.selected),
        "global_filter": snap.global_filter,
        "column_filters": snap.column_filters,
        "policy": state.view.filters.policy.value,
    })


# ============================================================================
# Absent-field policy
# ============================================================================


class PolicyPayload(BaseModel):
    """Request body for changing the absent-field policy."""
    policy: AbsentFieldPolicy
    persist: Optional[bool] = False


@router.put("/api/policy")
async def update_policy(body: PolicyPayload):
    """Switch how column filters treat missing fields.

    With ``persist`` set, the choice is also written to ``settings.yaml``.
    """
    before = state.revision
    state.view.set_policy(body.policy)
    state.settings.absent_field_policy = body.policy
    if body.persist:
        save_settings(state.settings.metadata_dir / "settings.yaml", state.settings)
    return JSONResponse(
        {"policy": body.policy.value},
        headers=invalidation_headers(before),
    )
