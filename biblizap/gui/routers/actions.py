"""Action routes: export downloads."""

import html
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response

from biblizap.exporters.service import ExportError, ExportFormat
from biblizap.gui.state import state

router = APIRouter()


def _toast(kind: str, message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(
        f"""<div class="toast toast-{kind} toast-auto" role="alert">
            <span>{html.escape(message)}</span>
        </div>""",
        status_code=status_code,
    )


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "") or "export"
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


# ============================================================================
# Export
# ============================================================================


@router.get("/results/export/{fmt}")
async def export_click(fmt: str):
    """Serialize the selection (or everything) and send it as a download.

    The page script turns the response into a Blob URL, clicks a
    temporary anchor and revokes the URL. Failures come back as an error
    toast instead of a file.
    """
    try:
        export_format = ExportFormat.parse(fmt)
    except ValueError:
        return _toast("error", f"Unknown export format: {fmt}", 404)

    try:
        result = state.view.export_click(export_format)
    except ExportError as e:
        return _toast("error", f"Export failed: {e}", 500)

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "Content-Disposition": content_disposition(result.filename),
            "X-Export-Count": str(result.count),
        },
    )
