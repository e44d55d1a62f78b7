"""FastAPI + HTMX GUI for BibliZap results."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from biblizap.config import Settings
from biblizap.console import configure_logging
from biblizap.gui.routers import actions, common, results
from biblizap.gui.state import init_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize settings and the shared results view on startup."""
    settings = Settings.load()
    configure_logging(settings.log_level)
    init_state(settings)
    yield


app = FastAPI(lifespan=lifespan)

base_dir = os.path.dirname(__file__)
app.mount("/static", StaticFiles(directory=os.path.join(base_dir, "static")), name="static")

app.include_router(common.router)
app.include_router(results.router)
app.include_router(actions.router)
