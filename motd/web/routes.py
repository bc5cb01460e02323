"""Web routes: the page, the favicon and the status API."""

import asyncio
import logging
from datetime import date
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates

from motd import __version__
from motd.selection.mapper import (
    DateTooEarlyError,
    EmptyPoolError,
    FutureDateError,
    select_image,
)
from motd.selection.pool import DirectoryScanError, scan_image_pool

logger = logging.getLogger(__name__)

router = APIRouter()

# Templates directory
templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=templates_dir)

LOCAL_HOSTS = ("127.0.0.1", "::1", "localhost")


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Image of the day page."""
    refresher = request.app.state.refresher
    return templates.TemplateResponse(
        request,
        "index.html",
        {"filename": refresher.current_filename},
    )


@router.get("/favicon.ico", include_in_schema=False)
async def favicon(request: Request):
    """Today's image doubles as the favicon."""
    path = request.app.state.refresher.current_path
    if path is None or not await asyncio.to_thread(path.is_file):
        raise HTTPException(status_code=404, detail="No image published")
    return FileResponse(path, media_type="image/jpeg")


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@router.get("/api/status")
async def status(request: Request):
    """Published image, refresh state and recent activity."""
    refresher = request.app.state.refresher
    scheduler = getattr(request.app.state, "scheduler", None)
    return {
        "refresher": refresher.status(),
        "scheduler": scheduler.status() if scheduler else {"running": False},
        "activity": refresher.activity.get_entries(),
    }


@router.get("/api/image/{day}")
async def image_for_date(day: str, request: Request):
    """Which image the pool maps to on ``day`` (YYYY-MM-DD)."""
    try:
        parsed = date.fromisoformat(day)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {day}")

    refresher = request.app.state.refresher
    try:
        images = await asyncio.to_thread(scan_image_pool, refresher.image_dir)
        image = select_image(images, parsed, today=refresher.now().date())
    except (FutureDateError, DateTooEarlyError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmptyPoolError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DirectoryScanError as e:
        logger.error(f"Image lookup for {day} failed: {e}")
        raise HTTPException(status_code=500, detail="Image directory unavailable")
    return {"date": parsed.isoformat(), "image": image}


@router.post("/api/refresh")
async def trigger_refresh(request: Request):
    """Refresh today's image now. Localhost only."""
    host = request.client.host if request.client else ""
    if host not in LOCAL_HOSTS:
        raise HTTPException(status_code=403, detail="Localhost only")
    refresher = request.app.state.refresher
    asset = await refresher.refresh_now()
    if asset is None:
        return {"status": "failed", "error": refresher.last_error, "current": refresher.current_filename}
    return {"status": "refreshed", "current": asset.filename}
