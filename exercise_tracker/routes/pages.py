"""
Exercise Tracker: Landing Page Route
======================================

What:  GET / serves <VIEWS_DIR>/index.html.
How:   Reads the file with aiofiles on each request and returns it as HTML.
       A missing file is a deployment error and answers 404.
"""

import logging
from pathlib import Path

import aiofiles
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request) -> HTMLResponse:
    page = Path(request.app.state.settings.views_dir) / "index.html"
    try:
        async with aiofiles.open(page, "r", encoding="utf-8") as f:
            content = await f.read()
    except FileNotFoundError:
        logger.error("Landing page missing: %s", page.resolve())
        return HTMLResponse("<h1>Exercise Tracker</h1>", status_code=404)
    return HTMLResponse(content)
