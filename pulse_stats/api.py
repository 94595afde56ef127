"""
pulse-stats HTTP API

    GET /?format=json   - statistics as JSON
    GET /               - HTML report when Accept contains text/html,
                          JSON otherwise

Every request fetches fresh data. Source failures show up as null fields
(or "(failed to retrieve)" in HTML); the status is always 200.
"""
import logging
import time
from typing import Optional

from fastapi import FastAPI, Header, Query
from fastapi.responses import HTMLResponse, JSONResponse, Response

from .config import settings
from .extraction import collect_statistics
from .logger import log_request_summary
from .report import render_report_html

logger = logging.getLogger(__name__)

app = FastAPI(
    title="pulse-stats",
    description="GitHub activity statistics for a single project",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


def wants_html(output_format: Optional[str], accept: Optional[str]) -> bool:
    """Pick HTML only when JSON was not asked for and the client accepts HTML."""
    if output_format == "json":
        return False
    return "text/html" in (accept or "")


@app.get("/")
async def statistics(
    output_format: Optional[str] = Query(None, alias="format"),
    accept: Optional[str] = Header(None),
) -> Response:
    """Aggregated statistics, as JSON or as the HTML report."""
    start_time = time.time()
    record = await collect_statistics()
    duration_ms = (time.time() - start_time) * 1000

    if wants_html(output_format, accept):
        log_request_summary(record, logger, duration_ms, output_format="html")
        return HTMLResponse(render_report_html(record, settings.project_name))

    log_request_summary(record, logger, duration_ms, output_format="json")
    return JSONResponse(record.model_dump())
