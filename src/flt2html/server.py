"""FastAPI web service for FLT to HTML conversion.

Endpoints::

    POST /convert       Upload a line-stream .json file and receive HTML.
    POST /convert/text  Send the line-stream JSON as a form field.
    GET  /health        Health check.

Run::

    uvicorn flt2html.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse

from flt2html import __version__
from flt2html.converter import Converter
from flt2html.exceptions import Flt2HtmlError
from flt2html.options import RenderOptions

logger = logging.getLogger(__name__)

app = FastAPI(
    title="flt2html",
    description="FLT line stream to HTML rendering service",
    version=__version__,
)


def _content_disposition(filename: str) -> str:
    """Build Content-Disposition header, RFC 5987 for non-ASCII names."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        encoded = quote(filename)
        return f"attachment; filename*=UTF-8''{encoded}"


def _convert(source: str, body_only: bool) -> str:
    converter = Converter(RenderOptions(body_only=body_only))
    try:
        return converter.convert_text(source)
    except Flt2HtmlError as exc:
        logger.info("Rejected document: %s", exc.message)
        raise HTTPException(status_code=422, detail=exc.message) from exc


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/convert")
async def convert_file(
    file: UploadFile = File(...),
    body_only: bool = Form(False),
    encoding: str = Form("utf-8"),
) -> HTMLResponse:
    """Upload a line-stream file and receive HTML back.

    - **file**: Line-stream JSON file (.json)
    - **body_only**: Return only the body fragment
    - **encoding**: Source file encoding
    """
    raw = await file.read()
    try:
        source = raw.decode(encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    html_text = _convert(source, body_only)
    filename = (file.filename or "document.json").rsplit(".", 1)[0] + ".html"

    return HTMLResponse(
        content=html_text,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.post("/convert/text")
async def convert_text(
    document: str = Form(...),
    body_only: bool = Form(False),
) -> HTMLResponse:
    """Send the line-stream JSON and receive HTML.

    - **document**: Line-stream JSON text
    - **body_only**: Return only the body fragment
    """
    return HTMLResponse(content=_convert(document, body_only))
