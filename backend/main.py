from __future__ import annotations

import json
import logging
import os
import time
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from config import load_config
from engine import build_document
from errors import RenderError, RendererUnavailableError
from models import Viewport, decode_payload, detect_shape
from reporting.card_builder import build_card_html
from reporting import card_renderer

# Raises ConfigurationError at import: a bad CHUNK_WIDTH or viewport stops the process before serving.
CONFIG = load_config()
VIEWPORT = Viewport(width=CONFIG.viewport_width, height=CONFIG.viewport_height, scale=CONFIG.device_scale)

VERSION = (os.environ.get("RENDER_GIT_COMMIT") or "").strip() or "unknown"

_LOG = logging.getLogger("uvicorn.error")

app = FastAPI(title="Settlement Card Renderer", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.allowed_origins,
    allow_credentials="*" not in CONFIG.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        _LOG.info(
            "request_id=%s method=%s path=%s status=%s duration_ms=%.0f",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        response.headers["X-Request-Id"] = request_id
        return response


app.add_middleware(RequestLogMiddleware)


@app.on_event("startup")
def startup_log() -> None:
    port = os.environ.get("PORT", "8080")
    host = os.environ.get("HOST", "0.0.0.0")
    _LOG.info(
        "Card renderer starting on http://%s:%s version=%s chunk_width=%s viewport=%sx%s@%sx",
        host, port, VERSION, CONFIG.chunk_width, VIEWPORT.width, VIEWPORT.height, VIEWPORT.scale,
    )


def _rid(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "no-rid"


async def _read_payload(request: Request) -> Any:
    """Parse the JSON body. Size and syntax are checked here; shape is the normalizer's job."""
    body = await request.body()
    if len(body) > CONFIG.max_payload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Payload too large: {len(body)} bytes (limit {CONFIG.max_payload_bytes})",
        )
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid JSON payload: {e}") from e


def _render_error_response(rid: str, err: RenderError) -> JSONResponse:
    status = 503 if isinstance(err, RendererUnavailableError) else 500
    return JSONResponse(
        status_code=status,
        content={"ok": False, "error": str(err), "category": err.category, "rid": rid},
    )


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Settlement card renderer OK\nUse POST /render or GET /health"


@app.get("/health")
def health():
    return {"ok": True, "version": VERSION}


@app.get("/health/render")
def health_render():
    """
    Runtime check for Playwright rendering dependencies.
    Returns 200 only when Chromium can launch successfully.
    """
    try:
        card_renderer.check_renderer()
    except RendererUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return {"ok": True, "render_runtime": "ready"}


@app.post("/document")
async def document_endpoint(request: Request):
    """Resolved document description (colors resolved, rows chunked) as JSON."""
    payload = await _read_payload(request)
    document = build_document(payload, CONFIG.chunk_width)
    return document.to_dict()


@app.post("/render/preview", response_class=HTMLResponse)
async def render_preview(request: Request) -> str:
    """The exact HTML that POST /render rasterizes."""
    payload = await _read_payload(request)
    return build_card_html(build_document(payload, CONFIG.chunk_width))


@app.post("/render")
async def render(request: Request):
    rid = _rid(request)
    payload = await _read_payload(request)
    shape = detect_shape(decode_payload(payload))
    _LOG.info("RENDER_START rid=%s shape=%s", rid, shape.value)
    if _LOG.isEnabledFor(logging.DEBUG):
        _LOG.debug("RENDER_PAYLOAD rid=%s payload=%s", rid, json.dumps(payload, ensure_ascii=False)[:4000])

    start = time.perf_counter()
    document = build_document(payload, CONFIG.chunk_width)
    if document.is_empty:
        _LOG.info("RENDER_EMPTY rid=%s shape=%s nothing to show, rendering blank strip", rid, shape.value)
    try:
        png = await run_in_threadpool(card_renderer.render_card_png, document, VIEWPORT)
    except RenderError as e:
        _LOG.warning("RENDER_ERR rid=%s category=%s err=%s", rid, e.category, str(e)[:400])
        return _render_error_response(rid, e)

    duration_ms = (time.perf_counter() - start) * 1000
    _LOG.info("RENDER_DONE rid=%s cards=%s bytes=%s duration_ms=%.0f", rid, len(document.cards), len(png), duration_ms)
    return Response(content=png, media_type="image/png")


def get_app() -> FastAPI:
    """
    Convenience accessor for ASGI servers.
    """
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8080")),
    )
