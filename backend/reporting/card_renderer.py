"""
Rasterize a settlement Document to PNG via Playwright (Chromium).

Browser is acquired per call and always closed. Content that does not fit the
viewport raises ViewportOverflowError rather than producing a cropped image.
"""
from __future__ import annotations

import logging
from typing import Any

from errors import RenderError, RendererUnavailableError, ViewportOverflowError
from models import Document, Viewport

from .card_builder import build_card_html

_LOG = logging.getLogger("uvicorn.error")

CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]
CAPTURE_SELECTOR = ".wrap"
MAX_ERROR_CHARS = 500


def _short(err: BaseException) -> str:
    msg = str(err)
    return msg[:MAX_ERROR_CHARS] if len(msg) > MAX_ERROR_CHARS else msg


def _sync_playwright() -> Any:
    try:
        from playwright.sync_api import sync_playwright
    except ImportError as e:
        raise RendererUnavailableError(
            "Playwright not installed. Run: pip install playwright && playwright install chromium"
        ) from e
    return sync_playwright


def _collect_layout(page: Any) -> dict[str, Any]:
    return page.evaluate(
        """
        (selector) => {
          const wrap = document.querySelector(selector);
          const rect = wrap ? wrap.getBoundingClientRect() : {left: 0, top: 0, right: 0, bottom: 0};
          const cells = Array.from(document.querySelectorAll("td, th"));
          const clippedCells = cells.filter((c) => c.scrollWidth > c.clientWidth + 1).length;
          return {
            right: rect.right,
            bottom: rect.bottom,
            scrollWidth: document.documentElement.scrollWidth,
            scrollHeight: document.documentElement.scrollHeight,
            clippedCells,
          };
        }
        """,
        CAPTURE_SELECTOR,
    )


def _check_overflow(layout: dict[str, Any], viewport: Viewport) -> None:
    right = float(layout.get("right") or 0.0)
    bottom = float(layout.get("bottom") or 0.0)
    if bottom > viewport.height or right > viewport.width:
        raise ViewportOverflowError(
            f"cards need {right:.0f}x{bottom:.0f}px but viewport is {viewport.width}x{viewport.height}px",
            content_width=right,
            content_height=bottom,
        )
    clipped = int(layout.get("clippedCells") or 0)
    if clipped:
        raise ViewportOverflowError(
            f"{clipped} table cell(s) wider than their column; lower CHUNK_WIDTH",
            content_width=float(layout.get("scrollWidth") or 0.0),
            content_height=bottom,
        )


def render_card_png(document: Document, viewport: Viewport | None = None) -> bytes:
    """Render Document to PNG bytes. Raises RenderError (or a subclass) on failure."""
    vp = viewport or Viewport()
    html_str = build_card_html(document)
    sync_playwright = _sync_playwright()
    from playwright.sync_api import Error as PlaywrightError

    try:
        with sync_playwright() as p:
            try:
                browser = p.chromium.launch(args=CHROMIUM_ARGS)
            except PlaywrightError as e:
                raise RendererUnavailableError(f"Chromium runtime unavailable: {_short(e)}") from e
            try:
                context = browser.new_context(
                    viewport={"width": vp.width, "height": vp.height},
                    device_scale_factor=vp.scale,
                )
                page = context.new_page()
                page.set_content(html_str, wait_until="load")
                _check_overflow(_collect_layout(page), vp)
                png = page.locator(CAPTURE_SELECTOR).screenshot(type="png", omit_background=False)
            except PlaywrightError as e:
                raise RenderError(f"Card render failed: {_short(e)}") from e
            finally:
                browser.close()
    except PlaywrightError as e:
        # Driver failed to start (or to shut down) outside any page work.
        raise RendererUnavailableError(f"Playwright driver unavailable: {_short(e)}") from e
    _LOG.debug("rendered %s card(s) into %s bytes", len(document.cards), len(png))
    return png


def check_renderer() -> None:
    """Launch Chromium once and close it; raises RendererUnavailableError when that fails."""
    sync_playwright = _sync_playwright()
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(args=CHROMIUM_ARGS)
            try:
                page = browser.new_page()
                page.set_content("<html><body>ok</body></html>")
            finally:
                browser.close()
    except RendererUnavailableError:
        raise
    except Exception as e:
        raise RendererUnavailableError(f"Chromium runtime unavailable: {_short(e)}") from e
