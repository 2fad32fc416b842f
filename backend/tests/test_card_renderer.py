"""Renderer guards that run without a browser: overflow detection and driver failures."""
from __future__ import annotations

import pytest
from playwright.sync_api import Error as PlaywrightError

from engine.assembler import build_document
from errors import RendererUnavailableError, ViewportOverflowError
from models import Viewport
from reporting import card_renderer
from reporting.card_renderer import _check_overflow

VIEWPORT = Viewport(width=900, height=1600, scale=2.0)


def test_content_inside_viewport_passes():
    _check_overflow({"right": 740, "bottom": 1200, "scrollWidth": 900, "clippedCells": 0}, VIEWPORT)
    _check_overflow({"right": 900, "bottom": 1600}, VIEWPORT)


def test_too_tall_content_raises():
    with pytest.raises(ViewportOverflowError) as exc:
        _check_overflow({"right": 740, "bottom": 2400, "clippedCells": 0}, VIEWPORT)
    assert exc.value.content_height == 2400
    assert exc.value.category == "viewport_overflow"
    assert "900x1600" in str(exc.value)


def test_too_wide_content_raises():
    with pytest.raises(ViewportOverflowError) as exc:
        _check_overflow({"right": 1100, "bottom": 400, "clippedCells": 0}, VIEWPORT)
    assert exc.value.content_width == 1100


def test_clipped_cells_raise_even_when_wrapper_fits():
    with pytest.raises(ViewportOverflowError, match="CHUNK_WIDTH"):
        _check_overflow({"right": 740, "bottom": 400, "scrollWidth": 900, "clippedCells": 2}, VIEWPORT)


class _DeadDriver:
    def __enter__(self):
        raise PlaywrightError("driver process exited")

    def __exit__(self, *exc):
        return False


def test_driver_start_failure_is_renderer_unavailable(monkeypatch):
    monkeypatch.setattr(card_renderer, "_sync_playwright", lambda: _DeadDriver)
    with pytest.raises(RendererUnavailableError, match="driver process exited"):
        card_renderer.render_card_png(build_document({"detailsRozrah": "1|2"}), VIEWPORT)
