"""
Error taxonomy for the settlement card service.

Malformed payloads are never an error here: the normalizer degrades them to
defaults. What remains is configuration (fatal at startup) and rendering
(surfaced to the caller as its own category).
"""
from __future__ import annotations


class SettlementCardError(Exception):
    """Base class for errors raised by the card service."""

    category = "internal"


class ConfigurationError(SettlementCardError):
    """Invalid deployment configuration (chunk width, viewport)."""

    category = "configuration"


class RenderError(SettlementCardError):
    """The document could not be rasterized."""

    category = "render_failed"


class RendererUnavailableError(RenderError):
    """Playwright or Chromium could not be started."""

    category = "renderer_unavailable"


class ViewportOverflowError(RenderError):
    """Card stack does not fit the viewport and would be truncated."""

    category = "viewport_overflow"

    def __init__(self, message: str, *, content_width: float = 0.0, content_height: float = 0.0) -> None:
        super().__init__(message)
        self.content_width = content_width
        self.content_height = content_height
