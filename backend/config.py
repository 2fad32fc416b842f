"""
Deployment configuration read from the environment (and backend/.env).

Chunk width and viewport are per-deployment constants, never payload data.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from errors import ConfigurationError

load_dotenv(Path(__file__).resolve().parent / ".env")

DEFAULT_CHUNK_WIDTH = 6
DEFAULT_VIEWPORT_WIDTH = 900
DEFAULT_VIEWPORT_HEIGHT = 1600
DEFAULT_DEVICE_SCALE = 2.0
DEFAULT_MAX_PAYLOAD_BYTES = 2 * 1024 * 1024


@dataclass(frozen=True)
class EngineConfig:
    chunk_width: int = DEFAULT_CHUNK_WIDTH
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    device_scale: float = DEFAULT_DEVICE_SCALE
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        validate_chunk_width(self.chunk_width)
        if self.viewport_width < 1 or self.viewport_height < 1:
            raise ConfigurationError(
                f"viewport must be at least 1x1, got {self.viewport_width}x{self.viewport_height}"
            )
        if not self.device_scale > 0:
            raise ConfigurationError(f"device scale must be > 0, got {self.device_scale}")
        if self.max_payload_bytes < 1:
            raise ConfigurationError(f"MAX_PAYLOAD_BYTES must be >= 1, got {self.max_payload_bytes}")


def validate_chunk_width(width: object) -> int:
    """Return width unchanged if it is a usable segment width, else raise ConfigurationError."""
    if isinstance(width, bool) or not isinstance(width, int):
        raise ConfigurationError(f"chunk width must be an integer, got {width!r}")
    if width < 1:
        raise ConfigurationError(f"chunk width must be >= 1, got {width}")
    return width


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e


def load_config(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build EngineConfig from env vars; raises ConfigurationError on bad values."""
    source = os.environ if env is None else env
    origins_raw = (source.get("ALLOWED_ORIGINS") or "").strip()
    origins = [o.strip() for o in origins_raw.split(",") if o.strip()] if origins_raw else ["*"]
    return EngineConfig(
        chunk_width=_env_int(source, "CHUNK_WIDTH", DEFAULT_CHUNK_WIDTH),
        viewport_width=_env_int(source, "RENDER_VIEWPORT_WIDTH", DEFAULT_VIEWPORT_WIDTH),
        viewport_height=_env_int(source, "RENDER_VIEWPORT_HEIGHT", DEFAULT_VIEWPORT_HEIGHT),
        device_scale=_env_float(source, "RENDER_DEVICE_SCALE", DEFAULT_DEVICE_SCALE),
        max_payload_bytes=_env_int(source, "MAX_PAYLOAD_BYTES", DEFAULT_MAX_PAYLOAD_BYTES),
        allowed_origins=origins,
    )
