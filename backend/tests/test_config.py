from __future__ import annotations

import pytest

from config import DEFAULT_CHUNK_WIDTH, EngineConfig, load_config
from errors import ConfigurationError


def test_defaults_when_env_empty():
    cfg = load_config({})
    assert cfg.chunk_width == DEFAULT_CHUNK_WIDTH
    assert (cfg.viewport_width, cfg.viewport_height, cfg.device_scale) == (900, 1600, 2.0)
    assert cfg.allowed_origins == ["*"]


def test_env_overrides():
    cfg = load_config(
        {
            "CHUNK_WIDTH": "8",
            "RENDER_VIEWPORT_WIDTH": "1200",
            "RENDER_DEVICE_SCALE": "1.5",
            "ALLOWED_ORIGINS": "https://a.example, https://b.example",
        }
    )
    assert cfg.chunk_width == 8
    assert cfg.viewport_width == 1200
    assert cfg.device_scale == 1.5
    assert cfg.allowed_origins == ["https://a.example", "https://b.example"]


@pytest.mark.parametrize(
    "env",
    [
        {"CHUNK_WIDTH": "0"},
        {"CHUNK_WIDTH": "-3"},
        {"CHUNK_WIDTH": "wide"},
        {"RENDER_VIEWPORT_HEIGHT": "0"},
        {"RENDER_DEVICE_SCALE": "0"},
        {"MAX_PAYLOAD_BYTES": "0"},
    ],
)
def test_invalid_values_fail_at_construction(env):
    with pytest.raises(ConfigurationError):
        load_config(env)


def test_engine_config_rejects_zero_width_directly():
    with pytest.raises(ConfigurationError):
        EngineConfig(chunk_width=0)
