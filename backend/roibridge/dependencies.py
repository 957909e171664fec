"""FastAPI dependency injection."""

from __future__ import annotations

from roibridge.codec.config import CodecConfig
from roibridge.config import settings


def get_settings():
    return settings


def get_codec_config() -> CodecConfig:
    return CodecConfig.from_settings(settings)
