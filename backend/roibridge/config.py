"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    roibridge_env: str = "development"
    roibridge_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Remote shape schema
    schema_namespace: str = "http://www.openmicroscopy.org/Schemas/OME/2016-06"

    # Styling (packed ARGB, signed 32-bit)
    default_color: int = -65536  # opaque red
    class_colors: dict[str, int] = {}

    # Decomposition
    detect_rectangles: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
