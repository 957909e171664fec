"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from roibridge import __version__
from roibridge.config import Settings
from roibridge.dependencies import get_settings
from roibridge.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, env=settings.roibridge_env)
