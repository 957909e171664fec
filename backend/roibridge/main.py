"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roibridge import __version__
from roibridge.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.roibridge_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="roibridge",
        description="Shape codec and metadata reconciliation between an image viewer and a remote image server",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from roibridge.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
