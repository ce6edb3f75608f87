# src/rstable/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and installs CORS so browser clients on
another origin (e.g. a dev server) can read the JSON endpoints.
Route handlers live in `rstable.api.routes`.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from rstable import __version__
from rstable.config.settings import get_settings
from rstable.core.logging import configure_logging

from .routes import router

LOCAL_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(title="rsTable API", version=__version__)

    origins = list(settings.server.cors_origins)
    origin_regex = LOCAL_ORIGIN_REGEX if settings.server.cors_allow_local else None
    if origins or origin_regex:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_origin_regex=origin_regex,
            allow_credentials=False,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    application.include_router(router)
    return application


configure_logging()

app = create_app()
