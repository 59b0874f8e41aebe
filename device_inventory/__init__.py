"""Application factory for the Device Inventory service.

``create_app`` is the one place where configuration, the database component,
middleware, routers and error handlers meet. The database is built here and
parked on ``app.state``; the lifespan handler opens it (schema + optional
sample rows) when the server starts and disposes of it on shutdown. Request
handlers reach it through the ``get_db`` dependency, so nothing is a
module-level singleton and tests can build as many isolated apps as they like.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .core.config import Settings, get_settings
from .core.errors import register_exception_handlers
from .core.jinja import get_templates
from .db.session import Database
from .middlewares import RequestIdMiddleware, SecurityHeadersMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    database: Database = app.state.database
    database.init()
    try:
        yield
    finally:
        database.teardown()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url, seed_sample_data=settings.SEED_SAMPLE_DATA)
    app.state.templates = get_templates(settings.TEMPLATES_DIR)

    app.mount("/static", StaticFiles(directory=str(settings.STATIC_DIR)), name="static")

    # Last added runs first: CORS, then security headers, then request ids/logging.
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from .routers import api_devices, api_status, ui

    app.include_router(api_devices.router)
    app.include_router(api_status.router)
    app.include_router(ui.router)

    register_exception_handlers(app)
    return app


__all__ = ["create_app"]
