"""
FastAPI app entry point aggregating per-domain routers under promptlib/routes.
Keep as `uvicorn promptlib.api:app`.
"""
from __future__ import annotations

import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, load_settings
from .db import Store
from .logs import configure_logging

from .routes import auth as auth_routes
from .routes import base as base_routes
from .routes import departments as departments_routes
from .routes import logs as logs_routes
from .routes import maintenance as maintenance_routes
from .routes import prompts as prompts_routes
from .routes import saved as saved_routes

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    body_errors = [e for e in errors if e.get("loc", ())[:1] == ("body",)]
    if any(e.get("loc", ())[:1] == ("path",) for e in errors):
        detail = "Invalid prompt ID"
    elif body_errors and all(e.get("type") == "enum" for e in body_errors):
        detail = "Invalid department/category"
    elif body_errors:
        detail = "All fields are required"
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail, "errors": jsonable_encoder(errors)})


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    settings = settings or load_settings()
    store = store or Store(settings.db_path)

    app = FastAPI(title="promptlib-api", version=__version__)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.on_event("startup")
    def on_startup():
        configure_logging(settings.log_level)
        try:
            store.init_schema()
        except sqlite3.Error as e:
            logger.error("ensure schema failed for %s: %s", store.db_path, e)

    @app.on_event("shutdown")
    def on_shutdown():
        store.close()

    # saved routes first: /api/prompts/saved must win over /api/prompts/{prompt_id}
    app.include_router(base_routes.router)
    app.include_router(auth_routes.router)
    app.include_router(saved_routes.router)
    app.include_router(prompts_routes.router)
    app.include_router(departments_routes.router)
    app.include_router(maintenance_routes.router)
    app.include_router(logs_routes.router)
    return app


app = create_app()
