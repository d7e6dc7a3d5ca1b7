"""FastAPI application factory.

`create_app` wires settings, the Mongo client lifespan, CORS, the error
envelope and the transaction routes. Run it with::

    uvicorn transaction_insights.api.app:create_app --factory --port 5002
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from transaction_insights import __version__
from transaction_insights.api import envelope
from transaction_insights.api.routes import router
from transaction_insights.config import Settings, get_settings
from transaction_insights.db import connect
from transaction_insights.errors import InsightsError

log = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate every failure into ``{"success": false, "error": ...}``."""

    @app.exception_handler(InsightsError)
    async def handle_insights_error(request: Request, exc: InsightsError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return envelope.failure(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return envelope.failure(400, str(exc))

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
        log.error("%s %s database error: %s", request.method, request.url.path, exc)
        return envelope.failure(500, str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return envelope.failure(500, str(exc) or exc.__class__.__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the API application.

    Args:
        settings: Configuration to use; read from the environment if omitted.

    Returns:
        A FastAPI instance. The Mongo client is opened on startup and closed
        on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client, db = connect(settings)
        app.state.client = client
        app.state.db = db
        log.info("Connected to MongoDB database %s", settings.mongo_db)
        try:
            yield
        finally:
            client.close()

    app = FastAPI(title="Transaction Insights API", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix, tags=["transactions"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
