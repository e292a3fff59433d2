# order_tracker/main.py
"""
FastAPI application for the order tracker.

``create_app`` builds a fresh app with its own ``Settings`` and ``Store``
(kept on ``app.state``), so tests and multiple instances never share data.
A default instance is created at import time for uvicorn::

    uvicorn order_tracker.main:app --reload
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Dict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    OrderTrackerError,
    ValidationError,
)
from .logging_config import setup_logging
from .routes import auth as auth_routes
from .routes import orders as order_routes
from .schemas import fail
from .store import build_store

logger = logging.getLogger(__name__)


# Map exception types to HTTP status codes; subclasses resolve via their MRO.
ERROR_STATUS_CODES: Dict[type, int] = {
    ValidationError: 400,
    ConflictError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    InternalError: 500,
}


def status_for(exc: OrderTrackerError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(x) for x in err.get("loc", ()) if x not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(OrderTrackerError)
    async def order_tracker_error_handler(request: Request, exc: OrderTrackerError) -> JSONResponse:
        return JSONResponse(status_code=status_for(exc), content=fail(exc.error, exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=fail(ValidationError.label, _validation_message(exc)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            body = fail(
                "Route not found",
                f"The endpoint {request.method} {request.url.path} does not exist",
            )
        else:
            body = fail(str(exc.detail), str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(InternalError.label, "An unexpected error occurred"),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, version=settings.version)
    app.state.settings = settings
    app.state.store = build_store(seed=settings.seed_data)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_error_handlers(app)

    # -------------------
    # Health
    # -------------------
    @app.get("/health")
    def health():
        return {
            "success": True,
            "message": f"{settings.project_name} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
        }

    app.include_router(auth_routes.router, prefix="/api/auth", tags=["auth"])
    app.include_router(order_routes.router, prefix="/api/orders", tags=["orders"])

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
