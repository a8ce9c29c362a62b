"""Middleware setup for the FastAPI application."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

_DEV_ENVIRONMENTS = {"development", "dev", "local"}
_DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def get_allowed_origins(
    ui_url: str | None = None,
    environment: str = "development",
    extra_origins: list[str] | None = None,
) -> list[str]:
    """Get list of allowed CORS origins.

    Args:
        ui_url: URL of the UI application
        environment: Environment name (development, production, etc.)
        extra_origins: Additional origins from configuration

    Returns:
        Deduplicated list of allowed origin URLs, in order
    """
    origins: list[str] = []
    if ui_url:
        origins.append(ui_url.rstrip("/"))
    origins.extend(origin.rstrip("/") for origin in extra_origins or [])
    if environment.lower() in _DEV_ENVIRONMENTS:
        origins.extend(_DEV_ORIGINS)
    return list(dict.fromkeys(origins))


def get_cors_headers(
    origin: str | None,
    ui_url: str | None = None,
    environment: str = "development",
    extra_origins: list[str] | None = None,
) -> dict[str, str]:
    """Get CORS headers for a given origin.

    Responses built outside CORSMiddleware (the last-resort 500 handler)
    need these added by hand.

    Args:
        origin: The origin from the request header
        ui_url: URL of the UI application
        environment: Environment name (development, production, etc.)
        extra_origins: Additional origins from configuration

    Returns:
        Dictionary of CORS headers, empty if origin is not allowed
    """
    if not origin or origin not in get_allowed_origins(ui_url, environment, extra_origins):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )


def setup_middleware(
    app: FastAPI,
    ui_url: str | None = None,
    environment: str = "development",
    extra_origins: list[str] | None = None,
) -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        ui_url: URL of the UI application for CORS
        environment: Environment name (development, production, etc.)
        extra_origins: Additional CORS origins
    """
    app.middleware("http")(log_requests)

    allowed_origins = get_allowed_origins(ui_url, environment, extra_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)
