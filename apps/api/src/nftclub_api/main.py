"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nftclub_api.config import Settings, get_settings
from nftclub_api.middleware import get_cors_headers, setup_middleware
from nftclub_api.routes import api_router
from nftclub_api.services import build_user_service
from nftclub_api.services.cosmos_db_init import initialize_cosmos_db
from nftclub_common.exceptions import (
    StoreError,
    UserNotFoundError,
    UserServiceError,
    UserValidationError,
)
from nftclub_common.services.user_store import UserStore

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[UserServiceError], int] = {
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    UserValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    settings: Settings = app.state.settings
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)
    logger.info("User store: %s", settings.user_store_backend)

    if settings.user_store_backend == "cosmos":
        logger.info("Initializing Cosmos DB...")
        await initialize_cosmos_db(settings)

    yield

    logger.info("%s shutting down", settings.app_name)


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    """Render domain errors with their own status code and error code."""
    status_code = next(
        (code for kind, code in _ERROR_STATUS.items() if isinstance(exc, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures like UserValidationError."""
    errors = [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=UserValidationError("Invalid request", errors=errors).to_dict(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so every failure has a JSON body.

    Runs outside CORSMiddleware, so CORS headers are added here.
    """
    logger.error("Unhandled exception: %s", exc, exc_info=True)

    settings: Settings = request.app.state.settings
    cors_headers = get_cors_headers(
        request.headers.get("origin"),
        ui_url=settings.ui_url,
        environment=settings.environment,
        extra_origins=settings.cors_extra_origins,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "internal_error"},
        headers=cors_headers,
    )


def create_app(settings: Settings | None = None, store: UserStore | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted
        store: User store to use instead of the one selected by settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="NFT Club - user API",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.user_service = build_user_service(settings, store=store)

    setup_middleware(
        app,
        ui_url=settings.ui_url,
        environment=settings.environment,
        extra_origins=settings.cors_extra_origins,
    )

    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "nftclub_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
