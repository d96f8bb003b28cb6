"""FastAPI application."""

from dishka import AsyncContainer
import logfire
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from quill.config import Settings
from quill.domain.error import StoreError
from quill.interface.api.routes import comments, health, likes, posts, users
from quill.util.di.container import create_container, setup_di
from quill.util.observability import (
    SERVICE_VERSION,
    instrument_fastapi,
    instrument_httpx,
)


async def translate_store_errors(request: Request, call_next) -> Response:
    """Report a failing store as a temporary outage."""
    try:
        return await call_next(request)
    except StoreError as exc:
        return _store_error_response(request, exc)


def _store_error_response(request: Request, exc: StoreError) -> JSONResponse:
    logfire.error(
        "Store unavailable",
        path=request.url.path,
        operation=exc.operation,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable, please retry"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so clients always get a JSON body."""
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to serve requests from (production
            container when omitted)

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.
    """
    settings = Settings()

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Quill API",
        description="Backend API for Quill - a blogging platform with threaded comments",
        version=SERVICE_VERSION,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Added after setup_di so it wraps the request container, which then
    # sees the error and rolls the session back
    app_instance.middleware("http")(translate_store_errors)
    app_instance.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(likes.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
