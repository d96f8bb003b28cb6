"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Comment created", comment_id=str(comment.id))

    with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from quill.config import Settings

SERVICE_NAME = "quill-api"
SERVICE_VERSION = "0.1.0"


def _should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    Explicit setting wins, then token presence, otherwise console only.
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current environment.

    Development keeps everything local unless a token is configured; the
    console output is verbose in debug mode.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send_to_logfire(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the application.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if getattr(request, "client", None):
            result["client_host"] = request.client.host
        return result

    # Authorization headers carry bearer tokens, so headers are not captured
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through the engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound requests made with httpx (the API client uses it)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
