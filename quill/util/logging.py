"""Logging configuration for the process entry points."""

import logging
import sys

import logfire

from quill.config import Settings

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def resolve_log_level(settings: Settings) -> int:
    """Pick the log level for the current environment.

    Args:
        settings: Application settings

    Returns:
        A ``logging`` level constant
    """
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging and forward records to Logfire.

    Records from our own loggers and from third-party libraries that use
    stdlib logging (uvicorn, alembic) end up next to the Logfire spans.

    Args:
        settings: Application settings
    """
    level = resolve_log_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logfire.LogfireLoggingHandler(),
        ],
        force=True,  # Override any existing configuration
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # SQL echo is handled by the engine in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
    logging.getLogger("quill").setLevel(level)

    get_logger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
