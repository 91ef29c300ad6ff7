"""Logging configuration for Adaptiq."""

import logging
import sys
from typing import Any, Dict

import structlog
from structlog.types import Processor

from .config import get_settings
from .utils.exceptions import ConfigurationException

LOG_FORMATS = ("json", "console")


def configure_logging() -> None:
    """Configure structured logging for the application."""
    settings = get_settings()
    if settings.log_format not in LOG_FORMATS:
        raise ConfigurationException(
            f"Unsupported log format: {settings.log_format}",
            config_key="log_format",
        )
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_request_middleware(request_data: Dict[str, Any]) -> None:
    """Log HTTP request data."""
    logger = get_logger("api.request")
    logger.info(
        "HTTP request",
        method=request_data.get("method"),
        path=request_data.get("path"),
        query_params=request_data.get("query_params"),
    )


def log_response_middleware(response_data: Dict[str, Any]) -> None:
    """Log HTTP response data."""
    logger = get_logger("api.response")
    logger.info(
        "HTTP response",
        status_code=response_data.get("status_code"),
        processing_time=response_data.get("processing_time"),
    )


def bind_user_context(user_id: str) -> str:
    """Attach the learner's user id to every log event of the current request."""
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
