"""
Structured logging utilities.

Provides consistent logging configuration across the package using structlog.
"""

import logging
import os
import sys
from typing import Any

import structlog

# Track if logging has been configured
_logging_configured = False

# Libraries whose request-level chatter hides the per-address log lines
_NOISY_LOGGERS = ["httpx", "httpcore", "asyncio", "pydantic"]


def configure_logging(
    level: str | None = None,
    json_format: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for geostream.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to GEOSTREAM_LOG_LEVEL env var, or INFO.
        json_format: Use JSON output format
        include_timestamp: Include timestamps in logs
    """
    global _logging_configured

    if level is None:
        level = os.getenv("GEOSTREAM_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    # Silence HTTP client noise unless GEOSTREAM_TRACE is enabled
    trace_mode = os.getenv("GEOSTREAM_TRACE", "false").lower() in ("true", "1", "yes")

    if not trace_mode:
        for logger_name in _NOISY_LOGGERS:
            if logger_name in ["pydantic", "asyncio"]:
                logging.getLogger(logger_name).setLevel(logging.CRITICAL)
            else:
                logging.getLogger(logger_name).setLevel(logging.WARNING)

            logging.getLogger(logger_name).propagate = False

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        from rich.logging import RichHandler

        # Route stdlib logging through Rich so progress bars are not torn
        logging.getLogger().handlers = [
            RichHandler(
                rich_tracebacks=True,
                markup=True,
                show_time=include_timestamp,
                show_path=False,
            )
        ]
        processors.append(structlog.dev.ConsoleRenderer(colors=True, pad_level=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _logging_configured = True


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Auto-configures logging on first use if not already configured.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    if not _logging_configured:
        configure_logging()

    return structlog.get_logger(name)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize sensitive data for logging.

    Args:
        data: Dictionary potentially containing sensitive data

    Returns:
        Sanitized dictionary
    """
    sensitive_keys = {
        "api_key",
        "password",
        "secret",
        "token",
        "authorization",
        "credential",
    }

    sanitized = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in sensitive_keys):
            sanitized[key] = "***REDACTED***"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value

    return sanitized
