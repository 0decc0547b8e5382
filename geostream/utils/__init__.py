"""Utility modules for cross-cutting concerns."""

from geostream.utils.logging_utils import (
    configure_logging,
    get_logger,
    sanitize_for_logging,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_for_logging",
]
