"""Core data models, statistics and exceptions."""

from geostream.core.exceptions import (
    ConfigurationError,
    GeocodeError,
    GeostreamError,
)
from geostream.core.models import Candidate, GeocodeRecord, ProgressSnapshot
from geostream.core.statistics import (
    RunStatistics,
    StatisticsHandle,
    advance_statistics,
)

__all__ = [
    # Models
    "Candidate",
    "GeocodeRecord",
    "ProgressSnapshot",
    # Statistics
    "RunStatistics",
    "StatisticsHandle",
    "advance_statistics",
    # Exceptions
    "GeostreamError",
    "GeocodeError",
    "ConfigurationError",
]
