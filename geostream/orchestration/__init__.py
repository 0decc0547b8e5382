"""Orchestration: the geocode stage and progress reporting."""

from geostream.orchestration.geocode_stream import (
    AddressAccessor,
    GeocodeStream,
    field_accessor,
    identity_accessor,
)
from geostream.orchestration.progress_reporter import ProgressReporter
from geostream.orchestration.progress_tracker import (
    LoggingProgressTracker,
    NoOpProgressTracker,
    ProgressTracker,
    RichProgressTracker,
    create_progress_tracker,
)

__all__ = [
    # Geocode stage
    "GeocodeStream",
    "AddressAccessor",
    "identity_accessor",
    "field_accessor",
    # Progress
    "ProgressReporter",
    "ProgressTracker",
    "RichProgressTracker",
    "LoggingProgressTracker",
    "NoOpProgressTracker",
    "create_progress_tracker",
]
