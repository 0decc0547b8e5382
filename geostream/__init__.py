"""
geostream - streaming geocoding stage for address pipelines.

Geocodes a stream of address records one at a time, emitting exactly one
enriched record per input with run progress attached.
"""

from geostream.adapters import (
    Geocoder,
    GoogleGeocoder,
    RecordLoader,
    RecordWriter,
)
from geostream.api import GeocodePipeline, RunSummary
from geostream.config import ConfigLoader, PipelineSpec
from geostream.core import (
    ConfigurationError,
    GeocodeError,
    GeocodeRecord,
    GeostreamError,
    ProgressSnapshot,
    RunStatistics,
)
from geostream.orchestration import (
    GeocodeStream,
    field_accessor,
    identity_accessor,
)
from geostream.utils import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Stage
    "GeocodeStream",
    "field_accessor",
    "identity_accessor",
    # Models
    "GeocodeRecord",
    "ProgressSnapshot",
    "RunStatistics",
    # Providers and I/O
    "Geocoder",
    "GoogleGeocoder",
    "RecordLoader",
    "RecordWriter",
    # Pipeline
    "GeocodePipeline",
    "RunSummary",
    "ConfigLoader",
    "PipelineSpec",
    # Exceptions
    "GeostreamError",
    "GeocodeError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
