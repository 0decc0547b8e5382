"""Run configuration: specifications and file loading."""

from geostream.config.config_loader import ConfigLoader
from geostream.config.specifications import (
    GeocoderProvider,
    GeocoderSpec,
    IOSpec,
    PipelineSpec,
    ProgressMode,
    StreamSpec,
)

__all__ = [
    "ConfigLoader",
    "GeocoderProvider",
    "GeocoderSpec",
    "IOSpec",
    "PipelineSpec",
    "ProgressMode",
    "StreamSpec",
]
