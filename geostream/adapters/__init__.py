"""Infrastructure adapters for external systems."""

from geostream.adapters.geocoder import (
    GOOGLE_MAPS_API_URL,
    Geocoder,
    GoogleGeocoder,
    create_geocoder,
)
from geostream.adapters.record_loader import RecordLoader
from geostream.adapters.record_writer import RecordWriter, flatten_record

__all__ = [
    # Geocoding providers
    "Geocoder",
    "GoogleGeocoder",
    "GOOGLE_MAPS_API_URL",
    "create_geocoder",
    # Record I/O
    "RecordLoader",
    "RecordWriter",
    "flatten_record",
]
