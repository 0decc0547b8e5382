"""High-level API for geocoding runs."""

from geostream.api.pipeline import GeocodePipeline, RunSummary

__all__ = ["GeocodePipeline", "RunSummary"]
