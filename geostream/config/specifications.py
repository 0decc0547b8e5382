"""
Pydantic specifications for a geocoding run.

The specifications describe which provider to call, how the geocode stage
extracts addresses, and where records are read from and written to.
"""

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class GeocoderProvider(str, Enum):
    """Supported geocoding providers."""

    GOOGLE = "google"


class ProgressMode(str, Enum):
    """Progress display modes (see ``create_progress_tracker``)."""

    AUTO = "auto"
    RICH = "rich"
    LOGGING = "logging"
    NONE = "none"


class GeocoderSpec(BaseModel):
    """Geocoding provider settings.

    Attributes:
        provider: Provider to call
        api_key: Provider API key (falls back to GOOGLE_MAPS_API_KEY)
        base_url: Override for the provider endpoint
        language: Preferred result language (e.g. "en")
        region: Region bias as a ccTLD (e.g. "us")
        request_timeout: HTTP timeout in seconds
    """

    provider: GeocoderProvider = Field(
        GeocoderProvider.GOOGLE, description="Geocoding provider"
    )
    api_key: str | None = Field(None, description="Provider API key")
    base_url: str | None = Field(None, description="Provider endpoint override")
    language: str | None = Field(None, description="Result language")
    region: str | None = Field(None, description="Region bias (ccTLD)")
    request_timeout: float = Field(10.0, description="HTTP timeout (s)", gt=0)

    def resolve_api_key(self) -> str | None:
        """Return the configured key, or the GOOGLE_MAPS_API_KEY env var."""
        return self.api_key or os.getenv("GOOGLE_MAPS_API_KEY")


class StreamSpec(BaseModel):
    """Geocode stage settings.

    Attributes:
        address_field: Record key holding the address; None treats the whole
            record as the address
        timeout: Per-lookup timeout in seconds; None waits indefinitely
    """

    address_field: str | None = Field(None, description="Address key in record")
    timeout: float | None = Field(None, description="Per-lookup timeout (s)", gt=0)


class IOSpec(BaseModel):
    """Input and output locations."""

    input_path: Path = Field(..., description="Address records file")
    output_path: Path = Field(..., description="Geocoded records file")
    output_format: str | None = Field(
        None, description="Output format (ndjson, csv); detected if None"
    )
    columns: list[str] | None = Field(None, description="Input columns to load")

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str | None) -> str | None:
        """Validate output format is supported."""
        if v is not None and v not in ("ndjson", "csv"):
            raise ValueError(f"Unsupported output format: {v}")
        return v


class PipelineSpec(BaseModel):
    """Complete specification for one geocoding run."""

    geocoder: GeocoderSpec = Field(default_factory=GeocoderSpec)
    stream: StreamSpec = Field(default_factory=StreamSpec)
    io: IOSpec
    progress_mode: ProgressMode = Field(ProgressMode.AUTO)
