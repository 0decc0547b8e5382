"""
Custom exceptions for geostream.

Provider failures are data-level errors: the geocode stage captures them and
turns them into a per-record ``error`` field. Everything else propagates.
"""


class GeostreamError(Exception):
    """Base exception for all geostream errors."""

    pass


class GeocodeError(GeostreamError):
    """
    A geocoding provider could not resolve an address.

    Examples:
    - Provider status ZERO_RESULTS (address not found)
    - Provider status OVER_QUERY_LIMIT / REQUEST_DENIED
    - Transport failure while calling the provider

    Attributes:
        status: Provider status code, when the provider reported one
    """

    def __init__(self, message: str, status: str | None = None):
        super().__init__(message)
        self.status = status


class ConfigurationError(GeostreamError):
    """Invalid or incomplete configuration (missing API key, unknown provider)."""

    pass
