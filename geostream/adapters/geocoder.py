"""
Geocoding provider abstractions and implementations.

Provides a unified async interface for geocoding providers so the geocode
stage never depends on a concrete HTTP client.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from geostream.config.specifications import GeocoderProvider, GeocoderSpec
from geostream.core.exceptions import ConfigurationError, GeocodeError
from geostream.core.models import Candidate
from geostream.utils import get_logger

logger = get_logger(__name__)

GOOGLE_MAPS_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class Geocoder(ABC):
    """
    Abstract base class for geocoding providers.

    Implementations return candidates ordered best-first. Each candidate is
    a mapping carrying at least ``geometry.location`` (``{"lat", "lng"}``).
    Failures are raised, never returned as empty placeholders.
    """

    @abstractmethod
    async def geocode_address(self, address: str) -> list[Candidate]:
        """
        Geocode a single address.

        Args:
            address: Free-form address string

        Returns:
            Candidate matches, best first

        Raises:
            GeocodeError: If the provider cannot resolve the address
        """
        pass

    async def aclose(self) -> None:
        """Release provider resources (connection pools)."""
        pass

    async def __aenter__(self) -> "Geocoder":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


class GoogleGeocoder(Geocoder):
    """
    Google Maps Geocoding API client.

    Example:
        async with GoogleGeocoder(api_key="...") as geocoder:
            candidates = await geocoder.geocode_address("1600 Amphitheatre Pkwy")
            print(candidates[0]["geometry"]["location"])
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = GOOGLE_MAPS_API_URL,
        language: str | None = None,
        region: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize Google geocoder.

        Args:
            api_key: Google Maps API key
            base_url: Geocoding endpoint
            language: Preferred result language
            region: Region bias (ccTLD)
            timeout: HTTP timeout in seconds
            client: Optional preconfigured httpx client (owned by the caller)
        """
        if not api_key:
            raise ConfigurationError("Google geocoder requires an API key")

        self.api_key = api_key
        self.base_url = base_url
        self.language = language
        self.region = region
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _build_params(self, address: str) -> dict[str, str]:
        params = {"address": address, "key": self.api_key}
        if self.language:
            params["language"] = self.language
        if self.region:
            params["region"] = self.region
        return params

    async def geocode_address(self, address: str) -> list[Candidate]:
        """Geocode an address; any status other than OK raises GeocodeError."""
        try:
            response = await self._client.get(
                self.base_url, params=self._build_params(address)
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise GeocodeError(f"Geocoding request failed: {e}") from e
        except ValueError as e:
            raise GeocodeError(f"Invalid geocoding response: {e}") from e

        status = data.get("status", "UNKNOWN_ERROR")
        if status != "OK":
            # error_message is only present for denied/invalid requests
            raise GeocodeError(data.get("error_message") or status, status=status)

        results = data.get("results") or []
        logger.debug(f"Geocoded {address!r}: {len(results)} candidates")
        return results

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def __repr__(self) -> str:
        return (
            f"GoogleGeocoder(base_url={self.base_url!r}, "
            f"language={self.language!r}, region={self.region!r})"
        )


def create_geocoder(spec: GeocoderSpec) -> Geocoder:
    """
    Factory function to create a geocoder from its specification.

    Args:
        spec: Geocoder specification

    Returns:
        Configured Geocoder

    Raises:
        ConfigurationError: If the provider is unknown or the key is missing
    """
    if spec.provider == GeocoderProvider.GOOGLE:
        api_key = spec.resolve_api_key()
        if not api_key:
            raise ConfigurationError(
                "No API key configured: set geocoder.api_key or GOOGLE_MAPS_API_KEY"
            )
        return GoogleGeocoder(
            api_key=api_key,
            base_url=spec.base_url or GOOGLE_MAPS_API_URL,
            language=spec.language,
            region=spec.region,
            timeout=spec.request_timeout,
        )

    raise ConfigurationError(f"Unsupported geocoding provider: {spec.provider}")
