"""
Pytest configuration and fixtures.

Provides reusable test fixtures and a scripted geocoder for the test suite.
"""

import asyncio
from typing import Any

import pytest

from geostream.adapters.geocoder import Geocoder
from geostream.core.exceptions import GeocodeError


def make_candidate(lat: float, lng: float, **extra: Any) -> dict[str, Any]:
    """Build a Google-shaped candidate."""
    return {"geometry": {"location": {"lat": lat, "lng": lng}}, **extra}


class MockGeocoder(Geocoder):
    """
    Geocoder answering from a fixed table, without network calls.

    Table values are candidate lists, or exceptions to raise. Addresses
    missing from the table fail with ZERO_RESULTS.
    """

    def __init__(self, table: dict[str, Any] | None = None, delay: float = 0.0):
        self.table = table or {}
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def geocode_address(self, address: str) -> list[dict[str, Any]]:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            answer = self.table.get(address)
            if answer is None:
                raise GeocodeError("ZERO_RESULTS", status="ZERO_RESULTS")
            if isinstance(answer, Exception):
                raise answer
            return answer
        finally:
            self.in_flight -= 1

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def main_st_candidate():
    """Single candidate for "1 Main St"."""
    return make_candidate(1, 2, formatted_address="1 Main St, Springfield")


@pytest.fixture
def mock_geocoder(main_st_candidate):
    """Geocoder resolving "1 Main St" and rejecting everything else."""
    return MockGeocoder({"1 Main St": [main_st_candidate]})


@pytest.fixture
def candidate_factory():
    """Factory for Google-shaped candidates."""
    return make_candidate


@pytest.fixture
def geocoder_factory():
    """Factory for scripted geocoders."""
    return MockGeocoder
