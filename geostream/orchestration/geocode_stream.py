"""
Geocode transform stage.

Turns a stream of address records into a stream of enriched geocoding
records, one output per input, in input order. Exactly one record is in
flight at a time: the next input is not pulled until the consumer has taken
the previous output, which gives the stage natural backpressure.
"""

import asyncio
import time
from collections.abc import (
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
)
from typing import Any

from geostream.adapters.geocoder import Geocoder
from geostream.core.exceptions import GeocodeError
from geostream.core.models import Candidate, GeocodeRecord
from geostream.core.statistics import StatisticsHandle, advance_statistics
from geostream.utils import get_logger

logger = get_logger(__name__)

AddressAccessor = Callable[[Any], str]
RecordCallback = Callable[[GeocodeRecord], Awaitable[None]]


def identity_accessor(record: Any) -> str:
    """Default accessor: the record itself is the address."""
    return record


def field_accessor(field_name: str) -> AddressAccessor:
    """Build an accessor reading ``record[field_name]``."""

    def accessor(record: Any) -> str:
        return record[field_name]

    accessor.__name__ = f"field_accessor[{field_name}]"
    return accessor


class GeocodeStream:
    """
    Streaming stage that geocodes one record at a time.

    Provider failures (GeocodeError, transport errors, timeouts, empty
    candidate lists) are captured into the record's ``error`` field and the
    stream continues. Accessor failures and malformed statistics handles are
    not caught: they abort the stream.

    Example:
        stats = RunStatistics(total=loader.row_count)
        stream = GeocodeStream(geocoder, stats, accessor=field_accessor("address"))

        async for record in stream.process_stream(loader.stream_records()):
            writer.append(record)
    """

    def __init__(
        self,
        geocoder: Geocoder,
        stats: StatisticsHandle,
        accessor: AddressAccessor = identity_accessor,
        timeout: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize geocode stream.

        Args:
            geocoder: Geocoding provider
            stats: Shared statistics handle; this stage is its only writer
            accessor: Extracts the address string from an input record
            timeout: Per-lookup timeout in seconds (None waits indefinitely)
            clock: Returns current time as epoch seconds
        """
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        self.geocoder = geocoder
        self.stats = stats
        self.accessor = accessor
        self.timeout = timeout
        self.clock = clock

    async def _lookup(self, address: str) -> list[Candidate]:
        if self.timeout is None:
            candidates = await self.geocoder.geocode_address(address)
        else:
            try:
                candidates = await asyncio.wait_for(
                    self.geocoder.geocode_address(address), timeout=self.timeout
                )
            except asyncio.TimeoutError as e:
                raise GeocodeError(
                    f"Geocoding timed out after {self.timeout}s", status="TIMEOUT"
                ) from e

        if not candidates:
            raise GeocodeError("ZERO_RESULTS", status="ZERO_RESULTS")
        return candidates

    async def transform(self, item: Any) -> GeocodeRecord:
        """
        Geocode one input record.

        Statistics advance exactly once per call, after the lookup settles,
        whether it succeeded or not.

        Args:
            item: Input record of arbitrary shape

        Returns:
            The enriched record for this input
        """
        address = self.accessor(item)

        candidates: list[Candidate] | None = None
        error: str | None = None
        try:
            candidates = await self._lookup(address)
        except Exception as e:
            error = str(e) or type(e).__name__

        progress = advance_statistics(self.stats, self.clock())

        if candidates is None:
            logger.warning(f"Geocoding failed for {address!r}: {error}")
            return GeocodeRecord(
                address=address,
                input=item,
                progress=progress,
                error=error,
            )

        best = candidates[0]
        logger.debug(
            f"Geocoded record {progress.current}: {address!r} "
            f"({len(candidates)} candidates)"
        )
        return GeocodeRecord(
            address=address,
            input=item,
            progress=progress,
            location=best["geometry"]["location"],
            result=best,
            results=candidates,
        )

    async def process_stream(
        self,
        source: Iterable[Any] | AsyncIterable[Any],
        on_record: RecordCallback | None = None,
    ) -> AsyncIterator[GeocodeRecord]:
        """
        Geocode every record of a stream.

        Args:
            source: Sync or async iterable of input records
            on_record: Optional callback awaited for each record before it is
                yielded

        Yields:
            One GeocodeRecord per input record, in input order

        Note:
            The source is pulled lazily: an input is only requested after
            the consumer has taken the previous record.
        """
        processed = 0
        failed = 0

        async for item in _aiter(source):
            record = await self.transform(item)
            processed += 1
            if not record.succeeded:
                failed += 1

            if on_record:
                await on_record(record)

            yield record

        logger.info(
            f"Geocoding stream complete: {processed} records, {failed} failures"
        )

    def __repr__(self) -> str:
        accessor_name = getattr(self.accessor, "__name__", repr(self.accessor))
        return (
            f"GeocodeStream(geocoder={self.geocoder!r}, "
            f"accessor={accessor_name}, timeout={self.timeout})"
        )


async def _aiter(source: Iterable[Any] | AsyncIterable[Any]) -> AsyncIterator[Any]:
    """Iterate a sync or async iterable uniformly."""
    if hasattr(source, "__aiter__"):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item
