"""
Run statistics shared between the geocode stage and progress consumers.

The stage is the only writer of ``current``. Access is not synchronized:
the stage processes one record at a time on a single event loop, so the
increment-then-read in ``advance_statistics`` cannot interleave. Callers
that introduce thread-level parallel lookups must wrap the handle in their
own lock.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Protocol

from geostream.core.models import ProgressSnapshot


class StatisticsHandle(Protocol):
    """Anything with a writable ``current`` and optional ``total``/``start_time``."""

    current: int


@dataclass
class RunStatistics:
    """
    Default statistics handle for one geocoding run.

    Attributes:
        current: Records processed so far
        total: Expected number of records, None when unknown
        start_time: Run start as epoch seconds
    """

    current: int = 0
    total: int | None = None
    start_time: float = field(default_factory=time.time)

    def advance(self, now: float | None = None) -> ProgressSnapshot:
        """Count one processed record and return its progress snapshot."""
        return advance_statistics(self, now)


def advance_statistics(handle: Any, now: float | None = None) -> ProgressSnapshot:
    """
    Increment ``handle.current`` by one and snapshot the progress block.

    ``current``, ``total`` and ``start_time`` are read once, right after the
    increment, so the snapshot is consistent for this record.

    Args:
        handle: Statistics handle (``RunStatistics`` or compatible object)
        now: Current time as epoch seconds (defaults to ``time.time()``)

    Returns:
        ProgressSnapshot for the record just counted

    Raises:
        AttributeError: If the handle has no ``current`` attribute
        ZeroDivisionError: If the handle declares a total of zero
    """
    handle.current += 1
    current = handle.current
    total = getattr(handle, "total", None)

    if total is None:
        return ProgressSnapshot(current=current)

    ratio = current / total
    start_time = getattr(handle, "start_time", None)
    estimated_duration = None
    if start_time is not None:
        if now is None:
            now = time.time()
        elapsed_ms = (now - start_time) * 1000
        estimated_duration = round(elapsed_ms / ratio)

    return ProgressSnapshot(
        current=current,
        total=total,
        pending=total - current,
        percent=ratio * 100,
        estimated_duration=estimated_duration,
    )
