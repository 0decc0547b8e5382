"""Data models for geocoding results and run progress."""

from dataclasses import dataclass, field
from typing import Any

Candidate = dict[str, Any]


@dataclass
class ProgressSnapshot:
    """
    Progress block taken once per processed record.

    ``total`` and the fields derived from it are None when the run has no
    known total. ``estimated_duration`` is in milliseconds.
    """

    current: int
    total: int | None = None
    pending: int | None = None
    percent: float | None = None
    estimated_duration: int | None = None

    @property
    def has_total(self) -> bool:
        return self.total is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"current": self.current}
        if self.has_total:
            data.update(
                total=self.total,
                pending=self.pending,
                percent=self.percent,
                estimatedDuration=self.estimated_duration,
            )
        return data


@dataclass
class GeocodeRecord:
    """
    One enriched output record, emitted for exactly one input record.

    On success ``results`` holds every candidate and ``result``/``location``
    come from the first one. On failure ``error`` carries the provider's
    message, ``result``/``location`` are empty and ``results`` is None.
    """

    address: str
    input: Any
    progress: ProgressSnapshot
    error: str | None = None
    location: dict[str, Any] = field(default_factory=dict)
    result: Candidate = field(default_factory=dict)
    results: list[Candidate] | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def current(self) -> int:
        return self.progress.current

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the output record shape.

        ``results`` is omitted for failed lookups and the progress fields
        beyond ``current`` are omitted when no total is known.
        """
        data: dict[str, Any] = {
            "error": self.error,
            "address": self.address,
            "input": self.input,
            "location": self.location,
            "result": self.result,
        }
        if self.results is not None:
            data["results"] = self.results
        data.update(self.progress.to_dict())
        return data
