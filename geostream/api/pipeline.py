"""
GeocodePipeline - the facade for a complete geocoding run.

Wires a record loader, the geocode stage and a record writer together,
with progress display and a run summary.
"""

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from geostream.adapters.geocoder import Geocoder, create_geocoder
from geostream.adapters.record_loader import RecordLoader
from geostream.adapters.record_writer import RecordWriter
from geostream.config.config_loader import ConfigLoader
from geostream.config.specifications import PipelineSpec
from geostream.core.statistics import RunStatistics
from geostream.orchestration.geocode_stream import (
    GeocodeStream,
    field_accessor,
    identity_accessor,
)
from geostream.orchestration.progress_reporter import ProgressReporter
from geostream.orchestration.progress_tracker import (
    ProgressTracker,
    create_progress_tracker,
)
from geostream.utils import get_logger, sanitize_for_logging


@dataclass
class RunSummary:
    """Outcome of one pipeline run."""

    processed: int
    succeeded: int
    failed: int
    duration_seconds: float
    output_path: Path

    @property
    def success_rate(self) -> float:
        return self.succeeded / self.processed if self.processed else 0.0


class GeocodePipeline:
    """
    Geocode every record of an input file into an output file.

    Example:
        ```python
        pipeline = GeocodePipeline.from_config("geocode.yaml")
        summary = pipeline.run()
        print(f"{summary.failed} of {summary.processed} addresses failed")
        ```
    """

    def __init__(
        self,
        spec: PipelineSpec,
        geocoder: Geocoder | None = None,
        tracker: ProgressTracker | None = None,
    ):
        """
        Initialize pipeline.

        Args:
            spec: Complete run specification
            geocoder: Optional geocoder (default: built from ``spec.geocoder``)
            tracker: Optional progress tracker (default: from ``spec.progress_mode``)
        """
        self.id = uuid4()
        self.spec = spec
        self._geocoder = geocoder
        self._tracker = tracker
        self.logger = get_logger(f"{__name__}.{self.id}")

    @classmethod
    def from_config(cls, file_path: str | Path) -> "GeocodePipeline":
        """Build a pipeline from a YAML or JSON configuration file."""
        path = Path(file_path)
        if path.suffix.lower() == ".json":
            return cls(ConfigLoader.from_json(path))
        return cls(ConfigLoader.from_yaml(path))

    def _build_stream(self, geocoder: Geocoder, stats: RunStatistics) -> GeocodeStream:
        stream_spec = self.spec.stream
        accessor = (
            field_accessor(stream_spec.address_field)
            if stream_spec.address_field
            else identity_accessor
        )
        return GeocodeStream(
            geocoder, stats, accessor=accessor, timeout=stream_spec.timeout
        )

    async def run_async(self) -> RunSummary:
        """
        Execute the run on the current event loop.

        Returns:
            RunSummary with counts and timing

        Raises:
            ConfigurationError: If no geocoder can be built from ``spec.geocoder``
            Exception: Any transform machinery failure (e.g. a missing
                address field) aborts the run after flushing written output
        """
        io_spec = self.spec.io
        config = sanitize_for_logging(self.spec.model_dump(mode="json"))
        self.logger.info(f"Starting geocoding run: {config}")

        loader = RecordLoader(io_spec.input_path, columns=io_spec.columns)
        writer = RecordWriter(io_spec.output_path, format=io_spec.output_format)
        stats = RunStatistics(total=loader.row_count, start_time=time.time())

        owns_geocoder = self._geocoder is None
        geocoder = self._geocoder or create_geocoder(self.spec.geocoder)
        tracker = self._tracker or create_progress_tracker(
            self.spec.progress_mode.value
        )
        reporter = ProgressReporter(tracker)
        stream = self._build_stream(geocoder, stats)

        try:
            with tracker:
                reporter.start("Geocoding", total_rows=stats.total)
                async for record in stream.process_stream(
                    loader.stream_records(), on_record=reporter.on_record
                ):
                    writer.append(record)
                reporter.finish()
        finally:
            writer.finalize()
            if owns_geocoder:
                await geocoder.aclose()

        duration = time.time() - stats.start_time
        summary = RunSummary(
            processed=reporter.processed,
            succeeded=reporter.succeeded,
            failed=reporter.failed,
            duration_seconds=duration,
            output_path=io_spec.output_path,
        )
        self.logger.info(
            f"Geocoding complete: {summary.processed} records in {duration:.1f}s, "
            f"{summary.failed} failed"
        )
        return summary

    def run(self) -> RunSummary:
        """Execute the run synchronously (owns its own event loop)."""
        return asyncio.run(self.run_async())

    def __repr__(self) -> str:
        return (
            f"GeocodePipeline(input={self.spec.io.input_path}, "
            f"output={self.spec.io.output_path})"
        )
