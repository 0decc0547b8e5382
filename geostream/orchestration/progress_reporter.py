"""
Progress reporter for the geocode stage.

Feeds each emitted GeocodeRecord to the UI tracker and keeps running
success/failure counts for the run summary.
"""

from typing import TYPE_CHECKING, Any

from geostream.core.models import GeocodeRecord

if TYPE_CHECKING:
    from geostream.orchestration.progress_tracker import ProgressTracker


class ProgressReporter:
    """
    Reports geocoding progress to a tracker.

    Lifecycle:

    1. start() - Initialize progress bar with total records
    2. report() - Called once per emitted record
    3. finish() - Mark stage complete

    Example:
        reporter = ProgressReporter(tracker)
        reporter.start("Geocoding", total_rows=stats.total)

        async for record in stream.process_stream(
            records, on_record=reporter.on_record
        ):
            writer.append(record)

        reporter.finish()
    """

    def __init__(self, tracker: "ProgressTracker | None"):
        """
        Initialize progress reporter.

        Args:
            tracker: Progress tracker instance, or None to only count
        """
        self._tracker = tracker
        self._task_id: Any = None
        self._total_rows: int | None = None
        self._started = False
        self.succeeded = 0
        self.failed = 0

    def start(self, stage_name: str, total_rows: int | None) -> None:
        """
        Start progress tracking for a stage.

        Args:
            stage_name: Name of the stage (e.g., "Geocoding")
            total_rows: Expected number of records, None when unknown
        """
        self._total_rows = total_rows
        self.succeeded = 0
        self.failed = 0
        self._started = True

        if not self._tracker:
            return

        description = stage_name
        if total_rows is not None:
            description = f"{stage_name}: {total_rows:,} records"
        self._task_id = self._tracker.start_stage(description, total_rows=total_rows)

    def report(self, record: GeocodeRecord) -> None:
        """Count one emitted record and advance the tracker."""
        if record.succeeded:
            self.succeeded += 1
        else:
            self.failed += 1

        if not self._tracker or not self._task_id:
            return

        self._tracker.update(self._task_id, advance=1, failed=not record.succeeded)

    async def on_record(self, record: GeocodeRecord) -> None:
        """Async hook matching GeocodeStream's ``on_record`` callback."""
        self.report(record)

    def finish(self) -> None:
        """Mark stage as complete."""
        self._started = False

        if not self._tracker or not self._task_id:
            return

        self._tracker.finish(self._task_id)

    @property
    def processed(self) -> int:
        """Records reported so far."""
        return self.succeeded + self.failed

    @property
    def is_active(self) -> bool:
        """Check if progress tracking is active."""
        return self._started and self._tracker is not None

    @property
    def total_rows(self) -> int | None:
        """Get total records being tracked."""
        return self._total_rows

    def __repr__(self) -> str:
        return (
            f"ProgressReporter(active={self.is_active}, total_rows={self._total_rows}, "
            f"failed={self.failed})"
        )
