"""
Progress tracking abstraction with pluggable implementations.

Provides a generic interface for progress tracking that can be implemented
using different libraries (rich, logging) without coupling the geocoding
pipeline to a specific display.
"""

import sys
from abc import ABC, abstractmethod
from typing import Any


class ProgressTracker(ABC):
    """
    Abstract interface for progress tracking.

    Example:
        ```python
        tracker = create_progress_tracker(mode="auto")

        with tracker:
            task_id = tracker.start_stage("Geocoding", total_rows=1000)

            async for record in stream.process_stream(records):
                tracker.update(task_id, advance=1, failed=not record.succeeded)

            tracker.finish(task_id)
        ```
    """

    @abstractmethod
    def start_stage(self, stage_name: str, total_rows: int | None) -> str:
        """
        Start tracking a new stage.

        Args:
            stage_name: Human-readable stage name
            total_rows: Total number of records, None when unknown

        Returns:
            Task ID for updating progress
        """
        pass

    @abstractmethod
    def update(self, task_id: str, advance: int = 1, failed: bool = False) -> None:
        """
        Update progress for a task.

        Args:
            task_id: Task identifier from start_stage()
            advance: Number of records processed
            failed: Whether the processed records failed to geocode
        """
        pass

    @abstractmethod
    def finish(self, task_id: str) -> None:
        """Mark task as complete."""
        pass

    @abstractmethod
    def __enter__(self) -> "ProgressTracker":
        pass

    @abstractmethod
    def __exit__(self, *args: Any) -> None:
        pass


class RichProgressTracker(ProgressTracker):
    """
    Progress tracker using rich.progress for terminal UI.

    Shows completed/total, percentage, ETA, elapsed time and the running
    count of failed lookups.
    """

    def __init__(self):
        """Initialize rich progress tracker."""
        from rich.progress import (
            BarColumn,
            MofNCompleteColumn,
            Progress,
            SpinnerColumn,
            TaskProgressColumn,
            TextColumn,
            TimeElapsedColumn,
            TimeRemainingColumn,
        )

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            TimeElapsedColumn(),
            TextColumn("[bold red]{task.fields[failed]} failed"),
            expand=True,
            auto_refresh=True,
            refresh_per_second=10,
        )
        self.tasks: dict[str, Any] = {}

    def start_stage(self, stage_name: str, total_rows: int | None) -> str:
        """Start tracking a stage with rich progress bar."""
        task_id = self.progress.add_task(
            f"🌍 {stage_name}",
            total=total_rows,
            failed=0,
        )
        self.tasks[stage_name] = task_id
        return stage_name

    def update(self, task_id: str, advance: int = 1, failed: bool = False) -> None:
        """Advance the bar and bump the failure count if needed."""
        if task_id not in self.tasks:
            return

        rich_task_id = self.tasks[task_id]
        update_kwargs: dict[str, Any] = {"advance": advance}
        if failed:
            task = self.progress.tasks[rich_task_id]
            update_kwargs["failed"] = task.fields.get("failed", 0) + advance

        self.progress.update(rich_task_id, **update_kwargs)

    def finish(self, task_id: str) -> None:
        """Mark task as complete."""
        if task_id in self.tasks:
            rich_task_id = self.tasks[task_id]
            task = self.progress.tasks[rich_task_id]
            self.progress.update(rich_task_id, total=task.completed)

    def __enter__(self) -> "RichProgressTracker":
        """Start progress display."""
        self.progress.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop progress display."""
        self.progress.stop()


class LoggingProgressTracker(ProgressTracker):
    """
    Fallback progress tracker using structured logging.

    Used when not running in a TTY (CI, logs to file) or when explicitly
    requested. Logs at 25%, 50%, 75% and 100% when the total is known, and
    every ``log_every`` records otherwise.
    """

    def __init__(self, log_every: int = 100):
        """Initialize logging tracker."""
        from geostream.utils import get_logger

        self.logger = get_logger(__name__)
        self.log_every = log_every
        self.tasks: dict[str, dict[str, Any]] = {}

    def start_stage(self, stage_name: str, total_rows: int | None) -> str:
        """Start tracking via logging."""
        self.tasks[stage_name] = {
            "total": total_rows,
            "current": 0,
            "failed": 0,
            "last_log_percent": 0,
        }
        if total_rows is None:
            self.logger.info(f"Starting {stage_name}")
        else:
            self.logger.info(f"Starting {stage_name} ({total_rows} records)")
        return stage_name

    def update(self, task_id: str, advance: int = 1, failed: bool = False) -> None:
        """Update progress via periodic logging."""
        if task_id not in self.tasks:
            return

        task = self.tasks[task_id]
        task["current"] += advance
        if failed:
            task["failed"] += advance

        if not task["total"]:
            if task["current"] % self.log_every == 0:
                self.logger.info(
                    f"{task_id}: {task['current']} records | "
                    f"Failed: {task['failed']}"
                )
            return

        percent = (task["current"] / task["total"]) * 100
        for milestone in (25, 50, 75, 100):
            if percent >= milestone and task["last_log_percent"] < milestone:
                self.logger.info(
                    f"{task_id}: {task['current']}/{task['total']} "
                    f"({percent:.1f}%) | Failed: {task['failed']}"
                )
                task["last_log_percent"] = milestone
                break

    def finish(self, task_id: str) -> None:
        """Log completion."""
        if task_id in self.tasks:
            task = self.tasks[task_id]
            self.logger.info(
                f"Completed {task_id}: {task['current']} records, "
                f"{task['failed']} failed"
            )

    def __enter__(self) -> "LoggingProgressTracker":
        return self

    def __exit__(self, *args: Any) -> None:
        pass


class NoOpProgressTracker(ProgressTracker):
    """No-op tracker that does nothing (for disabling progress)."""

    def start_stage(self, stage_name: str, total_rows: int | None) -> str:
        return stage_name

    def update(self, task_id: str, advance: int = 1, failed: bool = False) -> None:
        pass

    def finish(self, task_id: str) -> None:
        pass

    def __enter__(self) -> "NoOpProgressTracker":
        return self

    def __exit__(self, *args: Any) -> None:
        pass


def create_progress_tracker(mode: str = "auto") -> ProgressTracker:
    """
    Factory function to create appropriate progress tracker.

    Args:
        mode: Progress tracker mode
            - "auto": rich if stdout is a TTY, else logging
            - "rich": Use rich.progress
            - "logging": Use structured logging
            - "none": Disable progress tracking

    Returns:
        ProgressTracker implementation
    """
    if mode == "none":
        return NoOpProgressTracker()

    if mode == "auto":
        if sys.stdout.isatty():
            return RichProgressTracker()
        return LoggingProgressTracker()

    elif mode == "rich":
        return RichProgressTracker()

    elif mode == "logging":
        return LoggingProgressTracker()

    else:
        raise ValueError(
            f"Invalid progress mode: {mode}. Use 'auto', 'rich', 'logging', or 'none'"
        )
