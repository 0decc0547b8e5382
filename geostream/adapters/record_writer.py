"""
Streaming writer for geocoded records.

Appends each record to the output file as soon as it is produced, so a run
holds no more than one record in memory and partial output survives an
aborted run.
"""

import json
from pathlib import Path
from typing import Any

import polars as pl

from geostream.core.models import GeocodeRecord
from geostream.utils import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = ["address", "error", "lat", "lng", "formatted_address", "current"]


def flatten_record(record: GeocodeRecord) -> dict[str, Any]:
    """Reduce a record to the flat columns written to CSV."""
    return {
        "address": record.address,
        "error": record.error,
        "lat": record.location.get("lat"),
        "lng": record.location.get("lng"),
        "formatted_address": record.result.get("formatted_address"),
        "current": record.current,
    }


class RecordWriter:
    """
    Append geocoded records incrementally to an output file.

    Formats:
        - NDJSON: Full record (``GeocodeRecord.to_dict()``), one per line
        - CSV: Flattened columns (address, error, lat, lng, formatted_address,
          current)

    Example:
        writer = RecordWriter("geocoded.ndjson")

        async for record in stream.process_stream(records):
            writer.append(record)

        writer.finalize()
    """

    def __init__(self, path: str | Path, format: str | None = None):
        """
        Initialize record writer.

        Args:
            path: Output file path
            format: Output format ("ndjson", "csv"). Auto-detected if None.
        """
        self.path = Path(path)
        self.format = format or self._detect_format()
        if self.format not in ("ndjson", "csv"):
            raise ValueError(f"Unsupported format: {self.format}")

        self._initialized = False
        self._records_written = 0
        self._errors_written = 0

    def _detect_format(self) -> str:
        """Detect format from file extension."""
        suffix = self.path.suffix.lower()
        format_map = {
            ".csv": "csv",
            ".json": "ndjson",
            ".ndjson": "ndjson",
            ".jsonl": "ndjson",
        }
        return format_map.get(suffix, "ndjson")

    def append(self, record: GeocodeRecord) -> None:
        """Append one record to the output file."""
        mode = "w" if not self._initialized else "a"

        if self.format == "csv":
            # First record includes header, subsequent records don't
            frame = pl.DataFrame([flatten_record(record)]).select(CSV_COLUMNS)
            text = frame.write_csv(include_header=not self._initialized)
        else:
            text = json.dumps(record.to_dict(), default=str) + "\n"

        with open(self.path, mode, encoding="utf-8") as f:
            f.write(text)

        self._initialized = True
        self._records_written += 1
        if not record.succeeded:
            self._errors_written += 1

    def finalize(self) -> dict[str, Any]:
        """
        Finalize the output file.

        Returns:
            Dict with write statistics
        """
        if not self._initialized:
            # Empty run still produces an (empty) output file
            self.path.write_text("", encoding="utf-8")
            self._initialized = True

        logger.info(
            f"Finalized output: {self._records_written} records "
            f"({self._errors_written} errors) -> {self.path}"
        )

        return {
            "path": str(self.path),
            "format": self.format,
            "records_written": self._records_written,
            "errors_written": self._errors_written,
        }

    @property
    def records_written(self) -> int:
        """Total records written so far."""
        return self._records_written

    def __repr__(self) -> str:
        return (
            f"RecordWriter(path={self.path}, format={self.format!r}, "
            f"records={self._records_written})"
        )
