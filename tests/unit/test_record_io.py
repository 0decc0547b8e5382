"""Unit tests for RecordLoader and RecordWriter."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import polars as pl
import pytest

from geostream.adapters.record_loader import RecordLoader
from geostream.adapters.record_writer import RecordWriter, flatten_record
from geostream.core.models import GeocodeRecord, ProgressSnapshot


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Create a sample CSV file of addresses."""
    csv_path = tmp_path / "addresses.csv"
    pl.DataFrame(
        {
            "id": list(range(25)),
            "address": [f"{i} Main St" for i in range(25)],
        }
    ).write_csv(csv_path)
    return csv_path


@pytest.fixture
def sample_txt(tmp_path: Path) -> Path:
    """Create a text file with one address per line."""
    txt_path = tmp_path / "addresses.txt"
    txt_path.write_text("1 Main St\n\n  2 Main St  \n3 Main St\n", encoding="utf-8")
    return txt_path


@pytest.fixture
def success_record() -> GeocodeRecord:
    candidate = {
        "formatted_address": "1 Main St, Springfield",
        "geometry": {"location": {"lat": 1.5, "lng": 2.5}},
    }
    return GeocodeRecord(
        address="1 Main St",
        input={"id": 1, "address": "1 Main St"},
        progress=ProgressSnapshot(current=1, total=2, pending=1, percent=50.0),
        location=candidate["geometry"]["location"],
        result=candidate,
        results=[candidate],
    )


@pytest.fixture
def failure_record() -> GeocodeRecord:
    return GeocodeRecord(
        address="nowhere",
        input={"id": 2, "address": "nowhere"},
        progress=ProgressSnapshot(current=2, total=2, pending=0, percent=100.0),
        error="ZERO_RESULTS",
    )


class TestRecordLoader:
    """Tests for RecordLoader."""

    def test_csv_rows_as_dicts(self, sample_csv: Path):
        loader = RecordLoader(sample_csv, chunk_size=10)

        records = list(loader.iter_records())

        assert len(records) == 25
        assert records[0] == {"id": 0, "address": "0 Main St"}
        assert records[-1]["address"] == "24 Main St"

    def test_row_count(self, sample_csv: Path):
        assert RecordLoader(sample_csv).row_count == 25

    def test_column_selection(self, sample_csv: Path):
        loader = RecordLoader(sample_csv, columns=["address"])

        first = next(loader.iter_records())

        assert first == {"address": "0 Main St"}

    def test_chunk_size_multiple_of_rows(self, tmp_path: Path):
        path = tmp_path / "even.csv"
        pl.DataFrame({"address": [str(i) for i in range(20)]}).write_csv(path)

        records = list(RecordLoader(path, chunk_size=10).iter_records())

        assert len(records) == 20

    def test_file_scanned_once(self, sample_csv: Path):
        """All chunks are sliced from a single collect."""
        loader = RecordLoader(sample_csv, chunk_size=4)
        loader._lazy_frame = MagicMock(wraps=loader._lazy_frame)

        records = list(loader.iter_records())

        assert len(records) == 25
        assert loader._lazy_frame.collect.call_count == 1

    def test_text_file(self, sample_txt: Path):
        loader = RecordLoader(sample_txt)

        assert list(loader.iter_records()) == ["1 Main St", "2 Main St", "3 Main St"]
        assert loader.row_count == 3

    def test_unsupported_format(self, tmp_path: Path):
        path = tmp_path / "addresses.xml"
        path.write_text("<a/>")

        with pytest.raises(ValueError, match="Unsupported file format"):
            RecordLoader(path)

    def test_invalid_chunk_size(self, sample_csv: Path):
        with pytest.raises(ValueError, match="chunk_size must be at least 1"):
            RecordLoader(sample_csv, chunk_size=0)

    @pytest.mark.asyncio
    async def test_stream_records(self, sample_txt: Path):
        loader = RecordLoader(sample_txt)

        records = [record async for record in loader.stream_records()]

        assert records == ["1 Main St", "2 Main St", "3 Main St"]


class TestRecordWriter:
    """Tests for RecordWriter."""

    def test_detect_format(self, tmp_path: Path):
        assert RecordWriter(tmp_path / "out.csv").format == "csv"
        assert RecordWriter(tmp_path / "out.jsonl").format == "ndjson"
        assert RecordWriter(tmp_path / "out.data").format == "ndjson"

    def test_unsupported_format(self, tmp_path: Path):
        with pytest.raises(ValueError, match="Unsupported format"):
            RecordWriter(tmp_path / "out.parquet", format="parquet")

    def test_ndjson(self, tmp_path: Path, success_record, failure_record):
        path = tmp_path / "out.ndjson"
        writer = RecordWriter(path)

        writer.append(success_record)
        writer.append(failure_record)
        stats = writer.finalize()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert len(lines) == 2
        assert lines[0]["location"] == {"lat": 1.5, "lng": 2.5}
        assert lines[0]["percent"] == 50.0
        assert lines[1]["error"] == "ZERO_RESULTS"
        assert "results" not in lines[1]
        assert stats["records_written"] == 2
        assert stats["errors_written"] == 1

    def test_csv(self, tmp_path: Path, success_record, failure_record):
        path = tmp_path / "out.csv"
        writer = RecordWriter(path)

        writer.append(success_record)
        writer.append(failure_record)
        writer.finalize()

        result = pl.read_csv(path)
        assert result.columns == [
            "address",
            "error",
            "lat",
            "lng",
            "formatted_address",
            "current",
        ]
        assert len(result) == 2
        assert result["lat"][0] == 1.5
        assert result["error"][1] == "ZERO_RESULTS"

    def test_finalize_empty_run_creates_file(self, tmp_path: Path):
        path = tmp_path / "out.ndjson"

        stats = RecordWriter(path).finalize()

        assert path.exists()
        assert stats["records_written"] == 0

    def test_flatten_failure(self, failure_record):
        flat = flatten_record(failure_record)

        assert flat["lat"] is None
        assert flat["formatted_address"] is None
        assert flat["current"] == 2

    def test_repr(self, tmp_path: Path):
        writer = RecordWriter(tmp_path / "out.csv")

        assert "format='csv'" in repr(writer)
