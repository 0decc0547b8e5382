"""
Streaming address record loader.

Reads address records from CSV, Parquet or NDJSON through Polars lazy
evaluation, or from plain text files holding one address per line. Records
are yielded one at a time so the geocode stage can pull them on demand.
"""

import asyncio
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import polars as pl

from geostream.utils import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = (".txt", ".lst")


class RecordLoader:
    """
    Memory-efficient loader yielding one address record at a time.

    Tabular files yield a dict per row; text files yield the stripped line
    (blank lines skipped), suitable for the identity accessor.

    Example:
        loader = RecordLoader("addresses.csv", columns=["id", "address"])

        async for record in loader.stream_records():
            ...
    """

    def __init__(
        self,
        path: str | Path,
        columns: list[str] | None = None,
        chunk_size: int = 1000,
        **read_options: Any,
    ):
        """
        Initialize record loader.

        Args:
            path: Path to records file (CSV, Parquet, NDJSON, TXT)
            columns: Optional list of columns to load (tabular files only)
            chunk_size: Rows materialized per read
            **read_options: Additional options passed to the Polars scanner
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")

        self.path = Path(path)
        self.columns = columns
        self.chunk_size = chunk_size
        self.read_options = read_options

        self._is_text = self.path.suffix.lower() in TEXT_SUFFIXES
        self._lazy_frame = None if self._is_text else self._create_lazy_frame()
        self._row_count: int | None = None

    def _create_lazy_frame(self) -> pl.LazyFrame:
        """Create lazy frame based on file format."""
        suffix = self.path.suffix.lower()

        if suffix == ".csv":
            lf = pl.scan_csv(self.path, **self.read_options)
        elif suffix == ".parquet":
            lf = pl.scan_parquet(self.path, **self.read_options)
        elif suffix in (".json", ".ndjson", ".jsonl"):
            lf = pl.scan_ndjson(self.path, **self.read_options)
        else:
            raise ValueError(f"Unsupported file format: {suffix}")

        if self.columns:
            lf = lf.select(self.columns)

        return lf

    @property
    def row_count(self) -> int:
        """
        Get total record count (computed lazily).

        Note: This triggers a scan of the file on first access.
        """
        if self._row_count is None:
            if self._is_text:
                self._row_count = sum(1 for _ in self._iter_lines())
            else:
                self._row_count = self._lazy_frame.select(pl.len()).collect().item()
        return self._row_count

    def _iter_lines(self) -> Iterator[str]:
        with open(self.path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield line

    def iter_records(self) -> Iterator[Any]:
        """
        Iterate over records synchronously.

        Yields:
            Row dicts for tabular files, address strings for text files
        """
        if self._is_text:
            yield from self._iter_lines()
            return

        df = self._lazy_frame.collect()
        for i, chunk in enumerate(df.iter_slices(self.chunk_size)):
            offset = i * self.chunk_size
            logger.debug(f"Loaded rows {offset} to {offset + len(chunk)}")
            yield from chunk.iter_rows(named=True)

    async def stream_records(self) -> AsyncIterator[Any]:
        """
        Iterate over records asynchronously.

        Yields control back to the event loop between records.
        """
        for record in self.iter_records():
            yield record
            await asyncio.sleep(0)

    def __repr__(self) -> str:
        return f"RecordLoader(path={self.path}, columns={self.columns})"
