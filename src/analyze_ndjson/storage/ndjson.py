"""Append-buffered NDJSON files, one per record category."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

from analyze_ndjson.core.ports.sink import RECORD_CATEGORIES, RecordCategory
from analyze_ndjson.models import Record

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_THRESHOLD = 50_000


class NdjsonWriter:
    """Write one JSON object per line, appending to disk once the buffer passes a threshold.

    The file is truncated when the writer is created.
    """

    def __init__(self, path: str | Path, flush_threshold: int = DEFAULT_FLUSH_THRESHOLD) -> None:
        self._path = Path(path)
        self._flush_threshold = flush_threshold
        self._buffer: list[str] = []
        self._buffered_chars = 0
        self.count = 0
        self._path.write_text("", encoding="utf-8")

    def write(self, record: Record) -> None:
        line = record.to_json() + "\n"
        self._buffer.append(line)
        self._buffered_chars += len(line)
        self.count += 1
        if self._buffered_chars > self._flush_threshold:
            self._append()

    def flush(self) -> int:
        if self._buffer:
            self._append()
        return self.count

    def _append(self) -> None:
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write("".join(self._buffer))
        logger.debug("Appended %d chars to %s", self._buffered_chars, self._path)
        self._buffer.clear()
        self._buffered_chars = 0

    def __enter__(self) -> NdjsonWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.flush()


class NdjsonSink:
    """``RecordSink`` writing ``<category>.ndjson`` files into one directory."""

    def __init__(self, output_dir: str | Path, flush_threshold: int = DEFAULT_FLUSH_THRESHOLD) -> None:
        self._output_dir = Path(output_dir)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._writers = {
            category: NdjsonWriter(self._output_dir / f"{category}.ndjson", flush_threshold)
            for category in RECORD_CATEGORIES
        }

    def write_all(self, category: RecordCategory, records: Iterable[Record]) -> int:
        writer = self._writers[category]
        written = 0
        for record in records:
            writer.write(record)
            written += 1
        return written

    def close(self) -> dict[RecordCategory, int]:
        return {category: writer.flush() for category, writer in self._writers.items()}

    def __enter__(self) -> NdjsonSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
