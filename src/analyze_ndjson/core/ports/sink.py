from collections.abc import Iterable
from typing import Literal, Protocol

from analyze_ndjson.models import Record

RecordCategory = Literal[
    "modules",
    "module_edges",
    "sources",
    "chunk_parts",
    "output_files",
    "routes",
]

RECORD_CATEGORIES: tuple[RecordCategory, ...] = (
    "modules",
    "module_edges",
    "sources",
    "chunk_parts",
    "output_files",
    "routes",
)


class RecordSink(Protocol):
    def write_all(self, category: RecordCategory, records: Iterable[Record]) -> int: ...

    def close(self) -> dict[RecordCategory, int]: ...
