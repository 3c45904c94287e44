from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, fields
from typing import TypeVar

from analyze_ndjson.core.csr import BinaryView, edges_at
from analyze_ndjson.models import ChunkPart, EdgeRef, OutputFile

_T = TypeVar("_T")

# First match wins; anything unmatched is a server artifact.
_ENVIRONMENT_PREFIXES = {
    "[client-fs]/": "client",
    "[project]/": "traced",
}
_DEFAULT_ENVIRONMENT = "server"

# First match wins; anything unmatched is an asset.
_TYPE_EXTENSIONS = {
    ".js": "js",
    ".css": "css",
    ".json": "json",
}
_DEFAULT_TYPE = "asset"


@dataclass(frozen=True)
class SourceFlags:
    client: bool = False
    server: bool = False
    traced: bool = False
    js: bool = False
    css: bool = False
    json: bool = False
    asset: bool = False

    def __or__(self, other: "SourceFlags") -> "SourceFlags":
        return SourceFlags(**{f.name: getattr(self, f.name) or getattr(other, f.name) for f in fields(self)})

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SourceAggregate:
    size: int
    compressed_size: int
    flags: SourceFlags


@dataclass(frozen=True)
class OutputFileAggregate:
    total_size: int = 0
    total_compressed_size: int = 0
    num_parts: int = 0


def classify_output_file(filename: str) -> SourceFlags:
    """Flag an output file by environment (name prefix) and type (extension)."""
    environment = next(
        (env for prefix, env in _ENVIRONMENT_PREFIXES.items() if filename.startswith(prefix)),
        _DEFAULT_ENVIRONMENT,
    )
    file_type = next(
        (kind for ext, kind in _TYPE_EXTENSIONS.items() if filename.endswith(ext)),
        _DEFAULT_TYPE,
    )
    return SourceFlags(**{environment: True, file_type: True})


def _lookup(items: Sequence[_T], index: int | None) -> _T | None:
    if index is None or not 0 <= index < len(items):
        return None
    return items[index]


def source_chunk_parts(binary: BinaryView, ref: EdgeRef | None, source_count: int) -> dict[int, list[int]]:
    """Map each source index to its chunk-part indices; sources without parts are omitted."""
    if ref is None:
        return {}
    associations: dict[int, list[int]] = {}
    for index in range(source_count):
        parts = edges_at(binary, ref, index)
        if parts:
            associations[index] = parts
    return associations


def aggregate_source(
    part_indices: Iterable[int],
    chunk_parts: Sequence[ChunkPart],
    output_files: Sequence[OutputFile],
) -> SourceAggregate:
    size = 0
    compressed_size = 0
    flags = SourceFlags()
    for part_index in part_indices:
        part = _lookup(chunk_parts, part_index)
        if part is None:
            continue
        size += part.size
        compressed_size += part.compressed_size
        output_file = _lookup(output_files, part.output_file_index)
        if output_file is not None:
            flags |= classify_output_file(output_file.filename)
    return SourceAggregate(size=size, compressed_size=compressed_size, flags=flags)


def aggregate_sources(
    associations: Mapping[int, Sequence[int]],
    chunk_parts: Sequence[ChunkPart],
    output_files: Sequence[OutputFile],
) -> dict[int, SourceAggregate]:
    return {
        index: aggregate_source(parts, chunk_parts, output_files) for index, parts in associations.items()
    }


def aggregate_output_file(part_indices: Iterable[int], chunk_parts: Sequence[ChunkPart]) -> OutputFileAggregate:
    total_size = 0
    total_compressed_size = 0
    num_parts = 0
    for part_index in part_indices:
        part = _lookup(chunk_parts, part_index)
        if part is None:
            continue
        total_size += part.size
        total_compressed_size += part.compressed_size
        num_parts += 1
    return OutputFileAggregate(
        total_size=total_size,
        total_compressed_size=total_compressed_size,
        num_parts=num_parts,
    )


def output_file_aggregates(
    binary: BinaryView,
    ref: EdgeRef | None,
    output_file_count: int,
    chunk_parts: Sequence[ChunkPart],
) -> list[OutputFileAggregate]:
    if ref is None:
        return [OutputFileAggregate() for _ in range(output_file_count)]
    return [aggregate_output_file(edges_at(binary, ref, i), chunk_parts) for i in range(output_file_count)]
