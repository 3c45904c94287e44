"""Derive NDJSON records from decoded containers.

Every ``*_records`` function and every ``RouteAnalysis`` stream method is a
generator: records are produced lazily, once, in index order.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ValidationError

from analyze_ndjson.core.aggregate import (
    OutputFileAggregate,
    SourceAggregate,
    aggregate_sources,
    output_file_aggregates,
    source_chunk_parts,
)
from analyze_ndjson.core.container import Container
from analyze_ndjson.core.csr import edges_at
from analyze_ndjson.core.directories import directory_indices
from analyze_ndjson.core.errors import MalformedContainer
from analyze_ndjson.core.paths import build_full_paths
from analyze_ndjson.models import (
    ChunkPartRecord,
    ModuleEdgeRecord,
    ModuleRecord,
    ModulesHeader,
    OutputFileRecord,
    RouteHeader,
    RouteSummaryRecord,
    SourceRecord,
)

_HeaderT = TypeVar("_HeaderT", bound=BaseModel)

MODULE_EDGE_TABLES: tuple[tuple[str, Literal["sync", "async"]], ...] = (
    ("module_dependencies", "sync"),
    ("async_module_dependencies", "async"),
)


def parse_header(container: Container, model: type[_HeaderT]) -> _HeaderT:
    try:
        return model.model_validate(dict(container.header))
    except ValidationError as exc:
        raise MalformedContainer(f"Header does not describe a {model.__name__}: {exc}") from exc


# ---------------------------------------------------------------------------
# Module registry
# ---------------------------------------------------------------------------


def module_records(header: ModulesHeader) -> Iterator[ModuleRecord]:
    for index, module in enumerate(header.modules):
        yield ModuleRecord(id=index, ident=module.ident, path=module.path)


def module_edge_records(container: Container, module_count: int) -> Iterator[ModuleEdgeRecord]:
    for table_name, kind in MODULE_EDGE_TABLES:
        ref = container.edge_ref(table_name)
        if ref is None:
            continue
        for index in range(module_count):
            for target in edges_at(container.binary, ref, index):
                yield ModuleEdgeRecord(from_=index, to=target, kind=kind)


# ---------------------------------------------------------------------------
# Per-route tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RouteAnalysis:
    """Everything derived from one route container, computed once up front."""

    route: str
    header: RouteHeader
    full_paths: tuple[str, ...]
    source_aggregates: Mapping[int, SourceAggregate]
    directories: frozenset[int]
    output_file_totals: tuple[OutputFileAggregate, ...]

    @classmethod
    def from_container(cls, route: str, container: Container) -> "RouteAnalysis":
        header = parse_header(container, RouteHeader)
        binary = container.binary
        source_count = len(header.sources)

        associations = source_chunk_parts(binary, container.edge_ref("source_chunk_parts"), source_count)
        return cls(
            route=route,
            header=header,
            full_paths=tuple(build_full_paths(header.sources)),
            source_aggregates=aggregate_sources(associations, header.chunk_parts, header.output_files),
            directories=directory_indices(
                binary,
                container.edge_ref("source_children"),
                source_count,
                header.source_roots,
            ),
            output_file_totals=tuple(
                output_file_aggregates(
                    binary,
                    container.edge_ref("output_file_chunk_parts"),
                    len(header.output_files),
                    header.chunk_parts,
                )
            ),
        )

    def sources(self) -> Iterator[SourceRecord]:
        for index, source in enumerate(self.header.sources):
            fields: dict[str, Any] = {
                "route": self.route,
                "id": index,
                "path": source.path,
                "full_path": self.full_paths[index],
                "parent_id": source.parent_source_index,
                "is_dir": index in self.directories,
            }
            aggregate = self.source_aggregates.get(index)
            if aggregate is not None:
                fields["size"] = aggregate.size
                fields["compressed_size"] = aggregate.compressed_size
                fields.update(aggregate.flags.as_dict())
            yield SourceRecord.model_validate(fields)

    def chunk_parts(self) -> Iterator[ChunkPartRecord]:
        output_files = self.header.output_files
        for part in self.header.chunk_parts:
            if 0 <= part.output_file_index < len(output_files):
                filename = output_files[part.output_file_index].filename
            else:
                filename = f"<unknown:{part.output_file_index}>"
            yield ChunkPartRecord(
                route=self.route,
                source_id=part.source_index,
                output_file=filename,
                size=part.size,
                compressed_size=part.compressed_size,
            )

    def output_files(self) -> Iterator[OutputFileRecord]:
        for index, output_file in enumerate(self.header.output_files):
            totals = self.output_file_totals[index]
            yield OutputFileRecord(
                route=self.route,
                id=index,
                filename=output_file.filename,
                total_size=totals.total_size,
                total_compressed_size=totals.total_compressed_size,
                num_parts=totals.num_parts,
            )

    def summary(self) -> RouteSummaryRecord:
        return RouteSummaryRecord(
            route=self.route,
            total_size=sum(a.size for a in self.source_aggregates.values()),
            total_compressed_size=sum(a.compressed_size for a in self.source_aggregates.values()),
            num_sources=len(self.header.sources),
            num_output_files=len(self.header.output_files),
        )
