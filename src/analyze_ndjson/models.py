from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Header entities
# ---------------------------------------------------------------------------


class _HeaderEntity(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class EdgeRef(_HeaderEntity):
    """Byte offset of a CSR table inside a container's binary segment."""

    offset: int = Field(ge=0)


class Module(_HeaderEntity):
    ident: str = ""
    path: str = ""


class Source(_HeaderEntity):
    path: str = ""
    parent_source_index: int | None = None


class ChunkPart(_HeaderEntity):
    source_index: int | None = None
    output_file_index: int
    size: int = 0
    compressed_size: int = 0


class OutputFile(_HeaderEntity):
    filename: str


class ModulesHeader(_HeaderEntity):
    modules: list[Module] = Field(default_factory=list)


class RouteHeader(_HeaderEntity):
    sources: list[Source] = Field(default_factory=list)
    chunk_parts: list[ChunkPart] = Field(default_factory=list)
    output_files: list[OutputFile] = Field(default_factory=list)
    source_roots: list[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Output records (one JSON object per NDJSON line)
# ---------------------------------------------------------------------------


class Record(BaseModel):
    """Base for derived records.

    Only explicitly set fields are serialised, so optional fields a record
    was built without are absent from the output rather than ``null``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_unset=True)


class ModuleRecord(Record):
    id: int
    ident: str
    path: str


class ModuleEdgeRecord(Record):
    from_: int = Field(alias="from")
    to: int
    kind: Literal["sync", "async"]


class SourceRecord(Record):
    route: str
    id: int
    path: str
    full_path: str
    parent_id: int | None
    is_dir: bool
    size: int | None = None
    compressed_size: int | None = None
    client: bool | None = None
    server: bool | None = None
    traced: bool | None = None
    js: bool | None = None
    css: bool | None = None
    json_: bool | None = Field(default=None, alias="json")
    asset: bool | None = None


class ChunkPartRecord(Record):
    route: str
    source_id: int | None
    output_file: str
    size: int
    compressed_size: int


class OutputFileRecord(Record):
    route: str
    id: int
    filename: str
    total_size: int
    total_compressed_size: int
    num_parts: int


class RouteSummaryRecord(Record):
    route: str
    total_size: int
    total_compressed_size: int
    num_sources: int
    num_output_files: int
