"""Unit tests for Pydantic models."""

import json

import pytest
from pydantic import ValidationError

from analyze_ndjson.models import ChunkPart, EdgeRef, ModuleEdgeRecord, RouteHeader, Source, SourceRecord


class TestHeaderEntities:
    def test_source_defaults_to_root(self) -> None:
        source = Source.model_validate({"path": "/a"})
        assert source.parent_source_index is None

    def test_unknown_fields_are_ignored(self) -> None:
        part = ChunkPart.model_validate(
            {"source_index": 1, "output_file_index": 0, "size": 3, "compressed_size": 2, "extra": True}
        )
        assert part.size == 3

    def test_chunk_part_requires_output_file_index(self) -> None:
        with pytest.raises(ValidationError):
            ChunkPart.model_validate({"source_index": 1})

    def test_edge_ref_rejects_negative_offset(self) -> None:
        with pytest.raises(ValidationError):
            EdgeRef(offset=-1)

    def test_route_header_defaults(self) -> None:
        header = RouteHeader.model_validate({})
        assert header.sources == []
        assert header.source_roots == []

    def test_entities_are_frozen(self) -> None:
        source = Source(path="/a")
        with pytest.raises(ValidationError):
            source.path = "/b"  # type: ignore[misc]


class TestRecords:
    def test_module_edge_serialises_from_alias(self) -> None:
        record = ModuleEdgeRecord(from_=3, to=4, kind="async")
        assert json.loads(record.to_json()) == {"from": 3, "to": 4, "kind": "async"}

    def test_module_edge_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            ModuleEdgeRecord(from_=0, to=1, kind="lazy")  # type: ignore[arg-type]

    def test_source_record_keeps_null_parent_but_drops_unset_fields(self) -> None:
        record = SourceRecord(route="/", id=0, path="/a", full_path="/a", parent_id=None, is_dir=True)
        data = json.loads(record.to_json())
        assert data["parent_id"] is None
        assert "size" not in data
        assert "json" not in data

    def test_source_record_json_flag_alias(self) -> None:
        record = SourceRecord.model_validate(
            {"route": "/", "id": 0, "path": "/a", "full_path": "/a", "parent_id": None, "is_dir": False, "json": True}
        )
        assert record.json_ is True
        assert json.loads(record.to_json())["json"] is True
