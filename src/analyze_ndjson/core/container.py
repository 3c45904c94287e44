import json
import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from analyze_ndjson.core.csr import encode_table, parse_edge_ref
from analyze_ndjson.core.errors import MalformedContainer
from analyze_ndjson.models import EdgeRef

_LENGTH_PREFIX = struct.Struct(">I")


@dataclass(frozen=True)
class Container:
    """A decoded container: the JSON header and a view of the binary segment.

    Table descriptor offsets in ``header`` are relative to ``binary``. The header
    mapping is read-only.
    """

    header: Mapping[str, Any]
    binary: memoryview

    def edge_ref(self, name: str) -> EdgeRef | None:
        return parse_edge_ref(self.header.get(name))


def read_container(buffer: bytes | bytearray | memoryview) -> Container:
    view = memoryview(buffer)
    if len(view) < _LENGTH_PREFIX.size:
        raise MalformedContainer(f"Container is {len(view)} bytes, too short for a length prefix")

    (header_length,) = _LENGTH_PREFIX.unpack_from(view, 0)
    binary_offset = _LENGTH_PREFIX.size + header_length
    if binary_offset > len(view):
        raise MalformedContainer(f"Header length {header_length} exceeds container size {len(view)}")

    try:
        header = json.loads(view[_LENGTH_PREFIX.size : binary_offset].tobytes().decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedContainer("Header is not valid UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise MalformedContainer(f"Header is not valid JSON: {exc.msg}") from exc

    if not isinstance(header, dict):
        raise MalformedContainer(f"Header must be a JSON object, got {type(header).__name__}")

    return Container(header=MappingProxyType(header), binary=view[binary_offset:])


def load_container(path: str | Path) -> Container:
    return read_container(Path(path).read_bytes())


def build_container(header: Mapping[str, Any], tables: Mapping[str, Sequence[Sequence[int]]]) -> bytes:
    """Lay out ``tables`` after ``header`` and point each named descriptor at its table."""
    full_header = dict(header)
    segments: list[bytes] = []
    offset = 0
    for name, lists in tables.items():
        encoded = encode_table(lists)
        full_header[name] = {"offset": offset}
        segments.append(encoded)
        offset += len(encoded)

    header_bytes = json.dumps(full_header).encode("utf-8")
    return _LENGTH_PREFIX.pack(len(header_bytes)) + header_bytes + b"".join(segments)
