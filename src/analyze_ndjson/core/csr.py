"""Compressed-sparse-row edge tables.

A table at ``offset`` in the binary segment is laid out as::

    [N: u32][cumulative[0..N): u32][flat edge targets: u32...]

all big-endian. Node ``i`` owns ``flat[cumulative[i-1]:cumulative[i]]`` with
``cumulative[-1] == 0``. Indices outside ``[0, N)`` and absent tables both read
as an empty list.
"""

import struct
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from analyze_ndjson.core.errors import MalformedContainer
from analyze_ndjson.models import EdgeRef

BinaryView = bytes | bytearray | memoryview

_U32 = struct.Struct(">I")


def parse_edge_ref(value: Any) -> EdgeRef | None:
    """Turn a header field into an ``EdgeRef``; absent or empty means no table."""
    if not value or not isinstance(value, dict) or "offset" not in value:
        return None
    try:
        return EdgeRef.model_validate(value)
    except ValidationError as exc:
        raise MalformedContainer(f"Invalid table descriptor {value!r}") from exc


def _read_u32(binary: BinaryView, position: int) -> int:
    try:
        return int(_U32.unpack_from(binary, position)[0])
    except struct.error as exc:
        raise MalformedContainer(f"Table read at byte {position} runs past the binary segment") from exc


def table_size(binary: BinaryView, ref: EdgeRef | None) -> int:
    if ref is None:
        return 0
    return _read_u32(binary, ref.offset)


def total_edges(binary: BinaryView, ref: EdgeRef | None) -> int:
    """Return the length of the flat edge array, i.e. the last cumulative offset."""
    slot_count = table_size(binary, ref)
    if ref is None or slot_count == 0:
        return 0
    return _read_u32(binary, ref.offset + 4 * slot_count)


def _bounds(binary: BinaryView, ref: EdgeRef, index: int) -> tuple[int, int, int]:
    """Return (slot_count, start, count) of ``index``'s slice of the flat array."""
    slot_count = _read_u32(binary, ref.offset)
    if index < 0 or index >= slot_count:
        return slot_count, 0, 0
    offsets_start = ref.offset + 4
    prev = 0 if index == 0 else _read_u32(binary, offsets_start + (index - 1) * 4)
    end = _read_u32(binary, offsets_start + index * 4)
    if end < prev:
        raise MalformedContainer(f"Cumulative offsets decrease at slot {index} of table at {ref.offset}")
    return slot_count, prev, end - prev


def edge_count(binary: BinaryView, ref: EdgeRef | None, index: int) -> int:
    if ref is None:
        return 0
    return _bounds(binary, ref, index)[2]


def edges_at(binary: BinaryView, ref: EdgeRef | None, index: int) -> list[int]:
    if ref is None:
        return []
    slot_count, start, count = _bounds(binary, ref, index)
    if count == 0:
        return []
    data_start = ref.offset + 4 + 4 * slot_count
    position = data_start + start * 4
    try:
        return list(struct.unpack_from(f">{count}I", binary, position))
    except struct.error as exc:
        raise MalformedContainer(
            f"Edge list of slot {index} in table at {ref.offset} runs past the binary segment"
        ) from exc


def all_edges(binary: BinaryView, ref: EdgeRef | None) -> list[list[int]]:
    return [edges_at(binary, ref, i) for i in range(table_size(binary, ref))]


def encode_table(lists: Sequence[Sequence[int]]) -> bytes:
    """Encode adjacency lists into the CSR layout read by ``edges_at``."""
    cumulative: list[int] = []
    flat: list[int] = []
    for edges in lists:
        flat.extend(edges)
        cumulative.append(len(flat))
    return struct.pack(f">I{len(cumulative)}I{len(flat)}I", len(cumulative), *cumulative, *flat)
