from collections.abc import Sequence
from typing import Final

from analyze_ndjson.core.errors import CyclicPathReference
from analyze_ndjson.models import Source


class _InProgress:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<in progress>"


_IN_PROGRESS: Final = _InProgress()


def build_full_paths(sources: Sequence[Source]) -> list[str]:
    """Resolve every source's full path by concatenating its ancestors' fragments.

    Fragments are joined as-is; they already carry their leading separator.
    A parent index with no matching source contributes an empty prefix.
    """
    memo: list[str | _InProgress | None] = [None] * len(sources)
    for index in range(len(sources)):
        if memo[index] is None:
            _resolve(index, sources, memo)
    return [slot for slot in memo if isinstance(slot, str)]


def _resolve(start: int, sources: Sequence[Source], memo: list[str | _InProgress | None]) -> None:
    # Walk up until a resolved ancestor or a root, then fill the chain top-down.
    chain: list[int] = []
    prefix = ""
    index: int | None = start
    while index is not None:
        slot = memo[index]
        if isinstance(slot, str):
            prefix = slot
            break
        if slot is _IN_PROGRESS:
            raise CyclicPathReference(index)
        memo[index] = _IN_PROGRESS
        chain.append(index)
        parent = sources[index].parent_source_index
        index = parent if parent is not None and 0 <= parent < len(sources) else None

    for member in reversed(chain):
        prefix += sources[member].path
        memo[member] = prefix
