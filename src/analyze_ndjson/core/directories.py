from collections.abc import Iterable

from analyze_ndjson.core.csr import BinaryView, edge_count
from analyze_ndjson.models import EdgeRef


def directory_indices(
    binary: BinaryView,
    children_ref: EdgeRef | None,
    source_count: int,
    roots: Iterable[int] = (),
) -> frozenset[int]:
    """Return the indices of sources that have at least one child.

    Roots are judged by the same rule as every other source; listing a
    root never marks it a directory on its own.
    """
    if children_ref is None:
        return frozenset()
    directories = {index for index in range(source_count) if edge_count(binary, children_ref, index) > 0}
    for root in roots:
        if root not in directories and edge_count(binary, children_ref, root) > 0:
            directories.add(root)
    return frozenset(directories)
