"""Shared fixtures and helpers for tests."""

from pathlib import Path
from typing import Any

import pytest

from analyze_ndjson.core.container import Container, build_container, read_container

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Sample containers
# ---------------------------------------------------------------------------

#   0 [project]                 dir
#   1   /src                    dir
#   2     /page.tsx             -> parts 0 (client js), 1 (server js)
#   3     /styles.css           -> part 2 (client css)
#   4     /unused.ts            no parts
ROUTE_HEADER: dict[str, Any] = {
    "sources": [
        {"path": "[project]", "parent_source_index": None},
        {"path": "/src", "parent_source_index": 0},
        {"path": "/page.tsx", "parent_source_index": 1},
        {"path": "/styles.css", "parent_source_index": 1},
        {"path": "/unused.ts", "parent_source_index": 1},
    ],
    "output_files": [
        {"filename": "[client-fs]/static/chunks/page.js"},
        {"filename": "[client-fs]/static/css/app.css"},
        {"filename": "server/app/page.js"},
    ],
    "chunk_parts": [
        {"source_index": 2, "output_file_index": 0, "size": 100, "compressed_size": 40},
        {"source_index": 2, "output_file_index": 2, "size": 50, "compressed_size": 20},
        {"source_index": 3, "output_file_index": 1, "size": 30, "compressed_size": 10},
    ],
    "source_roots": [0],
}

ROUTE_TABLES: dict[str, list[list[int]]] = {
    "source_chunk_parts": [[], [], [0, 1], [2], []],
    "source_children": [[1], [2, 3, 4], [], [], []],
    "output_file_chunk_parts": [[0], [2], [1]],
}

MODULES_HEADER: dict[str, Any] = {
    "modules": [
        {"ident": "[project]/src/page.tsx", "path": "src/page.tsx"},
        {"ident": "[project]/src/lib.ts", "path": "src/lib.ts"},
        {"ident": "[project]/src/lazy.ts", "path": "src/lazy.ts"},
    ],
}

MODULES_TABLES: dict[str, list[list[int]]] = {
    "module_dependencies": [[1], [], []],
    "async_module_dependencies": [[2], [], []],
}


@pytest.fixture
def route_bytes() -> bytes:
    return build_container(ROUTE_HEADER, ROUTE_TABLES)


@pytest.fixture
def route_container(route_bytes: bytes) -> Container:
    return read_container(route_bytes)


@pytest.fixture
def modules_bytes() -> bytes:
    return build_container(MODULES_HEADER, MODULES_TABLES)


@pytest.fixture
def data_dir(tmp_path: Path, modules_bytes: bytes, route_bytes: bytes) -> Path:
    """An analyzer data directory with a root route and one nested route."""
    root = tmp_path / "data"
    nested = root / "app" / "dashboard"
    nested.mkdir(parents=True)
    (root / "modules.data").write_bytes(modules_bytes)
    (root / "routes.json").write_text("[]", encoding="utf-8")
    (root / "analyze.data").write_bytes(route_bytes)
    (nested / "analyze.data").write_bytes(route_bytes)
    return root
