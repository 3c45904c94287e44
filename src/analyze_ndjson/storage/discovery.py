from dataclasses import dataclass
from pathlib import Path

ROUTE_DATA_FILENAME = "analyze.data"
MODULES_DATA_FILENAME = "modules.data"
_SKIPPED_ENTRIES = frozenset({ROUTE_DATA_FILENAME, MODULES_DATA_FILENAME, "routes.json"})


@dataclass(frozen=True)
class RouteFile:
    route: str
    path: Path


def discover_routes(data_dir: str | Path) -> list[RouteFile]:
    """Find every ``analyze.data`` below ``data_dir``.

    The route name is the directory's path relative to ``data_dir``, with
    ``/`` for ``data_dir`` itself.
    """
    routes: list[RouteFile] = []

    def _walk(directory: Path, route_prefix: str) -> None:
        route_file = directory / ROUTE_DATA_FILENAME
        if route_file.is_file():
            routes.append(RouteFile(route=route_prefix or "/", path=route_file))
        for entry in sorted(directory.iterdir()):
            if entry.name in _SKIPPED_ENTRIES:
                continue
            if entry.is_dir():
                _walk(entry, f"{route_prefix}/{entry.name}")

    _walk(Path(data_dir), "")
    return routes
