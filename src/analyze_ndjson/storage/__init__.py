from analyze_ndjson.storage.discovery import (
    MODULES_DATA_FILENAME,
    ROUTE_DATA_FILENAME,
    RouteFile,
    discover_routes,
)
from analyze_ndjson.storage.ndjson import DEFAULT_FLUSH_THRESHOLD, NdjsonSink, NdjsonWriter

__all__ = [
    "DEFAULT_FLUSH_THRESHOLD",
    "MODULES_DATA_FILENAME",
    "ROUTE_DATA_FILENAME",
    "NdjsonSink",
    "NdjsonWriter",
    "RouteFile",
    "discover_routes",
]
