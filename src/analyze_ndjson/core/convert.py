import logging
from dataclasses import dataclass, field
from pathlib import Path

from analyze_ndjson.core.container import Container, load_container
from analyze_ndjson.core.errors import CyclicPathReference, MalformedContainer
from analyze_ndjson.core.ports.sink import RECORD_CATEGORIES, RecordCategory, RecordSink
from analyze_ndjson.core.records import RouteAnalysis, module_edge_records, module_records, parse_header
from analyze_ndjson.models import ModulesHeader
from analyze_ndjson.storage.discovery import MODULES_DATA_FILENAME, RouteFile, discover_routes

logger = logging.getLogger(__name__)


@dataclass
class ConvertSummary:
    counts: dict[RecordCategory, int] = field(default_factory=lambda: dict.fromkeys(RECORD_CATEGORIES, 0))
    routes: list[str] = field(default_factory=list)
    failed_routes: dict[str, str] = field(default_factory=dict)

    def add(self, category: RecordCategory, written: int) -> None:
        self.counts[category] += written


@dataclass(frozen=True)
class ModuleRegistry:
    container: Container
    header: ModulesHeader


def load_modules(input_dir: str | Path) -> ModuleRegistry:
    """Read and decode ``modules.data``; every conversion needs it before any output is written."""
    modules_file = Path(input_dir) / MODULES_DATA_FILENAME
    if not modules_file.is_file():
        raise FileNotFoundError(f"{MODULES_DATA_FILENAME} not found in {input_dir}")
    container = load_container(modules_file)
    return ModuleRegistry(container=container, header=parse_header(container, ModulesHeader))


def run_convert(input_dir: str | Path, sink: RecordSink, modules: ModuleRegistry | None = None) -> ConvertSummary:
    """Convert the module registry and every discovered route into records on ``sink``.

    ``modules`` is loaded from ``input_dir`` when not given. A route whose
    container cannot be decoded is logged and skipped; the remaining routes
    are still converted. The sink is not closed.
    """
    data_dir = Path(input_dir)
    if modules is None:
        modules = load_modules(data_dir)
    summary = ConvertSummary()
    summary.add("modules", sink.write_all("modules", module_records(modules.header)))
    summary.add(
        "module_edges",
        sink.write_all("module_edges", module_edge_records(modules.container, len(modules.header.modules))),
    )
    logger.info("Converted %d modules, %d module edges", summary.counts["modules"], summary.counts["module_edges"])

    for route_file in discover_routes(data_dir):
        _convert_route(route_file, sink, summary)

    return summary


def _convert_route(route_file: RouteFile, sink: RecordSink, summary: ConvertSummary) -> None:
    try:
        analysis = RouteAnalysis.from_container(route_file.route, load_container(route_file.path))
    except (MalformedContainer, CyclicPathReference, OSError) as exc:
        logger.error("Skipping route %s (%s): %s", route_file.route, route_file.path, exc)
        summary.failed_routes[route_file.route] = str(exc)
        return

    summary.add("sources", sink.write_all("sources", analysis.sources()))
    summary.add("chunk_parts", sink.write_all("chunk_parts", analysis.chunk_parts()))
    summary.add("output_files", sink.write_all("output_files", analysis.output_files()))
    summary.add("routes", sink.write_all("routes", [analysis.summary()]))
    summary.routes.append(route_file.route)
    logger.info("Converted route %s (%d sources)", route_file.route, len(analysis.header.sources))
