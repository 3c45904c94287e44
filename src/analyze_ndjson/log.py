import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route all log records through a single rich handler on stderr."""
    level_name = level.strip().upper()
    if level_name not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level '{level}'. Use DEBUG, INFO, WARNING, ERROR or CRITICAL.")

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level_name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
