import os
from dataclasses import dataclass
from pathlib import Path

from analyze_ndjson.storage.ndjson import DEFAULT_FLUSH_THRESHOLD

DEFAULT_INPUT_DIR = ".next/diagnostics/analyze/data"
DEFAULT_OUTPUT_DIR = "./analyze-ndjson"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    input_dir: Path
    output_dir: Path
    flush_threshold: int
    log_level: str


def get_settings() -> Settings:
    raw_threshold = os.getenv("ANALYZE_NDJSON_FLUSH_THRESHOLD", str(DEFAULT_FLUSH_THRESHOLD))
    try:
        flush_threshold = int(raw_threshold)
    except ValueError:
        raise ValueError(f"ANALYZE_NDJSON_FLUSH_THRESHOLD must be an integer, got '{raw_threshold}'") from None
    if flush_threshold < 0:
        raise ValueError(f"ANALYZE_NDJSON_FLUSH_THRESHOLD must not be negative, got {flush_threshold}")

    return Settings(
        input_dir=Path(os.getenv("ANALYZE_NDJSON_INPUT", DEFAULT_INPUT_DIR)),
        output_dir=Path(os.getenv("ANALYZE_NDJSON_OUTPUT", DEFAULT_OUTPUT_DIR)),
        flush_threshold=flush_threshold,
        log_level=os.getenv("ANALYZE_NDJSON_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
