from pathlib import Path

import pytest

from analyze_ndjson.settings import DEFAULT_INPUT_DIR, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ANALYZE_NDJSON_INPUT",
        "ANALYZE_NDJSON_OUTPUT",
        "ANALYZE_NDJSON_FLUSH_THRESHOLD",
        "ANALYZE_NDJSON_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.input_dir == Path(DEFAULT_INPUT_DIR)
    assert settings.output_dir == Path("./analyze-ndjson")
    assert settings.flush_threshold == 50_000
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYZE_NDJSON_OUTPUT", "/tmp/ndjson")
    monkeypatch.setenv("ANALYZE_NDJSON_FLUSH_THRESHOLD", "128")
    monkeypatch.setenv("ANALYZE_NDJSON_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.output_dir == Path("/tmp/ndjson")
    assert settings.flush_threshold == 128
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["lots", "-1"])
def test_invalid_flush_threshold(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("ANALYZE_NDJSON_FLUSH_THRESHOLD", value)
    with pytest.raises(ValueError, match="ANALYZE_NDJSON_FLUSH_THRESHOLD"):
        get_settings()
