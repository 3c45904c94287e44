import logging

import pytest

from analyze_ndjson.log import configure_logging


@pytest.mark.parametrize("level", ["loud", "", "info level"])
def test_unknown_level_rejected_before_handlers_change(level: str) -> None:
    handlers = list(logging.getLogger().handlers)
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging(level)
    assert logging.getLogger().handlers == handlers
