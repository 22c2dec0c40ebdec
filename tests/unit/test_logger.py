import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from billparse.logging.logger import Log


@pytest.fixture()
def fresh_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("billparse.tests.logger")
    logger.handlers.clear()
    with patch.object(Log, "_logger", logger):
        yield logger
    logger.handlers.clear()


class TestLog:
    def test_configure_sets_level(self, fresh_logger: logging.Logger) -> None:
        Log.configure("warning")
        assert fresh_logger.level == logging.WARNING

    def test_messages_go_to_stderr(
        self, fresh_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
    ) -> None:
        Log.configure("INFO")
        Log.info("extraction started")
        Log.debug("hidden below level")

        captured = capsys.readouterr()
        assert "[INFO] extraction started" in captured.err
        assert "hidden below level" not in captured.err
        assert captured.out == ""

    def test_configure_twice_keeps_one_handler(self, fresh_logger: logging.Logger) -> None:
        Log.configure("INFO")
        Log.configure("DEBUG")
        assert len(fresh_logger.handlers) == 1
        assert fresh_logger.level == logging.DEBUG
