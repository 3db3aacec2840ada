from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import patch

import pytest

from lockstep.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the lockstep logger and the configured flag around a test."""
    import lockstep.utils.logger as logger_module

    root_logger = logging.getLogger("lockstep")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def _record(level: int = logging.WARNING, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("lockstep.test", level, __file__, 1, msg, None, None)


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_defaults(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        assert formatter.use_color is True

    def test_plain_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "WARNING: hello"

    def test_colours_level_on_terminal(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        with patch.object(ColoredFormatter, "_terminal_supports_color", return_value=True):
            output = formatter.format(_record(logging.ERROR))

        assert output == "\033[31mERROR\033[0m: hello"

    def test_original_record_not_mutated(self) -> None:
        """Other handlers still see the plain level name."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s")
        record = _record()

        with patch.object(ColoredFormatter, "_terminal_supports_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "WARNING"

    def test_no_color_env_disables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert ColoredFormatter._terminal_supports_color() is False


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging and friends."""

    def test_configures_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.INFO, stream=captured_stream)

        get_logger("project").info("Binding project")

        assert is_logging_configured() is True
        assert "INFO: Binding project" in captured_stream.getvalue()

    def test_level_filters(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        setup_logging(level=logging.WARNING, stream=captured_stream)

        get_logger("project").info("quiet")

        assert captured_stream.getvalue() == ""

    def test_verbose_format_includes_logger_name(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("reporter").debug("diffing")

        assert "lockstep.reporter" in captured_stream.getvalue()

    def test_repeated_setup_replaces_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)
        setup_logging(stream=captured_stream)

        assert len(logging.getLogger("lockstep").handlers) == 1

    def test_disable_logging(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        setup_logging(stream=captured_stream)

        disable_logging()
        get_logger("project").warning("silenced")

        assert is_logging_configured() is False
        assert captured_stream.getvalue() == ""


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger naming."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "lockstep"),
            ("lockstep", "lockstep"),
            ("project", "lockstep.project"),
            ("lockstep.project", "lockstep.project"),
        ],
    )
    def test_names(self, name, expected: str) -> None:
        assert get_logger(name).name == expected
