"""Tests for CLI log handler setup."""

import io as _io
import logging as _logging
import typing as _typing

import pytest as _pytest
import rich.console as _rich_console
import rich.logging as _rich_logging

import magic_ansible.logging as logging


@_pytest.fixture
def package_logger() -> _typing.Iterator[_logging.Logger]:
    """The package logger, restored after the test."""
    logger = _logging.getLogger(logging.LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def _console(buffer: _io.StringIO) -> _rich_console.Console:
    return _rich_console.Console(file=buffer, width=200, color_system=None)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @_pytest.mark.parametrize(
        ("name", "level"),
        [
            ("debug", _logging.DEBUG),
            ("info", _logging.INFO),
            ("WARNING", _logging.WARNING),
            ("error", _logging.ERROR),
        ],
    )
    def test_sets_level(
        self, package_logger: _logging.Logger, name: str, level: int
    ) -> None:
        """Level names are case-insensitive."""
        logger = logging.configure_logging(name, console=_console(_io.StringIO()))
        assert logger is package_logger
        assert logger.level == level

    def test_unknown_level(self, package_logger: _logging.Logger) -> None:
        with _pytest.raises(ValueError, match="Unknown log level"):
            logging.configure_logging("chatty")

    def test_installs_rich_handler(self, package_logger: _logging.Logger) -> None:
        """Records go through a RichHandler."""
        logging.configure_logging(console=_console(_io.StringIO()))
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], _rich_logging.RichHandler)

    def test_repeated_calls_replace_handler(self, package_logger: _logging.Logger) -> None:
        """Handlers are replaced, not stacked."""
        logging.configure_logging(console=_console(_io.StringIO()))
        logging.configure_logging("debug", console=_console(_io.StringIO()))
        assert len(package_logger.handlers) == 1

    def test_child_loggers_reach_console(self, package_logger: _logging.Logger) -> None:
        """Module loggers under the package write to the console."""
        buffer = _io.StringIO()
        logging.configure_logging("info", console=_console(buffer))
        _logging.getLogger("magic_ansible.overrides._loader").info("applying overrides for file: a/b.yaml")
        _logging.getLogger("magic_ansible.render").debug("hidden")
        output = buffer.getvalue()
        assert "applying overrides for file: a/b.yaml" in output
        assert "hidden" not in output
