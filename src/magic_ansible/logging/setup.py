"""Console log handler for the command line."""

import logging as _logging

import rich.console as _rich_console
import rich.logging as _rich_logging

LOGGER_NAME = "magic_ansible"

_LEVELS = {
    "debug": _logging.DEBUG,
    "info": _logging.INFO,
    "warning": _logging.WARNING,
    "error": _logging.ERROR,
}


def configure_logging(
    level: str = "info",
    *,
    console: _rich_console.Console | None = None,
) -> _logging.Logger:
    """
    Route package log records to stderr through rich.

    Safe to call more than once: previously installed handlers are
    replaced, not stacked.

    Args:
        level: One of debug, info, warning, error (case-insensitive).
        console: Console to write to. Defaults to a stderr console.

    Returns:
        The package logger.

    Raises:
        ValueError: If level is not a known level name.
    """
    try:
        numeric_level = _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}, expected one of: {', '.join(_LEVELS)}"
        ) from None

    handler = _rich_logging.RichHandler(
        console=console or _rich_console.Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(_logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = _logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger
