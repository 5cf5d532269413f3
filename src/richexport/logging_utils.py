"""Centralized logging utilities for richexport entry points.

The CLI and the HTTP service share one setup. richexport's own loggers and
werkzeug's request log follow the requested level; every other library
logs warnings only, unless trace mode asks for everything. Handlers added
here are tagged so that a second call replaces them without touching
handlers installed by the host application.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "richexport"

# Loggers that follow the requested level rather than the library default
FOLLOWING_LOGGERS = (PACKAGE_LOGGER, "werkzeug")

LIBRARY_LEVEL = logging.WARNING

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG = "_richexport_handler"


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name or number into a logging level."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _tagged(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def remove_handlers(logger: Optional[logging.Logger] = None) -> None:
    """Detach and close the handlers a previous ``configure_logging`` call installed."""
    logger = logger or logging.getLogger()
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the handlers shared by the CLI and the HTTP service.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path of a file that receives a copy of the log. File entries always
        carry timestamps and logger names.
    trace_mode : bool, default False
        When true, console entries carry timestamps and logger names, and
        third-party libraries log at ``log_level`` too.

    Returns
    -------
    logging.Logger
        The ``richexport`` package logger.

    """
    resolved_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    remove_handlers(root_logger)
    root_logger.setLevel(resolved_level if trace_mode else max(resolved_level, LIBRARY_LEVEL))
    for name in FOLLOWING_LOGGERS:
        logging.getLogger(name).setLevel(resolved_level)

    trace_formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    console_formatter = trace_formatter if trace_mode else logging.Formatter(CONSOLE_FORMAT)
    root_logger.addHandler(_tagged(logging.StreamHandler(sys.stderr), resolved_level, console_formatter))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            root_logger.addHandler(_tagged(file_handler, resolved_level, trace_formatter))
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
