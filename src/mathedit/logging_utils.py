"""Logging setup for the mathedit command-line entry point.

The library itself only creates module loggers; handlers are attached here,
once, by whoever runs the editor (the CLI, a test, an embedding app).
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a numeric level or level name into a numeric logging level.

    Unknown names fall back to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _make_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def _add_handler(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root logger's handlers with a stderr handler and an optional log file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"DEBUG"``.
    log_file : str, optional
        Path of a file that receives a copy of every record. A file that
        cannot be opened is reported as a warning on stderr.
    trace_mode : bool, default False
        Include timestamps, logger names and call sites, so every cursor
        move and deletion decision can be followed.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = resolve_log_level(log_level)
    formatter = _make_formatter(trace_mode)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    _add_handler(root, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root.warning("Could not create log file %s: %s", log_file, exc)
        else:
            _add_handler(root, file_handler, level, formatter)
            root.info("Logging to file: %s", log_file)

    return root
