"""
Logging setup for the vmem CLI.

Console output goes through rich's RichHandler on stderr; --log-file adds a
plain FileHandler that always records DEBUG. The handlers are attached to
the tool logger and to the vmemgen package logger so library debug output
lands in the same places.
"""

from __future__ import annotations
from typing import List, Optional
from pathlib import Path
import logging

from rich.console import Console
from rich.logging import RichHandler

from .errors import LogFileError

__all__ = ['setup_logging', 'PACKAGE_LOGGER']

PACKAGE_LOGGER = "vmemgen"


def _console_handler(console_level: int) -> logging.Handler:
    return RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _file_handler(log_file) -> logging.Handler:
    log_path = Path(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        raise LogFileError(log_file, e.strerror or str(e)) from e
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return fh


def _install(names, handlers: List[logging.Handler], level: int):
    for logger_name in names:
        lg = logging.getLogger(logger_name)
        for h in list(lg.handlers):
            if getattr(h, "_vmem_handler", False):
                lg.removeHandler(h)
                h.close()
        lg.setLevel(level)
        for h in handlers:
            h._vmem_handler = True
            lg.addHandler(h)


def setup_logging(name: str = "vmem", *, verbose: bool = False, quiet: bool = False,
                  log_file: Optional[Path] = None) -> logging.Logger:
    """Configure and return the tool logger.

    INFO by default, DEBUG with verbose, errors only with quiet. Calling it
    again replaces the handlers it installed before, so the CLI can be
    driven repeatedly from one process.

    If log_file cannot be opened the console handler is still installed
    before LogFileError is raised, so the caller can report it.
    """
    if quiet:
        console_level = logging.ERROR
    elif verbose:
        console_level = logging.DEBUG
    else:
        console_level = logging.INFO

    names = (name, PACKAGE_LOGGER)
    handlers = [_console_handler(console_level)]
    if log_file:
        try:
            handlers.append(_file_handler(log_file))
        except LogFileError:
            _install(names, handlers, console_level)
            raise

    _install(names, handlers, logging.DEBUG if (verbose or log_file) else console_level)

    logger = logging.getLogger(name)
    if log_file:
        logger.debug("Log file: %s", log_file)
    return logger
