"""
Logging setup for the native-package CLI.

main.py calls ``setup_logging(level_from_flags(...))`` once; every
module logger (``logging.getLogger(__name__)``) inherits it. Console
lines show the logger name relative to the package, so the service
layers read as ``orchestration.orchestrator`` or ``execution.backends``.

Environment:
    NPKG_LOG_LEVEL       console level when no -v/-q/--debug flag is given
    NPKG_LOG_FILE        optional log file, always with full detail
    NPKG_LOG_FILE_LEVEL  level for the log file (default: console level)
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "NPKG_LOG_LEVEL"
ENV_FILE = "NPKG_LOG_FILE"
ENV_FILE_LEVEL = "NPKG_LOG_FILE_LEVEL"

# Longest first
_NAME_PREFIXES = (
    "native_package.core.services.native_package.",
    "native_package.core.",
    "native_package.",
)

_CONSOLE_DEBUG = ("%(asctime)s %(levelname)-5s %(short_name)s:%(lineno)d %(message)s", "%H:%M:%S")
_CONSOLE_INFO = ("%(asctime)s [%(short_name)s] %(message)s", "%H:%M:%S")
_CONSOLE_QUIET = ("%(levelname)s: %(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def short_name(name: str) -> str:
    """Logger name without the package prefix."""
    for prefix in _NAME_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


class _ShortNameFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.short_name = short_name(record.name)
        return super().format(record)


def level_from_flags(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Console level: --debug > -v > -q > NPKG_LOG_LEVEL > WARNING."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _parse_level(os.environ.get(ENV_LEVEL))


def setup_logging(
    level: int | str = logging.WARNING,
    *,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for one CLI process.

    Args:
        level: Console level, numeric or by name.
        log_file: Log file path. Defaults to ``NPKG_LOG_FILE``.
        log_file_level: Log file level. Defaults to
            ``NPKG_LOG_FILE_LEVEL``, then the console level.
    """
    console_level = level if isinstance(level, int) else _parse_level(level)
    log_file = log_file or os.environ.get(ENV_FILE)
    log_file_level = log_file_level or os.environ.get(ENV_FILE_LEVEL)

    if console_level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_DEBUG
    elif console_level <= logging.INFO:
        fmt, datefmt = _CONSOLE_INFO
    else:
        fmt, datefmt = _CONSOLE_QUIET
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_ShortNameFormatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level. Unknown or empty → WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
