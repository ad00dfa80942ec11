"""
Logging setup for the gentx CLI.

``configure(...)`` runs once from the root click group. Every module
that does ``logger = logging.getLogger(__name__)`` inherits it.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  GENTX_LOG_LEVEL  >  WARNING

GENTX_LOG_FILE adds a file handler at GENTX_LOG_FILE_LEVEL (default:
the console level). The file always gets the full diagnostic format so
a run's staged, committed and failed paths can be traced afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "GENTX_LOG_LEVEL"
ENV_FILE = "GENTX_LOG_FILE"
ENV_FILE_LEVEL = "GENTX_LOG_FILE_LEVEL"

# Generator output goes to stdout; log records only ever go to stderr.
_FMT_CONSOLE = "gentx: %(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from the global CLI flags and environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(ENV_LEVEL) or "WARNING"


def configure(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> None:
    """Resolve levels and the optional log file from flags and env, then set up."""
    env = os.environ if env is None else env
    setup_logging(
        level=resolve_level(debug, verbose, quiet, env),
        log_file=env.get(ENV_FILE) or None,
        log_file_level=env.get(ENV_FILE_LEVEL) or None,
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (and file handler) on the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to append log records to.
        log_file_level: Level for the file. Defaults to ``level``.
    """
    numeric_level = parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_SHORT
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_SHORT
    else:
        fmt, datefmt = _FMT_CONSOLE, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Root passes the lower of the two so the file can be more verbose
    effective_level = numeric_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
