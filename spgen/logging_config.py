"""
Logging configuration, called once by the CLI at startup.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this setup. Level precedence: CLI flag > SPGEN_LOG_LEVEL > WARNING.
"""

from __future__ import annotations

import logging
import sys

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# The simulator stack is chatty at INFO (transpiler passes, backend setup).
_NOISY_LOGGERS = ("qiskit", "qiskit_aer", "stevedore")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the process.

    Args:
        level: Level name for the console handler (stderr).
        log_file: Optional file that receives the same records with full detail.
        quiet_third_party: Keep qiskit loggers at WARNING unless at DEBUG.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt = _FMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt = _FMT_VERBOSE
    else:
        fmt = _FMT_MINIMAL

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=_DATEFMT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(numeric_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(numeric_level)

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value, WARNING if unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
