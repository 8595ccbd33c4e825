"""
Logging configuration for the mkmod CLI.

``cli()`` calls ``setup_logging`` once; modules log through
``logging.getLogger(__name__)``.  Console level precedence:

    --debug  >  --verbose  >  --quiet  >  MKMOD_LOG_LEVEL  >  WARNING

MKMOD_LOG_FILE adds a file handler, at MKMOD_LOG_FILE_LEVEL if set.
The console writes to stderr so ``--json`` output on stdout stays parseable.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LOG_LEVEL = "MKMOD_LOG_LEVEL"
ENV_LOG_FILE = "MKMOD_LOG_FILE"
ENV_LOG_FILE_LEVEL = "MKMOD_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

# (highest level the format applies to, format, datefmt), checked in order
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LOG_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with mkmod's console (and file) handler.

    Args:
        level: Console level name. Unknown names mean WARNING.
        log_file: Log file path (default: MKMOD_LOG_FILE).
        log_file_level: File handler level (default: MKMOD_LOG_FILE_LEVEL,
            then ``level``).
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    log_file = log_file or os.environ.get(ENV_LOG_FILE)
    if log_file:
        file_level_name = log_file_level or os.environ.get(ENV_LOG_FILE_LEVEL)
        file_level = _parse_level(file_level_name) if file_level_name else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(handler)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for limit, f, d in _CONSOLE_FORMATS if level <= limit)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(name: str | None) -> int:
    numeric = logging.getLevelName(name.upper()) if name else None
    return numeric if isinstance(numeric, int) else logging.WARNING
