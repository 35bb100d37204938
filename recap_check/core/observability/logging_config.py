"""
Logging configuration for the recap-check CLI.

``setup_logging`` runs once from main.py; modules only ever do
``logger = logging.getLogger(__name__)``.

Console output goes to stderr so ``--json`` output on stdout stays
parseable. The console level comes from the CLI flags, then
``RECAP_LOG_LEVEL``, then WARNING. ``RECAP_LOG_FILE`` adds a file
handler with its own level (``RECAP_LOG_FILE_LEVEL``).
"""

from __future__ import annotations

import logging
import sys

# Console formats by level. At WARNING the report is the output and
# log lines only flag problems.
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("%(levelname)s: %(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Only our own package is raised to DEBUG; the rest of the process stays quiet
_PACKAGE_LOGGER = "recap_check"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure logging for the whole process.

    Calling it again replaces the previous handlers.

    Args:
        level: Console level name.
        log_file: Optional log file path. An unwritable path is
            reported on the console and otherwise ignored.
        log_file_level: Level for the file (default: ``level``).
    """
    console_level = _parse_level(level)
    fmt, datefmt = _console_format(console_level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console)
    root.setLevel(console_level)

    package = logging.getLogger(_PACKAGE_LOGGER)
    package.setLevel(console_level)
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logging.getLogger(__name__).warning("Cannot open log file %s: %s", log_file, e)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
            root.addHandler(fh)
            package.setLevel(min(console_level, file_level))

    logging.raiseExceptions = False


def _console_format(numeric_level: int) -> tuple[str, str | None]:
    for threshold in (logging.DEBUG, logging.INFO):
        if numeric_level <= threshold:
            return _CONSOLE_FORMATS[threshold]
    return _CONSOLE_DEFAULT


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level: ``--debug`` > ``--verbose`` > ``--quiet`` > env."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"
