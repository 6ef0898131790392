"""Logging configuration for LinkedIn Profile Extractor.

Everything is logged to stderr; stdout is reserved for the extracted JSON.
Levels used across the package:

    ERROR    aborted extractions and session failures
    WARNING  missing popups, exhausted wait budgets, failed sections
    INFO     progress milestones (login, navigation, section counts)
    DEBUG    disclosure clicks, scroll steps
"""

import logging
import sys
from typing import Any, Optional

from .errors import ExtractorError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at DEBUG/INFO
QUIET_LOGGERS = ("selenium", "urllib3", "WDM")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        plain = record.levelname
        record.levelname = f"{color}\033[1m{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def setup_logging(verbose: bool = False, use_colors: bool = True) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        verbose: Log at DEBUG instead of INFO
        use_colors: Color level names when stderr is a terminal
    """
    level = logging.DEBUG if verbose else logging.INFO
    formatter_class = (
        ColoredFormatter if use_colors and sys.stderr.isatty() else logging.Formatter
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter_class(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_error_with_details(
    logger: logging.Logger,
    error: Exception,
    context: Optional[dict[str, Any]] = None,
) -> None:
    """Log ``error`` at ERROR level with its details and the caller's context.

    ``ExtractorError`` subclasses are logged as ``[type] message``. Any other
    exception is unexpected and is logged with its traceback.
    """
    extra: dict[str, Any] = {"context": context or {}}
    if isinstance(error, ExtractorError):
        extra["error_details"] = error.details
        logger.error("[%s] %s", error.error_type, error.message, extra=extra)
    else:
        logger.error("%s", error, extra=extra, exc_info=True)


def log_progress(
    logger: logging.Logger,
    stage: str,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Log a progress milestone, with ``key=value`` details appended."""
    if details:
        suffix = ", ".join(f"{key}={value}" for key, value in details.items())
        logger.info("Progress: %s (%s)", stage, suffix)
    else:
        logger.info("Progress: %s", stage)
