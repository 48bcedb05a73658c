"""
Logging configuration for quill-safety entry points.

Library modules only create module loggers (logging.getLogger(__name__));
handlers and formats are set up here, once, by whoever owns the process
(the CLI, or the web application at startup).
"""

import logging
import sys
from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class MillisecondsFormatter(logging.Formatter):
    """Local-time timestamps with a millisecond suffix ("2026-10-19 09:15:02,481")."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        stamp = datetime.fromtimestamp(record.created).strftime(datefmt or TIMESTAMP_FORMAT)
        return f"{stamp},{int(record.msecs):03d}"


def build_formatter(phase: Optional[str] = None) -> MillisecondsFormatter:
    """Unified line format; phase (e.g. "sanitize") is shown after the level."""
    parts = ["%(asctime)s", "%(levelname)-8s"]
    if phase:
        parts.append(phase)
    parts.extend(["%(filename)s:%(lineno)d", "%(message)s"])
    return MillisecondsFormatter(" | ".join(parts), datefmt=TIMESTAMP_FORMAT)


def configure_global_logging(log_level: str = "INFO", phase: Optional[str] = None, stream=None):
    """
    Configure the root logger with the unified format.

    Call this early in application startup to ensure all logs are consistently formatted.

    Args:
        log_level: Logging level to apply globally (DEBUG, INFO, WARNING, ERROR)
        phase: Optional phase name shown in every line
        stream: Output stream (defaults to stderr so stdout stays clean for JSON output)
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    root_handler = logging.StreamHandler(stream or sys.stderr)
    root_handler.setLevel(level)
    root_handler.setFormatter(build_formatter(phase))
    root_logger.addHandler(root_handler)

    # pydantic and yaml are quiet, but keep third-party loggers on the root handler
    for lib_name in ["yaml", "pydantic"]:
        lib_logger = logging.getLogger(lib_name)
        lib_logger.handlers.clear()
        lib_logger.propagate = True
