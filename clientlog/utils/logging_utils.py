"""
Centralized logging utilities for clientlog.

Provides standardized logging functions for common scenarios so that the
analyzer, the scanners and the CLI share one log format.
"""

import logging
from typing import Any


def log_file_event(logger: logging.Logger, event_type: str, path: str = "") -> None:
    """Log file access events with consistent format."""
    if path:
        logger.info(f"[FILE] {event_type} - {path}")
    else:
        logger.info(f"[FILE] {event_type}")


def log_file_error(logger: logging.Logger, path: str, error: Exception) -> None:
    """Log a failure to read or parse a client output file."""
    logger.error(
        f"Error reading client output file {path}: {error}",
        exc_info=error,
        extra={"clientlog_extra": {"path": path}},
    )


def log_parsing_warning(logger: logging.Logger, operation: str, reason: str) -> None:
    """Log parsing warnings with consistent format."""
    logger.warning(f"{operation}: {reason}")


def log_analysis_result(
    logger: logging.Logger, check_name: str, passed: bool, details: str = ""
) -> None:
    """Log the outcome of an analysis check."""
    detail_str = f": {details}" if details else ""
    status = "PASSED" if passed else "FAILED"
    level = logging.INFO if passed else logging.WARNING
    logger.log(
        level,
        f"[CHECK] {check_name} {status}{detail_str}",
        extra={"clientlog_extra": {"check": check_name, "passed": passed}},
    )


def log_report_section(logger: logging.Logger, heading: str, body: Any) -> None:
    """Log a diagnostic dump as a heading record followed by the data."""
    logger.info(heading)
    logger.info(f"{body}")


def log_debug_operation(
    logger: logging.Logger, operation: str, details: Any = None
) -> None:
    """Log debug information for operations."""
    if details is not None:
        logger.debug(f"{operation}: {details}")
    else:
        logger.debug(f"{operation}")


__all__ = [
    "log_file_event",
    "log_file_error",
    "log_parsing_warning",
    "log_analysis_result",
    "log_report_section",
    "log_debug_operation",
]
