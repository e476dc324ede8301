"""
Utilities package for clientlog.

Contains common utility functions used across the clientlog codebase.
"""

from .logging_utils import (
    log_analysis_result,
    log_debug_operation,
    log_file_error,
    log_file_event,
    log_parsing_warning,
    log_report_section,
)

__all__ = [
    "log_file_event",
    "log_file_error",
    "log_parsing_warning",
    "log_analysis_result",
    "log_report_section",
    "log_debug_operation",
]
