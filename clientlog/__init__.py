"""
clientlog package init.
Exports the client output parser and analyzer used by message broker
integration tests.
"""

import argparse
import datetime
import json
import logging
import os
from typing import Any, Dict, List, Optional

from .analyzer import LogOutputAnalyzer, scan_duplicate_count, scan_transacted_operation
from .exceptions import ClientLogError, LogFileNotFoundError, LogReadError, ParseError
from .parser import (
    MESSAGE_MARKER,
    PUBLISH_MESSAGE_FORMAT,
    MessageLineParser,
    ParserConfig,
    format_publish_message,
)
from .results import ScanResult

__version__ = "0.1.0"


class JSONFormatter(logging.Formatter):
    """JSON formatter with structured logging support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Add extra structured data
        extra = getattr(record, "clientlog_extra", {})
        if extra:
            log_entry.update(extra)

        # Handle exceptions
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
            exc = record.exc_info[1]
            context = getattr(exc, "context", None)
            if context:
                log_entry["context"] = context

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """
    Setup basic logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    use_json = os.environ.get("CLIENTLOG_LOG_JSON", "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if use_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    else:
        logging.basicConfig(level=getattr(logging, level.upper()))


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="clientlog - analyse message broker test client output"
    )
    parser.add_argument("logfile", help="File written by the test client")
    parser.add_argument(
        "--check-order",
        action="store_true",
        help="Verify messages arrived as 0, 1, 2, ...",
    )
    parser.add_argument(
        "--duplicates", action="store_true", help="Report duplicated messages"
    )
    parser.add_argument(
        "--missing",
        type=int,
        metavar="N",
        help="Report ids in 0..N-1 that never arrived",
    )
    parser.add_argument(
        "--transacted",
        type=int,
        metavar="INDEX",
        help="Verify the message at INDEX replays the first message",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CLIENTLOG_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Force console (stdout) output instead of structured logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        0 if every requested check passed, 1 if any failed, 2 if the file
        could not be analysed
    """
    args = _build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    log = logging.getLogger(__name__)
    console_mode = (
        args.console
        or os.environ.get("CLIENTLOG_CONSOLE_MODE", "false").lower() == "true"
    )

    def emit(msg: str, level: int = logging.INFO) -> None:
        if console_mode:
            print(msg)
        else:
            log.log(level, msg)

    try:
        parser = MessageLineParser(ParserConfig.from_env())
        analyzer = LogOutputAnalyzer(args.logfile, parser=parser)
    except (ClientLogError, ValueError) as e:
        emit(f"Cannot analyse {args.logfile}: {e}", logging.ERROR)
        return 2

    emit(f"Messages: {analyzer.message_count}")
    failed = False

    if args.duplicates:
        duplicated = analyzer.get_duplicated_messages()
        emit(
            f"Duplicated messages: {len(duplicated)} ids, "
            f"{analyzer.number_duplicated_messages()} repeats"
        )
        for identifier, count in sorted(duplicated.items()):
            emit(f"  {identifier}: {count}")
        failed = failed or bool(duplicated)

    if args.check_order:
        in_order = analyzer.check_if_messages_are_in_order()
        emit(f"Order check: {'PASSED' if in_order else 'FAILED'}")
        failed = failed or not in_order

    if args.missing is not None:
        missing = analyzer.get_missing_messages(args.missing)
        emit(f"Missing messages: {len(missing)}")
        for identifier in missing:
            emit(f"  {identifier}")
        failed = failed or bool(missing)

    if args.transacted is not None:
        transacted = analyzer.transacted_operations(args.transacted)
        emit(
            f"Transacted check at index {args.transacted}: "
            f"{'PASSED' if transacted else 'FAILED'}"
        )
        failed = failed or not transacted

    return 1 if failed else 0


__all__ = [
    "LogOutputAnalyzer",
    "MessageLineParser",
    "ParserConfig",
    "ScanResult",
    "ClientLogError",
    "LogFileNotFoundError",
    "LogReadError",
    "ParseError",
    "MESSAGE_MARKER",
    "PUBLISH_MESSAGE_FORMAT",
    "format_publish_message",
    "scan_duplicate_count",
    "scan_transacted_operation",
    "JSONFormatter",
    "setup_logging",
    "main",
]
