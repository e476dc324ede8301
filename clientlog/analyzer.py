"""
Analysis of message-broker test client output.

LogOutputAnalyzer parses a client output file once into an ordered log of
message identifiers and a frequency table, then answers duplicate, ordering,
missing-message and transacted-replay queries from that snapshot. A file that
keeps growing is picked up with refresh().

The scan_* functions re-read the current file on every call and report
failures through ScanResult instead of raising.
"""

import logging
import os
from contextlib import closing
from typing import Dict, List, Optional, Set, Tuple

from .exceptions import ClientLogError
from .parser import MessageLineParser, PathLike
from .results import ScanResult
from .utils.logging_utils import (
    log_analysis_result,
    log_debug_operation,
    log_file_error,
    log_file_event,
    log_parsing_warning,
    log_report_section,
)


class LogOutputAnalyzer:
    """
    Parse-once, query-many view of a client output file.

    Not safe for concurrent use. Queries never touch the disk; only
    construction and refresh() read the file.
    """

    def __init__(
        self,
        file_path: PathLike,
        parser: Optional[MessageLineParser] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Read and parse a client output file.

        Args:
            file_path: Path of the file written by the test client
            parser: Line parser; defaults to the standard publish format
            logger: Sink for diagnostics; defaults to this module's logger

        Raises:
            LogFileNotFoundError: If the file does not exist
            LogReadError: If the file cannot be read
            ParseError: If a line does not follow the message format
        """
        self._file_path = os.fspath(file_path)
        self.parser = parser or MessageLineParser()
        self.logger = logger or logging.getLogger(__name__)
        self._messages: List[int] = []
        self._message_counts: Dict[int, int] = {}
        self._load()

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def messages(self) -> Tuple[int, ...]:
        """Message identifiers in file order, duplicates retained."""
        return tuple(self._messages)

    @property
    def message_counts(self) -> Dict[int, int]:
        """Copy of the identifier -> occurrence count table."""
        return dict(self._message_counts)

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def refresh(self) -> None:
        """
        Re-parse the file, replacing the snapshot.

        Used when the test client is still appending to the file. On failure
        the previous snapshot is kept and the error propagates.
        """
        log_debug_operation(self.logger, "Refreshing client output", self._file_path)
        self._load()

    def _load(self) -> None:
        messages: List[int] = []
        counts: Dict[int, int] = {}
        try:
            for _, identifier in self.parser.iter_identifiers(self._file_path):
                messages.append(identifier)
                counts[identifier] = counts.get(identifier, 0) + 1
        except ClientLogError as e:
            log_file_error(self.logger, self._file_path, e)
            raise

        self._messages = messages
        self._message_counts = counts
        log_file_event(
            self.logger, f"Parsed {len(messages)} messages", self._file_path
        )

    def get_duplicated_messages(self) -> Dict[int, int]:
        """
        Get the messages received more than once.

        Returns:
            Mapping of duplicated message identifier to its occurrence count
        """
        return {
            identifier: count
            for identifier, count in self._message_counts.items()
            if count > 1
        }

    def check_if_messages_are_in_order(self) -> bool:
        """
        Check that the identifier at every position equals the position.

        Assumes the sender numbers messages 0, 1, 2, ... Stops at the first
        mismatch and logs a warning for it.
        """
        for position, identifier in enumerate(self._messages):
            if identifier != position:
                log_parsing_warning(
                    self.logger,
                    "Message order is broken",
                    f"position {position} holds message {identifier}",
                )
                return False
        return True

    def number_duplicated_messages(self) -> int:
        """Count lines whose identifier already appeared on an earlier line."""
        return len(self._messages) - len(self._message_counts)

    def transacted_operations(self, operation_index: int) -> bool:
        """
        Check that a transactional replay returned to the first message.

        Args:
            operation_index: 0-based line index at which the rollback or
                retry boundary occurred

        Returns:
            True if the identifier at operation_index equals the identifier
            at index 0, False otherwise or if there is no such line
        """
        if operation_index < 0 or operation_index >= len(self._messages):
            log_debug_operation(
                self.logger,
                "Transacted operation index out of range",
                f"{operation_index} (messages={len(self._messages)})",
            )
            return False
        return self._messages[operation_index] == self._messages[0]

    def get_missing_messages(self, number_of_sent_messages: int) -> List[int]:
        """Identifiers in range(number_of_sent_messages) that never arrived."""
        return [
            identifier
            for identifier in range(number_of_sent_messages)
            if identifier not in self._message_counts
        ]

    def get_messages_sorted(self) -> List[int]:
        return sorted(self._messages)

    def print_missing_messages(self, number_of_sent_messages: int) -> None:
        self.logger.info("Printing Missing Messages")
        for identifier in self.get_missing_messages(number_of_sent_messages):
            self.logger.info(f"Missing message id: {identifier}")

    def print_duplicate_messages(self) -> None:
        log_report_section(
            self.logger, "Printing Duplicated Messages", self.get_duplicated_messages()
        )

    def print_messages_map(self) -> None:
        log_report_section(
            self.logger, "Printing Received Messages", self._message_counts
        )

    def print_messages_sorted(self) -> None:
        log_report_section(
            self.logger, "Printing Sorted Messages", self.get_messages_sorted()
        )


def scan_duplicate_count(
    path: PathLike,
    parser: Optional[MessageLineParser] = None,
    logger: Optional[logging.Logger] = None,
) -> ScanResult[int]:
    """
    Re-read a client output file and count repeat occurrences.

    Returns:
        ScanResult carrying the number of lines whose identifier appeared
        earlier in the file, or the error if the file could not be analysed
    """
    path_str = os.fspath(path)
    parser = parser or MessageLineParser()
    log = logger or logging.getLogger(__name__)

    seen: Set[int] = set()
    duplicate_count = 0
    try:
        for _, identifier in parser.iter_identifiers(path_str):
            if identifier in seen:
                duplicate_count += 1
            else:
                seen.add(identifier)
    except ClientLogError as e:
        log_file_error(log, path_str, e)
        return ScanResult.failed(path_str, e)

    log_analysis_result(
        log, "duplicate scan", duplicate_count == 0, f"{duplicate_count} repeats"
    )
    return ScanResult.ok(path_str, duplicate_count)


def scan_transacted_operation(
    path: PathLike,
    operation_index: int,
    parser: Optional[MessageLineParser] = None,
    logger: Optional[logging.Logger] = None,
) -> ScanResult[bool]:
    """
    Re-read a client output file up to operation_index and compare the
    identifier found there with the first one.

    Reading stops as soon as operation_index is reached, so lines past it
    are neither read nor validated.
    """
    path_str = os.fspath(path)
    parser = parser or MessageLineParser()
    log = logger or logging.getLogger(__name__)

    first_identifier: Optional[int] = None
    transacted = False
    try:
        with closing(parser.iter_identifiers(path_str)) as identifiers:
            for line_index, identifier in identifiers:
                if line_index == 0:
                    first_identifier = identifier
                if line_index == operation_index:
                    transacted = identifier == first_identifier
                    break
    except ClientLogError as e:
        log_file_error(log, path_str, e)
        return ScanResult.failed(path_str, e)

    log_analysis_result(
        log, "transacted operation", transacted, f"index {operation_index}"
    )
    return ScanResult.ok(path_str, transacted)
