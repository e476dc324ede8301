"""
Client output line parser.

The message-sending test client writes one line per message using
PUBLISH_MESSAGE_FORMAT. The message identifier sits at a fixed offset: the
position right after MESSAGE_MARKER inside the format template. Every line is
sliced at that offset and the leading whitespace-delimited token is read as a
signed 64-bit decimal integer.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .exceptions import LogFileNotFoundError, LogReadError, ParseError
from .utils.logging_utils import log_debug_operation, log_file_event

logger = logging.getLogger(__name__)

MESSAGE_MARKER = "Sending Message:"
PUBLISH_MESSAGE_FORMAT = "Sending Message: {message_id} ThreadID: {thread_id}"

MIN_MESSAGE_ID = -(2**63)
MAX_MESSAGE_ID = 2**63 - 1

_IDENTIFIER_PATTERN = re.compile(r"[+-]?[0-9]+")

PathLike = Union[str, os.PathLike]


def format_publish_message(
    message_id: int,
    thread_id: Union[int, str] = "",
    message_format: str = PUBLISH_MESSAGE_FORMAT,
) -> str:
    """Render one line the way the test client writes it (no trailing newline)."""
    return message_format.format(message_id=message_id, thread_id=thread_id)


@dataclass(frozen=True)
class ParserConfig:
    """Where to find the message identifier in a client output line."""

    message_format: str = PUBLISH_MESSAGE_FORMAT
    marker: str = MESSAGE_MARKER
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.marker:
            raise ValueError("Message marker must not be empty")
        if self.marker not in self.message_format:
            raise ValueError(
                f"Message format {self.message_format!r} does not contain "
                f"marker {self.marker!r}"
            )

    @property
    def identifier_offset(self) -> int:
        """Column at which the identifier field starts in every line."""
        return self.message_format.index(self.marker) + len(self.marker)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a config from CLIENTLOG_MESSAGE_FORMAT / CLIENTLOG_MESSAGE_MARKER."""
        return cls(
            message_format=os.environ.get(
                "CLIENTLOG_MESSAGE_FORMAT", PUBLISH_MESSAGE_FORMAT
            ),
            marker=os.environ.get("CLIENTLOG_MESSAGE_MARKER", MESSAGE_MARKER),
        )


class MessageLineParser:
    """Extracts message identifiers from client output lines and files."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self._offset = self.config.identifier_offset

    def parse_line(self, line: str, line_number: Optional[int] = None) -> int:
        """
        Parse the message identifier out of a single line.

        Args:
            line: Raw line, with or without its trailing newline
            line_number: 1-based line number, only used for error context

        Returns:
            The message identifier

        Raises:
            ParseError: If the line does not carry an identifier at the
                expected offset
        """
        context: Dict[str, Any] = {"line": line.rstrip("\r\n")}
        if line_number is not None:
            context["line_number"] = line_number

        if len(line) < self._offset:
            raise ParseError("Line is shorter than the message prefix", context)

        tokens = line[self._offset :].split(None, 1)
        if not tokens:
            raise ParseError("Missing message identifier", context)

        token = tokens[0]
        if not _IDENTIFIER_PATTERN.fullmatch(token):
            context["token"] = token
            raise ParseError("Message identifier is not a decimal integer", context)

        identifier = int(token)
        if not MIN_MESSAGE_ID <= identifier <= MAX_MESSAGE_ID:
            context["token"] = token
            raise ParseError("Message identifier does not fit in 64 bits", context)
        return identifier

    def iter_identifiers(self, path: PathLike) -> Iterator[Tuple[int, int]]:
        """
        Stream (line_index, identifier) pairs from a client output file.

        Reading stops at the first line that fails to parse. The file is
        closed on every exit path, including when the caller stops iterating
        early.

        Raises:
            LogFileNotFoundError: If the file does not exist
            LogReadError: If the file cannot be opened or read
            ParseError: If a line does not follow the message format
        """
        path_str = os.fspath(path)
        try:
            f = open(Path(path_str), "r", encoding=self.config.encoding)
        except FileNotFoundError as e:
            raise LogFileNotFoundError(
                "Client output file not found",
                context={"path": path_str},
                original_exception=e,
            ) from e
        except OSError as e:
            raise LogReadError(
                "Client output file cannot be opened",
                context={"path": path_str},
                original_exception=e,
            ) from e

        log_file_event(logger, "Reading client output", path_str)
        with f:
            line_index = 0
            while True:
                try:
                    line = f.readline()
                except (OSError, UnicodeDecodeError) as e:
                    raise LogReadError(
                        "Client output file cannot be read",
                        context={"path": path_str, "line_number": line_index + 1},
                        original_exception=e,
                    ) from e
                if not line:
                    break
                try:
                    identifier = self.parse_line(line, line_number=line_index + 1)
                except ParseError as e:
                    e.add_context("path", path_str)
                    raise
                yield line_index, identifier
                line_index += 1
        log_debug_operation(logger, "Finished reading client output", path_str)
