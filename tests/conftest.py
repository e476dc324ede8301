import logging
from pathlib import Path
from typing import Callable, Iterable, List

import pytest

from clientlog.parser import format_publish_message


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "property: property-based tests driven by hypothesis"
    )


@pytest.fixture
def write_log(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a client output file in the publish format."""

    def _write(
        identifiers: Iterable[int] = (),
        extra_lines: Iterable[str] = (),
        name: str = "client.log",
    ) -> Path:
        path = tmp_path / name
        lines: List[str] = [
            format_publish_message(identifier, thread_id=1)
            for identifier in identifiers
        ]
        lines.extend(extra_lines)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def append_log() -> Callable[[Path, Iterable[str]], None]:
    def _append(path: Path, lines: Iterable[str]) -> None:
        with open(path, "a", encoding="utf-8") as f:
            for line in lines:
                f.write(f"{line}\n")

    return _append


@pytest.fixture
def preserve_root_logger():
    """Drop handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
