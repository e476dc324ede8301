"""Explicit success/failure results for file-level scans."""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .exceptions import ClientLogError

T = TypeVar("T")


@dataclass(frozen=True)
class ScanResult(Generic[T]):
    """
    Outcome of reading a client output file.

    A failed scan carries the error instead of a default value, so a missing
    file can never be mistaken for a file with nothing to report.
    """

    path: str
    success: bool
    value: Optional[T] = None
    error: Optional[ClientLogError] = None

    @classmethod
    def ok(cls, path: str, value: T) -> "ScanResult[T]":
        return cls(path=path, success=True, value=value)

    @classmethod
    def failed(cls, path: str, error: ClientLogError) -> "ScanResult[Any]":
        return cls(path=path, success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, or re-raise the error of a failed scan."""
        if not self.success:
            assert self.error is not None
            raise self.error
        return self.value  # type: ignore[return-value]
