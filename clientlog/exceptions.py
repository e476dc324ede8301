"""Exceptions for clientlog with contextual information."""

from typing import Any, Dict, Optional


class ClientLogError(Exception):
    """Base error for clientlog with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[BaseException] = None,
    ):
        """
        Initialize a clientlog error.

        Args:
            message: Error message
            context: Optional context information (path, line_number, line, operation, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """Get string representation with context."""
        base_msg = self.message
        if self.context:
            context_items = []
            for key, value in self.context.items():
                if isinstance(value, str) and len(value) > 50:
                    # Truncate long values
                    value = value[:47] + "..."
                context_items.append(f"{key}={value}")
            context_str = ", ".join(context_items)
            return f"{base_msg} (Context: {context_str})"
        return base_msg

    def __repr__(self) -> str:
        base_repr = f"{type(self).__name__}({self.message!r})"
        if self.context:
            return f"{base_repr} (context={self.context!r})"
        return base_repr

    def add_context(self, key: str, value: Any) -> None:
        """
        Add context information to the exception.

        Args:
            key: Context key
            value: Context value
        """
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """
        Get context information from the exception.

        Args:
            key: Context key
            default: Default value if key not found

        Returns:
            Context value or default
        """
        return self.context.get(key, default)


class LogFileNotFoundError(ClientLogError, FileNotFoundError):
    """The client output file does not exist."""

    pass


class LogReadError(ClientLogError, OSError):
    """I/O failure while reading the client output file."""

    pass


class ParseError(ClientLogError, ValueError):
    """A line does not follow the publish message format."""

    pass
