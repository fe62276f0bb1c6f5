"""Conversion error types."""

from typing import Any


class ConversionError(Exception):
    """Base error for request/response conversion failures.

    Attributes:
        message: Human-readable error message
        context: Extra details for logging (never sent to clients)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class SSEParseError(ConversionError):
    """An upstream server-sent event could not be parsed."""
