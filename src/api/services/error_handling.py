"""Error response building for API endpoints.

Every error the proxy produces itself uses the same body shape:

    {
        "type": "error",
        "error": {
            "type": "<error_type>",
            "message": "<error_message>"
        }
    }
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi.responses import JSONResponse

from src.core.error_types import ErrorType

logger = logging.getLogger(__name__)


def error_body(error_type: ErrorType, message: str, details: Any | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"type": "error", "error": {"type": error_type.value, "message": message}}
    if details is not None:
        body["error"]["details"] = details
    return body


def sse_error_event(error_type: ErrorType, message: str) -> str:
    """Format an error as a single SSE data event."""
    return f"data: {json.dumps(error_body(error_type, message), ensure_ascii=False)}\n\n"


@dataclass(frozen=True, slots=True)
class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across endpoints."""

    @staticmethod
    def upstream_error(exception: Exception, context: str | None = None) -> JSONResponse:
        """Build a 502 Bad Gateway or 504 Gateway Timeout error response.

        Automatically detects timeout errors and returns the matching status.

        Args:
            exception: The upstream exception
            context: Optional context about what operation failed
        """
        if isinstance(exception, httpx.TimeoutException):
            message = "Upstream request timed out"
            if context:
                message += f" while {context}"
            message += ". Consider increasing REQUEST_TIMEOUT."
            return JSONResponse(
                status_code=504, content=error_body(ErrorType.UPSTREAM_TIMEOUT, message)
            )

        message = "Upstream service error"
        if context:
            message += f" while {context}"
        return JSONResponse(
            status_code=502,
            content=error_body(ErrorType.UPSTREAM_ERROR, message, details=str(exception)),
        )

    @staticmethod
    def upstream_http_error(status_code: int, body: bytes) -> JSONResponse:
        """Wrap a non-JSON upstream error body so clients always receive JSON."""
        text = body.decode("utf-8", errors="replace")
        return JSONResponse(
            status_code=status_code,
            content=error_body(
                ErrorType.UPSTREAM_HTTP_ERROR, f"Upstream returned HTTP {status_code}", text
            ),
        )
