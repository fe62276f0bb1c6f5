"""Error type enumeration for the proxy.

Provides type-safe error categorization for error responses and logs.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories used in ``{"type": "error", "error": {...}}`` bodies."""

    # Upstream errors
    UPSTREAM_TIMEOUT = "upstream_timeout"  # Backend did not answer in time
    UPSTREAM_ERROR = "upstream_error"  # Transport failure talking to the backend
    UPSTREAM_HTTP_ERROR = "upstream_http_error"  # Backend answered with a 4xx/5xx

    # Streaming errors
    STREAMING_ERROR = "streaming_error"  # Stream broke after headers were sent
