"""Logging setup for the proxy.

Modules log through ``logging.getLogger(__name__)``; ``configure_root_logging``
installs the shared handler once at process start.
"""

from src.core.logging.configuration import (
    NOISY_HTTP_LOGGERS,
    configure_root_logging,
    correlation_context,
    set_noisy_http_logger_levels,
)

__all__ = [
    "NOISY_HTTP_LOGGERS",
    "configure_root_logging",
    "correlation_context",
    "set_noisy_http_logger_levels",
]
