"""Root logger configuration."""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from src.core.logging.filters.correlation import CorrelationIdFilter, correlation_id_var
from src.core.logging.filters.http import HttpRequestLogDowngradeFilter
from src.core.logging.formatters.correlation import CorrelationFormatter

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def resolve_log_level(raw_level: str) -> str:
    """Normalize a configured level, tolerating trailing comments ("INFO # prod")."""
    parts = raw_level.split()
    level = parts[0].upper() if parts else ""
    return level if level in VALID_LOG_LEVELS else "INFO"


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""

    noisy_level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for logger_name in NOISY_HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def configure_root_logging(log_level: str | None = None) -> str:
    """Install the shared stream handler on the root logger.

    Args:
        log_level: Level override; defaults to the configured LOG_LEVEL.

    Returns:
        The effective level name.
    """
    if log_level is None:
        from src.core.config import config

        log_level = config.log_level
    level = resolve_log_level(log_level)

    handler = logging.StreamHandler()
    handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))

    for uvicorn_logger in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(uvicorn_logger).setLevel(logging.WARNING)

    set_noisy_http_logger_levels(level)
    logger.debug(f"Logging configured at {level}")
    return level


@contextmanager
def correlation_context(request_id: str) -> Generator[None, None, None]:
    """Bind ``request_id`` to the current context for the duration of the block.

    Records emitted inside the block are stamped by CorrelationIdFilter. The
    binding is per task, so overlapping requests never see each other's id.
    """
    token = correlation_id_var.set(request_id)
    try:
        yield
    finally:
        correlation_id_var.reset(token)
