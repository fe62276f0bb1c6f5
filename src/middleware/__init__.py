"""HTTP middleware for the proxy."""

from src.middleware.request_sanitize import RequestSanitizeMiddleware, should_sanitize_path

__all__ = ["RequestSanitizeMiddleware", "should_sanitize_path"]
