"""Request sanitization entry points.

Parses a request body once, runs the default transformer pipeline over it and
serializes the result once. Malformed input is returned untouched.
"""

import json
import logging
from typing import Any

from src.conversion.pipeline import RequestPipeline, RequestPipelineFactory, SanitizeContext
from src.conversion.pipeline.base import SanitizeStats

logger = logging.getLogger(__name__)

_default_pipeline: RequestPipeline | None = None


def _get_default_pipeline() -> RequestPipeline:
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = RequestPipelineFactory.create_default()
    return _default_pipeline


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not valid JSON.
    raise ValueError(f"Invalid JSON constant: {name}")


def sanitize_request(
    request: dict[str, Any], pipeline: RequestPipeline | None = None
) -> tuple[dict[str, Any], SanitizeStats]:
    """Sanitize an already-parsed request document.

    The input document is not modified.

    Args:
        request: The parsed request body.
        pipeline: Optional pipeline override; defaults to the standard pipeline.

    Returns:
        A tuple of (sanitized document, change statistics).
    """
    pipeline = pipeline or _get_default_pipeline()
    context = pipeline.execute(SanitizeContext(request=request))
    return context.request, context.stats


def sanitize_request_body(
    body: bytes, pipeline: RequestPipeline | None = None
) -> tuple[bytes, SanitizeStats]:
    """Sanitize a raw JSON request body.

    Fails open: an empty body, a body that is not valid UTF-8 JSON, or a JSON
    value that is not an object is returned unchanged with zero stats. When no
    transformer changed anything, the original bytes are returned as is.

    Args:
        body: The raw request body.
        pipeline: Optional pipeline override; defaults to the standard pipeline.

    Returns:
        A tuple of (body to forward, change statistics).
    """
    if not body:
        return body, SanitizeStats()

    try:
        request = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        logger.debug(f"Skipping sanitization of non-JSON body: {e}")
        return body, SanitizeStats()

    if not isinstance(request, dict):
        return body, SanitizeStats()

    sanitized, stats = sanitize_request(request, pipeline)
    if not stats.changed:
        return body, stats

    return json.dumps(sanitized, ensure_ascii=False, separators=(",", ":")).encode("utf-8"), stats
