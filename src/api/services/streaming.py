from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

import httpx
from fastapi.responses import StreamingResponse

from src.api.services.error_handling import sse_error_event
from src.conversion.stream_dedup import dedupe_openai_sse_stream
from src.core.error_types import ErrorType

logger = logging.getLogger(__name__)


def sse_headers() -> dict[str, str]:
    # Centralize the SSE header contract used throughout the proxy.
    return {
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "*",
    }


def streaming_response(
    *,
    stream: AsyncGenerator[str, None],
    headers: dict[str, str] | None = None,
) -> StreamingResponse:
    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers=headers or sse_headers(),
    )


async def relay_upstream_stream(response: httpx.Response) -> AsyncGenerator[str, None]:
    """Relay an open upstream SSE response through the finish-reason deduplicator.

    The upstream response is always closed when the relay ends, whether the
    stream completed, failed, or the client went away.
    """
    try:
        async for line in dedupe_openai_sse_stream(response.aiter_lines()):
            yield line
    except httpx.HTTPError as e:
        logger.error(f"Upstream stream failed: {e}")
        # The failure may have cut an event short; terminate it first.
        yield "\n"
        yield sse_error_event(ErrorType.STREAMING_ERROR, f"Upstream stream failed: {e}")
    finally:
        await response.aclose()
