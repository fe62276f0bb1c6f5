import json
import logging
import uuid
from typing import Any

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from src.api.services.error_handling import ErrorResponseBuilder
from src.api.services.streaming import relay_upstream_stream, streaming_response
from src.core.logging import correlation_context
from src.core.upstream_client import UpstreamClient, UpstreamHTTPError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_upstream_client(http_request: Request) -> UpstreamClient:
    return http_request.app.state.upstream_client


def _wants_stream(body: bytes) -> bool:
    # The body is forwarded as is even when it is not JSON; only the stream flag matters here.
    try:
        document: Any = json.loads(body)
    except ValueError:
        return False
    return isinstance(document, dict) and document.get("stream") is True


def _relay_response(upstream: httpx.Response) -> Response:
    content_type = upstream.headers.get("content-type", "application/json")
    if upstream.status_code >= 400 and "json" not in content_type:
        return ErrorResponseBuilder.upstream_http_error(upstream.status_code, upstream.content)
    return Response(
        content=upstream.content, status_code=upstream.status_code, media_type=content_type
    )


async def forward_chat_request(http_request: Request) -> Response:
    """Forward a (sanitized) chat request body to the backend.

    The body was already rewritten by RequestSanitizeMiddleware; it is sent
    upstream byte for byte. Streaming replies are relayed through the
    finish-reason deduplicator.
    """
    request_id = str(uuid.uuid4())
    client = get_upstream_client(http_request)
    authorization = http_request.headers.get("authorization")

    with correlation_context(request_id):
        body = await http_request.body()

        stream = _wants_stream(body)
        logger.debug(
            f"Forwarding {http_request.url.path} stream={stream} size={len(body):,} bytes"
        )

        if not stream:
            try:
                upstream = await client.create_chat_completion(body, authorization)
            except httpx.HTTPError as e:
                logger.error(f"Upstream request failed: {e}")
                return ErrorResponseBuilder.upstream_error(e, "forwarding chat request")
            return _relay_response(upstream)

        try:
            upstream = await client.open_chat_completion_stream(body, authorization)
        except UpstreamHTTPError as e:
            logger.warning(f"Upstream rejected streaming request: HTTP {e.status_code}")
            if e.content_type and "json" in e.content_type:
                return Response(content=e.body, status_code=e.status_code, media_type=e.content_type)
            return ErrorResponseBuilder.upstream_http_error(e.status_code, e.body)
        except httpx.HTTPError as e:
            logger.error(f"Upstream stream could not be opened: {e}")
            return ErrorResponseBuilder.upstream_error(e, "opening stream")

        return streaming_response(stream=relay_upstream_stream(upstream))


@router.post("/v1/chat/completions", response_model=None)
async def chat_completions(http_request: Request) -> Response:
    return await forward_chat_request(http_request)


@router.post("/v1/messages", response_model=None)
async def create_message(http_request: Request) -> Response:
    return await forward_chat_request(http_request)


@router.get("/health")
async def health_check(http_request: Request) -> JSONResponse:
    from src.core.config import config

    client = get_upstream_client(http_request)
    return JSONResponse(
        content={
            "status": "healthy",
            "upstream": client.base_url,
            "sanitize_enabled": config.sanitize_enabled,
        }
    )
