"""Request sanitization middleware.

Rewrites the body of chat/completion/message POST requests into the single
dialect the backend accepts before any route handler sees it.
"""

from __future__ import annotations

import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.conversion.request_sanitizer import sanitize_request_body
from src.core.constants import Constants

logger = logging.getLogger(__name__)


def should_sanitize_path(path: str) -> bool:
    return any(marker in path for marker in Constants.SANITIZED_PATH_MARKERS)


async def _read_body(receive: Receive) -> tuple[bytes, bool]:
    """Drain the request body.

    Returns:
        A tuple of (body, disconnected). ``disconnected`` is True when the
        client went away before the body was complete.
    """
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return b"".join(chunks), True
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            return b"".join(chunks), False


class RequestSanitizeMiddleware:
    """Pure ASGI middleware running the request sanitization pipeline.

    Only POST requests whose path looks like a chat, completion, responses or
    messages endpoint are touched. The sanitized body is replayed to the
    wrapped app and ``content-length`` is rewritten to match.
    """

    def __init__(self, app: ASGIApp, enabled: bool | None = None) -> None:
        """Wrap ``app``.

        Args:
            app: The downstream ASGI app.
            enabled: Force sanitization on or off; defaults to SANITIZE_ENABLED.
        """
        self.app = app
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        from src.core.config import config

        return config.sanitize_enabled

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope.get("method") != "POST"
            or not should_sanitize_path(scope.get("path", ""))
            or not self.enabled
        ):
            await self.app(scope, receive, send)
            return

        body, disconnected = await _read_body(receive)
        if disconnected:
            logger.debug(f"Client disconnected before body was read: path={scope.get('path')}")
            return

        sanitized, stats = sanitize_request_body(body)

        if stats.total_removed > 0:
            logger.debug(
                f"request_sanitized: path={scope.get('path')} removed={stats.total_removed} "
                f"flattened={stats.flattened_messages} merged_system={stats.merged_system}"
            )

        if sanitized is not body:
            headers = [
                (name, value)
                for name, value in scope.get("headers", [])
                if name.lower() != b"content-length"
            ]
            headers.append((b"content-length", str(len(sanitized)).encode("latin-1")))
            scope = {**scope, "headers": headers}

        await self.app(scope, _replay(sanitized, receive), send)


def _replay(body: bytes, receive: Receive) -> Receive:
    """Build a receive callable that yields ``body`` once, then defers to ``receive``."""
    sent = False

    async def replay_receive() -> Message:
        nonlocal sent
        if sent:
            return await receive()
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return replay_receive
