"""HTTP client for the chat-completions backend.

Forwards already-sanitized request bodies byte for byte; no format conversion
happens here.
"""

import logging
import time

import httpx

logger = logging.getLogger(__name__)


class UpstreamHTTPError(Exception):
    """The backend answered a streaming request with an error status.

    Attributes:
        status_code: The backend's HTTP status
        body: The backend's raw response body
        content_type: The backend's content-type header, if any
    """

    def __init__(self, status_code: int, body: bytes, content_type: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.content_type = content_type
        super().__init__(f"Upstream returned HTTP {status_code}")


class UpstreamClient:
    """Async client for a single OpenAI-compatible backend."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 90,
        connect_timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            transport=transport,
        )

    @classmethod
    def from_config(cls) -> "UpstreamClient":
        from src.core.config import config

        return cls(
            base_url=config.upstream_base_url,
            api_key=config.upstream_api_key,
            timeout=config.request_timeout,
            connect_timeout=config.streaming_connect_timeout,
        )

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self, authorization: str | None) -> dict[str, str]:
        headers = {"content-type": "application/json"}
        if self.api_key:
            headers["authorization"] = f"Bearer {self.api_key}"
        elif authorization:
            headers["authorization"] = authorization
        return headers

    async def create_chat_completion(
        self, body: bytes, authorization: str | None = None
    ) -> httpx.Response:
        """Send a non-streaming chat completion and return the raw response.

        Error statuses are returned, not raised; the caller relays them.

        Raises:
            httpx.HTTPError: On transport failures and timeouts.
        """
        start_time = time.time()
        response = await self.client.post(
            self.chat_completions_url, content=body, headers=self._headers(authorization)
        )
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Upstream response: status={response.status_code} duration={duration_ms:.0f}ms")
        return response

    async def open_chat_completion_stream(
        self, body: bytes, authorization: str | None = None
    ) -> httpx.Response:
        """Start a streaming chat completion.

        The returned response is open; the caller must iterate and
        ``aclose()`` it. Streams have no read timeout, only a connect timeout.

        Raises:
            UpstreamHTTPError: If the backend answers with a 4xx/5xx status.
            httpx.HTTPError: On transport failures and timeouts.
        """
        request = self.client.build_request(
            "POST",
            self.chat_completions_url,
            content=body,
            headers=self._headers(authorization),
            timeout=httpx.Timeout(None, connect=self.connect_timeout),
        )
        response = await self.client.send(request, stream=True)
        if response.status_code >= 400:
            try:
                await response.aread()
            finally:
                await response.aclose()
            raise UpstreamHTTPError(
                response.status_code, response.content, response.headers.get("content-type")
            )
        return response

    async def aclose(self) -> None:
        await self.client.aclose()
