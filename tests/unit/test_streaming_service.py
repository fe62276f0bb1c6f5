import json

import httpx
import pytest

from src.api.services.streaming import relay_upstream_stream, sse_headers, streaming_response


class FakeUpstreamResponse:
    """Stands in for an open httpx streaming response."""

    def __init__(self, lines, error=None):
        self.lines = lines
        self.error = error
        self.closed = False

    async def aiter_lines(self):
        for line in self.lines:
            yield line
        if self.error is not None:
            raise self.error

    async def aclose(self):
        self.closed = True


async def relay(response):
    return [line async for line in relay_upstream_stream(response)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_relay_dedupes_and_closes_upstream(streaming_tool_call_with_duplicate_stop):
    response = FakeUpstreamResponse(streaming_tool_call_with_duplicate_stop.split("\n"))

    out = "".join(await relay(response))

    assert response.closed
    assert '"finish_reason": "stop"' not in out
    assert out.count('"finish_reason": "tool_calls"') == 1
    assert out.count("data: [DONE]") == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_relay_reports_transport_failure_as_sse_error():
    response = FakeUpstreamResponse(
        ['data: {"choices": [{"index": 0, "delta": {"content": "hi"}}]}', ""],
        error=httpx.ReadError("connection reset"),
    )

    out = await relay(response)

    assert response.closed
    error_event = out[-1]
    assert error_event.startswith("data: ")
    payload = json.loads(error_event[len("data: ") :])
    assert payload["type"] == "error"
    assert payload["error"]["type"] == "streaming_error"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_relay_closes_upstream_when_consumer_stops_early():
    response = FakeUpstreamResponse(['data: {"choices": []}', "", "data: [DONE]", ""])

    stream = relay_upstream_stream(response)
    first = await stream.__anext__()
    await stream.aclose()

    assert first == 'data: {"choices": []}\n'
    assert response.closed


@pytest.mark.unit
def test_streaming_response_uses_sse_contract():
    async def gen():
        yield "data: [DONE]\n\n"

    response = streaming_response(stream=gen())

    assert response.media_type == "text/event-stream"
    assert response.headers["cache-control"] == "no-cache"
    assert sse_headers()["Connection"] == "keep-alive"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_relay_error_event_is_not_merged_into_cut_off_event():
    data = 'data: {"choices": [{"index": 0, "delta": {"content": "partial"}}]}'
    response = FakeUpstreamResponse([data], error=httpx.RemoteProtocolError("peer closed"))

    out = "".join(await relay(response))

    events = [event for event in out.split("\n\n") if event.strip()]
    assert events[0] == data
    assert json.loads(events[1][len("data: ") :])["error"]["type"] == "streaming_error"
