"""Terminal event deduplication for streamed chat completions.

Some upstreams send more than one finish signal per stream, typically a
``tool_calls`` finish followed by a bare ``stop`` chunk. Clients that take the
last finish reason then lose the tool call. This module guarantees at most one
finish reason per stream and exactly one ``[DONE]`` sentinel.

State Machine Overview:
    OPEN    - no finish reason emitted yet; chunks pass through, and the
              first chunk carrying a finish reason closes the stream
    CLOSED  - finish reasons are cleared; choices or chunks left with no
              other payload are dropped

One TerminalEventState exists per streamed response. It is created by the
streaming generator and discarded with it; it must never be shared across
responses.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, AsyncIterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.conversion.errors import SSEParseError
from src.core.constants import Constants

logger = logging.getLogger(__name__)

# Keys of a flat (choice-less) chunk that count as payload besides finish_reason.
_FLAT_PAYLOAD_KEYS = ("content", "delta", "tool_calls", "usage")


class StreamPhase(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class TerminalEventState:
    """Mutable per-stream state.

    Attributes:
        phase: OPEN until the first finish reason has been emitted.
        finish_reason: The finish reason that was emitted, if any.
        done_sent: Whether the ``[DONE]`` sentinel has been emitted.
        suppressed: Number of finish reasons cleared after CLOSED.
    """

    phase: StreamPhase = StreamPhase.OPEN
    finish_reason: str | None = None
    done_sent: bool = False
    suppressed: int = 0

    @property
    def terminal_sent(self) -> bool:
        return self.phase == StreamPhase.CLOSED

    def _close(self, finish_reason: str) -> None:
        self.phase = StreamPhase.CLOSED
        self.finish_reason = finish_reason


def _has_value(value: Any) -> bool:
    return value is not None and value != "" and value != [] and value != {}


def _choice_has_payload(choice: dict[str, Any]) -> bool:
    delta = choice.get("delta")
    if isinstance(delta, dict) and any(_has_value(v) for v in delta.values()):
        return True
    return _has_value(choice.get("message")) or _has_value(choice.get("logprobs"))


def _observe_choices(state: TerminalEventState, chunk: dict[str, Any]) -> dict[str, Any] | None:
    choices = chunk["choices"]
    new_choices = []
    changed = False

    for choice in choices:
        if not isinstance(choice, dict) or choice.get("finish_reason") is None:
            new_choices.append(choice)
            continue

        if not state.terminal_sent:
            state._close(choice["finish_reason"])
            new_choices.append(choice)
            continue

        state.suppressed += 1
        changed = True
        cleared = {**choice, "finish_reason": None}
        if _choice_has_payload(cleared):
            new_choices.append(cleared)

    if not changed:
        return chunk

    if not new_choices and not _has_value(chunk.get("usage")):
        return None

    return {**chunk, "choices": new_choices}


def _observe_flat(state: TerminalEventState, chunk: dict[str, Any]) -> dict[str, Any] | None:
    finish_reason = chunk.get("finish_reason")
    if finish_reason is None:
        return chunk

    if not state.terminal_sent:
        state._close(finish_reason)
        return chunk

    state.suppressed += 1
    if not any(_has_value(chunk.get(key)) for key in _FLAT_PAYLOAD_KEYS):
        return None
    return {**chunk, "finish_reason": None}


def observe_chunk(state: TerminalEventState, chunk: dict[str, Any]) -> dict[str, Any] | None:
    """Pass one outgoing chunk through the deduplicator.

    Accepts OpenAI ``chat.completion.chunk`` objects (finish reasons inside
    ``choices``) as well as flat objects with a top-level ``finish_reason``.
    The input chunk is never mutated.

    Args:
        state: The stream's state, updated in place.
        chunk: The parsed chunk.

    Returns:
        The chunk to emit (the input itself when unchanged), or None when the
        chunk should be dropped.
    """
    if isinstance(chunk.get("choices"), list):
        return _observe_choices(state, chunk)
    return _observe_flat(state, chunk)


def _sse_data(line: str) -> str | None:
    if not line.startswith(Constants.SSE_DATA_PREFIX):
        return None
    return line[len(Constants.SSE_DATA_PREFIX) :].strip()


def observe_sse_line(state: TerminalEventState, line: str) -> str | None:
    """Pass one SSE line through the deduplicator.

    Non-data lines (blank separators, comments, ``event:`` lines) are returned
    unchanged. Repeated ``[DONE]`` sentinels are dropped.

    Raises:
        SSEParseError: If a data line does not hold a JSON object.
    """
    data = _sse_data(line)
    if data is None:
        return line

    if data == Constants.SSE_DONE:
        if state.done_sent:
            return None
        state.done_sent = True
        return line

    try:
        chunk = json.loads(data)
    except json.JSONDecodeError as e:
        raise SSEParseError(
            "Failed to parse streaming chunk as JSON",
            context={"chunk_data": data, "json_error": str(e)},
        ) from e
    if not isinstance(chunk, dict):
        raise SSEParseError("Streaming chunk is not a JSON object", context={"chunk_data": data})

    result = observe_chunk(state, chunk)
    if result is None:
        return None
    if result is chunk:
        return line
    return f"data: {json.dumps(result, ensure_ascii=False)}"


def final_sse_lines(state: TerminalEventState) -> list[str]:
    """Lines to emit once the upstream stream has ended."""
    if state.done_sent:
        return []
    state.done_sent = True
    return [f"data: {Constants.SSE_DONE}"]


def _close_event(event_open: bool) -> str:
    return "\n" if event_open else ""


async def dedupe_openai_sse_stream(
    lines: AsyncIterable[str],
) -> AsyncGenerator[str, None]:
    """Relay upstream SSE lines with at most one finish reason and one [DONE].

    Yields newline-terminated lines ready for a text/event-stream response.
    Lines that cannot be parsed are forwarded unchanged. ``[DONE]`` is always
    emitted as its own event, even when the upstream left the previous event
    without its terminating blank line.
    """
    state = TerminalEventState()
    # True while a non-blank line has been written without a closing blank line.
    event_open = False

    async for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        try:
            out = observe_sse_line(state, line)
        except SSEParseError as e:
            logger.warning(f"{e.message}; forwarding line unchanged: {e.context}")
            out = line

        if state.done_sent:
            yield f"{_close_event(event_open)}{out}\n\n"
            break
        if out is not None:
            yield f"{out}\n"
            event_open = out != ""

    for line in final_sse_lines(state):
        yield f"{_close_event(event_open)}{line}\n\n"
        event_open = False

    if state.suppressed:
        logger.debug(
            f"Suppressed {state.suppressed} duplicate finish reason(s); "
            f"kept finish_reason={state.finish_reason}"
        )
