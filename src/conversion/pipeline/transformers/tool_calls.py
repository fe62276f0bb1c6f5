"""Tool call dialect transformer.

Rewrites Anthropic-style tool_use / tool_result content blocks into
OpenAI-style tool_calls and role "tool" messages.
"""

import json
from typing import Any

from src.conversion.content import extract_text, is_segment, text_segments
from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


def tool_use_to_tool_call(segment: dict[str, Any]) -> dict[str, Any]:
    """Build an OpenAI tool call from an Anthropic tool_use segment.

    ``arguments`` is the compact JSON encoding of the segment's ``input``.
    """
    tool_input = segment.get("input")
    arguments = (
        Constants.EMPTY_TOOL_RESULT
        if tool_input is None
        else json.dumps(tool_input, ensure_ascii=False, separators=(",", ":"))
    )
    return {
        "id": segment.get("id", ""),
        "type": Constants.TOOL_FUNCTION,
        Constants.TOOL_FUNCTION: {
            "name": segment.get("name", ""),
            "arguments": arguments,
        },
    }


class ToolCallTransformer(RequestTransformer):
    """Converts tool_use and tool_result blocks to the OpenAI dialect.

    Assistant messages with array content:
    - text segments are joined with newlines into ``content``
    - each tool_use segment becomes one entry of ``tool_calls``, in order
    - ``content`` falls back to a single space when there is no text, since
      the backend rejects empty content on tool-call messages

    User messages with array content containing a tool_result:
    - only the first tool_result is kept; the message becomes role "tool"
      with ``tool_call_id`` and the result's text as content ("{}" if empty)

    Messages without tool blocks are left untouched.
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        messages = context.request.get("messages")
        if not isinstance(messages, list):
            return context

        converted = 0
        new_messages = []
        for message in messages:
            new_message = self._convert_message(message)
            if new_message is not message:
                converted += 1
            new_messages.append(new_message)

        if not converted:
            return context

        return context.with_request(
            {**context.request, "messages": new_messages}, removed=converted
        )

    def _convert_message(self, message: Any) -> Any:
        if not isinstance(message, dict) or not isinstance(message.get("content"), list):
            return message

        role = message.get("role")
        if role == Constants.ROLE_ASSISTANT:
            return self._convert_assistant(message)
        if role == Constants.ROLE_USER:
            return self._convert_tool_result(message)
        return message

    def _convert_assistant(self, message: dict[str, Any]) -> dict[str, Any]:
        segments = message["content"]
        tool_calls = [
            tool_use_to_tool_call(segment)
            for segment in segments
            if is_segment(segment, Constants.CONTENT_TOOL_USE)
        ]
        if not tool_calls:
            return message

        content = "\n".join(text_segments(segments)) or Constants.EMPTY_CONTENT_PLACEHOLDER
        return {**message, "content": content, "tool_calls": tool_calls}

    def _convert_tool_result(self, message: dict[str, Any]) -> dict[str, Any]:
        for segment in message["content"]:
            if not is_segment(segment, Constants.CONTENT_TOOL_RESULT):
                continue

            tool_use_id = segment.get("tool_use_id")
            result_text = extract_text(segment.get("content")) or Constants.EMPTY_TOOL_RESULT
            return {
                **message,
                "role": Constants.ROLE_TOOL,
                "tool_call_id": "" if tool_use_id is None else str(tool_use_id),
                "content": result_text,
            }

        return message
