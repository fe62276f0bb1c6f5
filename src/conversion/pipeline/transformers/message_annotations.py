"""Message annotation transformer.

Strips cache/metadata annotations from messages and their nested segments.
"""

from typing import Any

from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


def _without_cache_control(item: Any) -> tuple[Any, int]:
    if isinstance(item, dict) and "cache_control" in item:
        return {k: v for k, v in item.items() if k != "cache_control"}, 1
    return item, 0


class MessageAnnotationTransformer(RequestTransformer):
    """Removes ``cache_control`` and ``name`` annotations from messages.

    Walks three levels and no deeper:
    1. the message itself (``cache_control`` and ``name``)
    2. each segment of array content (``cache_control``)
    3. each item of a segment's own array content, as found in tool_result
       wrappers (``cache_control``)
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        messages = context.request.get("messages")
        if not isinstance(messages, list):
            return context

        removed = 0
        new_messages = []
        for message in messages:
            new_message, count = self._sanitize_message(message)
            new_messages.append(new_message)
            removed += count

        if not removed:
            return context

        return context.with_request({**context.request, "messages": new_messages}, removed=removed)

    def _sanitize_message(self, message: Any) -> tuple[Any, int]:
        if not isinstance(message, dict):
            return message, 0

        removed = sum(1 for field in Constants.UNSUPPORTED_MESSAGE_FIELDS if field in message)
        new_message = {
            k: v for k, v in message.items() if k not in Constants.UNSUPPORTED_MESSAGE_FIELDS
        }

        content = message.get("content")
        if isinstance(content, list):
            new_content = []
            for segment in content:
                segment, count = _without_cache_control(segment)
                removed += count
                if isinstance(segment, dict) and isinstance(segment.get("content"), list):
                    inner_items = []
                    inner_removed = 0
                    for inner in segment["content"]:
                        inner, count = _without_cache_control(inner)
                        inner_items.append(inner)
                        inner_removed += count
                    if inner_removed:
                        segment = {**segment, "content": inner_items}
                        removed += inner_removed
                new_content.append(segment)
            new_message["content"] = new_content

        return new_message, removed
