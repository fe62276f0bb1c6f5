"""Empty assistant message transformer.

Repairs or drops assistant messages left without content.
"""

from typing import Any

from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


def _is_empty_content(message: dict[str, Any]) -> bool:
    content = message.get("content")
    return content is None or content == ""


class EmptyMessageTransformer(RequestTransformer):
    """Fixes assistant messages whose content is missing, null or "".

    - with ``tool_calls``: content becomes a single space
    - without ``tool_calls``: the message is dropped

    Each fix and each drop counts as one removal.
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        messages = context.request.get("messages")
        if not isinstance(messages, list):
            return context

        fixed = 0
        new_messages = []
        for message in messages:
            if (
                isinstance(message, dict)
                and message.get("role") == Constants.ROLE_ASSISTANT
                and _is_empty_content(message)
            ):
                fixed += 1
                if "tool_calls" not in message:
                    continue
                message = {**message, "content": Constants.EMPTY_CONTENT_PLACEHOLDER}
            new_messages.append(message)

        if not fixed:
            return context

        return context.with_request({**context.request, "messages": new_messages}, removed=fixed)
