"""Message content transformer.

Collapses array-of-text-segment message content into a single string.
"""

from src.conversion.content import ContentKind, content_kind, text_segments
from src.conversion.pipeline.base import RequestTransformer, SanitizeContext


class MessageContentTransformer(RequestTransformer):
    """Flattens array content into one display string.

    Text segments are concatenated with no separator. Messages with no text
    segment keep their array content. String content (including messages
    already converted by ToolCallTransformer) is left alone.
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        messages = context.request.get("messages")
        if not isinstance(messages, list):
            return context

        flattened = 0
        new_messages = []
        for message in messages:
            if isinstance(message, dict) and content_kind(message) == ContentKind.SEGMENTS:
                texts = text_segments(message["content"])
                if texts:
                    message = {**message, "content": "".join(texts)}
                    flattened += 1
            new_messages.append(message)

        if not flattened:
            return context

        return context.with_request(
            {**context.request, "messages": new_messages}, flattened=flattened
        )
