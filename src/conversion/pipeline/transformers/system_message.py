"""System message transformers.

Relocates the top-level system field for models that reject it, and strips
cache annotations from whatever system field remains.
"""

from typing import Any

from src.conversion.content import ContentKind, content_kind, is_segment
from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


class SystemMessageTransformer(RequestTransformer):
    """Merges the system field into the first user message.

    Only applies to "thinking" models, which reject a separate system field.
    The system text is wrapped in ``<system>`` markers and prepended to the
    first user message. The system field is always dropped once this
    transformer applies, even when there is no user message to receive it.
    """

    def __init__(self, model_marker: str = Constants.THINKING_MODEL_MARKER) -> None:
        self.model_marker = model_marker

    def applies_to(self, model: Any) -> bool:
        return isinstance(model, str) and self.model_marker in model.lower()

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        request = context.request
        if not self.applies_to(request.get("model")) or "system" not in request:
            return context

        new_request = {k: v for k, v in request.items() if k != "system"}
        system_text = self._extract_system_text(request["system"])

        messages = request.get("messages")
        if system_text and isinstance(messages, list):
            new_messages = self._prepend_to_first_user(messages, system_text)
            if new_messages is not None:
                new_request["messages"] = new_messages

        return context.with_request(new_request, removed=1, merged_system=True)

    def _extract_system_text(self, system: Any) -> str:
        """Extract text content from the system field.

        Args:
            system: The system field (str, list of blocks/strings, or other).

        Returns:
            Extracted text content as a string.
        """
        if isinstance(system, str):
            return system

        if not isinstance(system, list):
            return ""

        text_parts = []
        for block in system:
            if is_segment(block, Constants.CONTENT_TEXT):
                text = block.get("text")
                if isinstance(text, str) and text:
                    text_parts.append(text)
            elif isinstance(block, str):
                text_parts.append(block)

        return "\n".join(text_parts)

    def _prepend_to_first_user(
        self, messages: list[Any], system_text: str
    ) -> list[Any] | None:
        for i, message in enumerate(messages):
            if not isinstance(message, dict) or message.get("role") != Constants.ROLE_USER:
                continue

            kind = content_kind(message)
            if kind == ContentKind.TEXT:
                base = message["content"]
            elif kind == ContentKind.SEGMENTS:
                base = "".join(
                    str(segment.get("text") or "")
                    for segment in message["content"]
                    if is_segment(segment, Constants.CONTENT_TEXT)
                )
            else:
                return None

            merged = Constants.SYSTEM_BLOCK_OPEN + system_text + Constants.SYSTEM_BLOCK_CLOSE + base
            return [*messages[:i], {**message, "content": merged}, *messages[i + 1 :]]

        return None


class SystemAnnotationTransformer(RequestTransformer):
    """Removes ``cache_control`` from the blocks of a list-valued system field."""

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        system = context.request.get("system")
        if not isinstance(system, list):
            return context

        removed = 0
        new_system = []
        for block in system:
            if isinstance(block, dict) and "cache_control" in block:
                block = {k: v for k, v in block.items() if k != "cache_control"}
                removed += 1
            new_system.append(block)

        if not removed:
            return context

        return context.with_request({**context.request, "system": new_system}, removed=removed)
