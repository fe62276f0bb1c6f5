"""Tool choice transformer.

Maps dialect-specific tool_choice values to the backend's vocabulary.
"""

from typing import Any

from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


class ToolChoiceTransformer(RequestTransformer):
    """Normalizes tool_choice to what the backend understands.

    String values:
    - "required", "validated": not understood, rewritten to "auto"
    - anything else: passed through

    Object values:
    - {"type": "auto" | "any"} or no type: rewritten to "auto"
    - {"type": "function" | "tool", ...}: a forced single-tool selection the
      backend cannot express; the field is dropped rather than guessed at,
      so forced-tool semantics are lost on this path
    - any other type: passed through
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        if "tool_choice" not in context.request:
            return context

        tool_choice = context.request["tool_choice"]

        if isinstance(tool_choice, str):
            if tool_choice in Constants.UNSUPPORTED_TOOL_CHOICE_VALUES:
                return self._replace(context, Constants.TOOL_CHOICE_AUTO)
            return context

        if isinstance(tool_choice, dict):
            choice_type = self._choice_type(tool_choice)
            if choice_type in Constants.AUTO_TOOL_CHOICE_TYPES:
                return self._replace(context, Constants.TOOL_CHOICE_AUTO)
            if choice_type in Constants.FORCED_TOOL_CHOICE_TYPES:
                new_request = {k: v for k, v in context.request.items() if k != "tool_choice"}
                return context.with_request(new_request, removed=1)

        return context

    @staticmethod
    def _choice_type(tool_choice: dict[str, Any]) -> str:
        choice_type = tool_choice.get("type")
        if choice_type is None:
            return ""
        return choice_type if isinstance(choice_type, str) else str(choice_type)

    @staticmethod
    def _replace(context: SanitizeContext, value: str) -> SanitizeContext:
        return context.with_request({**context.request, "tool_choice": value}, removed=1)
