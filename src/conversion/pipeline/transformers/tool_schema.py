"""Tool schema transformer.

Prunes JSON-Schema keywords the backend rejects from tool parameter schemas.
"""

from typing import Any

from src.conversion.content import ToolStyle, tool_style
from src.conversion.pipeline.base import RequestTransformer, SanitizeContext
from src.core.constants import Constants


def prune_schema(
    schema: Any, denylist: tuple[str, ...] = Constants.UNSUPPORTED_SCHEMA_FIELDS
) -> tuple[Any, int]:
    """Recursively remove denylisted keywords from a JSON-Schema subtree.

    Recurses into every child of ``properties`` and into ``items`` when it is a
    single schema object. Array-form ``items`` (tuple validation) is left as is.

    Args:
        schema: The schema subtree. Non-dict values are returned unchanged.
        denylist: Keywords to delete at each visited level.

    Returns:
        A tuple of (pruned copy of the schema, number of keywords removed).
    """
    if not isinstance(schema, dict):
        return schema, 0

    removed = sum(1 for keyword in denylist if keyword in schema)
    pruned = {k: v for k, v in schema.items() if k not in denylist}

    properties = pruned.get("properties")
    if isinstance(properties, dict):
        new_properties = {}
        for prop_name, prop_schema in properties.items():
            new_properties[prop_name], count = prune_schema(prop_schema, denylist)
            removed += count
        pruned["properties"] = new_properties

    items = pruned.get("items")
    if isinstance(items, dict):
        pruned["items"], count = prune_schema(items, denylist)
        removed += count

    return pruned, removed


class ToolSchemaTransformer(RequestTransformer):
    """Prunes tool parameter schemas for both tool dialects.

    OpenAI style tools have ``function.parameters`` and/or
    ``function.input_schema`` pruned, and ``function.strict`` removed.
    Anthropic style tools have their bare ``input_schema`` pruned.
    """

    def transform(self, context: SanitizeContext) -> SanitizeContext:
        tools = context.request.get("tools")
        if not isinstance(tools, list):
            return context

        removed = 0
        new_tools = []
        for tool in tools:
            style = tool_style(tool)
            if style == ToolStyle.OPENAI:
                tool, count = self._sanitize_openai_tool(tool)
            elif style == ToolStyle.ANTHROPIC:
                tool, count = self._sanitize_anthropic_tool(tool)
            else:
                count = 0
            new_tools.append(tool)
            removed += count

        if not removed:
            return context

        return context.with_request({**context.request, "tools": new_tools}, removed=removed)

    def _sanitize_openai_tool(self, tool: dict[str, Any]) -> tuple[dict[str, Any], int]:
        function = {k: v for k, v in tool["function"].items() if k != "strict"}
        removed = 1 if "strict" in tool["function"] else 0

        for schema_key in ("parameters", "input_schema"):
            if schema_key in function:
                function[schema_key], count = prune_schema(function[schema_key])
                removed += count

        return {**tool, "function": function}, removed

    def _sanitize_anthropic_tool(self, tool: dict[str, Any]) -> tuple[dict[str, Any], int]:
        input_schema, removed = prune_schema(tool["input_schema"])
        return {**tool, "input_schema": input_schema}, removed
