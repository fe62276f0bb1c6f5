"""Shape helpers shared by the request transformers.

Message content and tool definitions arrive in several dialect-specific shapes.
Rather than probing for fields ad hoc in every transformer, the shapes are
classified once into a small closed set of kinds and the transformers dispatch
on that kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from src.core.constants import Constants


class ContentKind(str, Enum):
    """Shape of a message's ``content`` value."""

    TEXT = "text"  # plain string
    SEGMENTS = "segments"  # list of typed segments
    ABSENT = "absent"  # missing or null
    OTHER = "other"  # anything else (object, number, ...)


class ToolStyle(str, Enum):
    """Shape of a tool definition in the ``tools`` array."""

    OPENAI = "openai"  # {"function": {"name", "parameters", ...}}
    ANTHROPIC = "anthropic"  # {"name", "input_schema"}
    UNKNOWN = "unknown"


def content_kind(message: dict[str, Any]) -> ContentKind:
    content = message.get("content")
    if content is None:
        return ContentKind.ABSENT
    if isinstance(content, str):
        return ContentKind.TEXT
    if isinstance(content, list):
        return ContentKind.SEGMENTS
    return ContentKind.OTHER


def tool_style(tool: Any) -> ToolStyle:
    if not isinstance(tool, dict):
        return ToolStyle.UNKNOWN
    if "function" in tool:
        return ToolStyle.OPENAI if isinstance(tool["function"], dict) else ToolStyle.UNKNOWN
    if "input_schema" in tool:
        return ToolStyle.ANTHROPIC
    return ToolStyle.UNKNOWN


def is_segment(value: Any, segment_type: str) -> bool:
    return isinstance(value, dict) and value.get("type") == segment_type


def text_segments(segments: list[Any]) -> list[str]:
    """Return the non-empty texts of ``type: "text"`` segments, in order."""
    texts = []
    for segment in segments:
        if not is_segment(segment, Constants.CONTENT_TEXT):
            continue
        text = segment.get("text")
        if isinstance(text, str) and text:
            texts.append(text)
    return texts


def extract_text(content: Any) -> str:
    """Extract plain text from a heterogeneous content value.

    - str: returned unchanged
    - list: texts of ``type: "text"`` segments joined with a newline;
      other segment types are ignored
    - dict: its ``text`` field, if present
    - anything else: empty string
    """
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        return "\n".join(text_segments(content))

    if isinstance(content, dict) and "text" in content:
        text = content["text"]
        if text is None:
            return ""
        return text if isinstance(text, str) else str(text)

    return ""
