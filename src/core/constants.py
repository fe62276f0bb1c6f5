class Constants:
    ROLE_USER = "user"
    ROLE_ASSISTANT = "assistant"
    ROLE_SYSTEM = "system"
    ROLE_TOOL = "tool"

    CONTENT_TEXT = "text"
    CONTENT_TOOL_USE = "tool_use"
    CONTENT_TOOL_RESULT = "tool_result"

    TOOL_FUNCTION = "function"
    TOOL_CHOICE_AUTO = "auto"

    FINISH_STOP = "stop"
    FINISH_LENGTH = "length"
    FINISH_TOOL_CALLS = "tool_calls"
    FINISH_CONTENT_FILTER = "content_filter"

    SSE_DATA_PREFIX = "data:"
    SSE_DONE = "[DONE]"

    # Placeholder for assistant messages that carry tool_calls but no text;
    # the backend rejects null or empty content on such messages.
    EMPTY_CONTENT_PLACEHOLDER = " "
    EMPTY_TOOL_RESULT = "{}"

    SYSTEM_BLOCK_OPEN = "<system>\n"
    SYSTEM_BLOCK_CLOSE = "\n</system>\n\n"
    THINKING_MODEL_MARKER = "thinking"

    SANITIZED_PATH_MARKERS = ("/chat/completions", "/completions", "/responses", "/messages")

    UNSUPPORTED_ROOT_FIELDS = (
        "cache_control",
        "citations",
        "container",
        "metadata",
        "service_tier",
        "logprobs",
        "top_logprobs",
        "logit_bias",
        "parallel_tool_calls",
    )

    UNSUPPORTED_TOOL_CHOICE_VALUES = frozenset({"validated", "required"})
    AUTO_TOOL_CHOICE_TYPES = frozenset({"auto", "", "any"})
    FORCED_TOOL_CHOICE_TYPES = frozenset({"function", "tool"})

    UNSUPPORTED_SCHEMA_FIELDS = (
        "additionalProperties",
        "$schema",
        "pattern",
        "exclusiveMinimum",
        "exclusiveMaximum",
        "minItems",
        "maxItems",
        "minLength",
        "maxLength",
        "default",
        "format",
        "examples",
        "$id",
        "$ref",
        "$defs",
        "definitions",
        "allOf",
        "anyOf",
        "oneOf",
        "not",
        "if",
        "then",
        "else",
        "dependentSchemas",
        "dependentRequired",
        "propertyNames",
        "unevaluatedProperties",
        "unevaluatedItems",
        "contentMediaType",
        "contentEncoding",
    )

    UNSUPPORTED_MESSAGE_FIELDS = ("cache_control", "name")
