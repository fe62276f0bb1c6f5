"""Unit tests for tool_use/tool_result dialect conversion."""

import copy

from src.conversion.pipeline import SanitizeContext
from src.conversion.pipeline.transformers import ToolCallTransformer


def run(messages):
    return ToolCallTransformer().transform(SanitizeContext(request={"messages": messages}))


def test_assistant_tool_use_only_gets_placeholder_content():
    result = run(
        [
            {
                "role": "assistant",
                "content": [
                    {"type": "tool_use", "id": "t1", "name": "write", "input": {"a": 1}}
                ],
            }
        ]
    )

    assert result.request["messages"] == [
        {
            "role": "assistant",
            "content": " ",
            "tool_calls": [
                {
                    "id": "t1",
                    "type": "function",
                    "function": {"name": "write", "arguments": '{"a":1}'},
                }
            ],
        }
    ]
    assert result.stats.total_removed == 1


def test_assistant_text_and_multiple_tool_uses_keep_order():
    result = run(
        [
            {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "first"},
                    {"type": "tool_use", "id": "t1", "name": "read", "input": {"p": "a"}},
                    {"type": "text", "text": ""},
                    {"type": "text", "text": "second"},
                    {"type": "tool_use", "id": "t2", "name": "write", "input": {"p": "ü"}},
                ],
            }
        ]
    )

    message = result.request["messages"][0]
    assert message["content"] == "first\nsecond"
    assert [call["id"] for call in message["tool_calls"]] == ["t1", "t2"]
    assert message["tool_calls"][1]["function"]["arguments"] == '{"p":"ü"}'


def test_tool_use_without_input_gets_empty_object_arguments():
    result = run(
        [{"role": "assistant", "content": [{"type": "tool_use", "id": "t1", "name": "ping"}]}]
    )

    assert result.request["messages"][0]["tool_calls"][0]["function"]["arguments"] == "{}"


def test_user_tool_result_becomes_tool_message():
    result = run(
        [
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "t1",
                        "content": [
                            {"type": "text", "text": "line 1"},
                            {"type": "image", "source": {}},
                            {"type": "text", "text": "line 2"},
                        ],
                    }
                ],
            }
        ]
    )

    assert result.request["messages"] == [
        {"role": "tool", "content": "line 1\nline 2", "tool_call_id": "t1"}
    ]
    assert result.stats.total_removed == 1


def test_only_first_tool_result_is_kept():
    result = run(
        [
            {
                "role": "user",
                "content": [
                    {"type": "tool_result", "tool_use_id": "t1", "content": "one"},
                    {"type": "tool_result", "tool_use_id": "t2", "content": "two"},
                ],
            }
        ]
    )

    message = result.request["messages"][0]
    assert message["tool_call_id"] == "t1"
    assert message["content"] == "one"


def test_empty_tool_result_becomes_empty_object():
    result = run(
        [{"role": "user", "content": [{"type": "tool_result", "tool_use_id": "t1", "content": []}]}]
    )

    assert result.request["messages"][0]["content"] == "{}"


def test_messages_without_tool_blocks_are_untouched():
    messages = [
        {"role": "user", "content": [{"type": "text", "text": "hi"}]},
        {"role": "assistant", "content": [{"type": "text", "text": "hello"}]},
        {"role": "assistant", "content": "plain"},
        {"role": "system", "content": [{"type": "tool_use", "id": "x", "name": "n", "input": {}}]},
    ]
    context = SanitizeContext(request={"messages": messages})

    assert ToolCallTransformer().transform(context) is context


def test_conversion_does_not_mutate_input():
    messages = [
        {"role": "assistant", "content": [{"type": "tool_use", "id": "t1", "name": "w", "input": {}}]},
        {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "t1", "content": "ok"}]},
    ]
    before = copy.deepcopy(messages)

    result = run(messages)

    assert messages == before
    assert result.stats.total_removed == 2
