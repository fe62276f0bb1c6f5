"""Tests for the request sanitization entry points.

Covers byte identity for clean input, idempotence, fail-open parsing and the
end-to-end pipeline over a mixed-dialect request.
"""

import copy
import json

import pytest

from src.conversion.pipeline import RequestPipelineFactory, RequestTransformer, SanitizeStats
from src.conversion.pipeline.transformers import ToolChoiceTransformer
from src.conversion.request_sanitizer import sanitize_request, sanitize_request_body


class ExplodingTransformer(RequestTransformer):
    def transform(self, context):
        raise RuntimeError("boom")


def test_clean_body_returned_byte_for_byte():
    body = b'{"model": "gpt-4o",   "messages": [{"role": "user", "content": "hi"}]}'

    out, stats = sanitize_request_body(body)

    assert out is body
    assert stats == SanitizeStats()


def test_tool_choice_required_becomes_auto():
    out, stats = sanitize_request_body(b'{"tool_choice":"required"}')

    assert out == b'{"tool_choice":"auto"}'
    assert stats.total_removed == 1


def test_assistant_tool_use_converted_to_tool_calls():
    body = json.dumps(
        {
            "messages": [
                {
                    "role": "assistant",
                    "content": [{"type": "tool_use", "id": "t1", "name": "write", "input": {"a": 1}}],
                }
            ]
        }
    ).encode()

    out, _ = sanitize_request_body(body)

    assert json.loads(out) == {
        "messages": [
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
    }


def test_thinking_model_system_relocated():
    body = json.dumps(
        {"model": "gemini-thinking", "system": "be nice", "messages": [{"role": "user", "content": "hi"}]}
    ).encode()

    out, stats = sanitize_request_body(body)

    document = json.loads(out)
    assert "system" not in document
    assert document["messages"][0]["content"] == "<system>\nbe nice\n</system>\n\nhi"
    assert stats.merged_system is True


def test_non_ascii_is_not_escaped():
    body = json.dumps({"tool_choice": "required", "messages": [{"role": "user", "content": "héllo"}]}).encode()

    out, _ = sanitize_request_body(body)

    assert "héllo".encode() in out


def test_mixed_dialect_request(mixed_dialect_request):
    body = json.dumps(mixed_dialect_request).encode()

    out, stats = sanitize_request_body(body)
    document = json.loads(out)

    assert "metadata" not in document
    assert "parallel_tool_calls" not in document
    assert document["tool_choice"] == "auto"
    assert document["system"] == [{"type": "text", "text": "be brief"}]

    schema = document["tools"][0]["input_schema"]
    assert "$schema" not in schema
    assert "additionalProperties" not in schema
    assert schema["properties"]["path"] == {"type": "string"}

    user, assistant, tool = document["messages"]
    assert user == {"role": "user", "content": "write a file"}
    assert assistant["content"] == "on it"
    assert assistant["tool_calls"][0]["function"] == {
        "name": "write",
        "arguments": '{"path":"a.txt"}',
    }
    assert tool == {"role": "tool", "content": "ok", "tool_call_id": "t1"}

    assert stats.flattened_messages == 1
    assert stats.merged_system is False
    assert stats.total_removed > 0


def test_sanitizing_twice_is_idempotent(mixed_dialect_request):
    first, first_stats = sanitize_request_body(json.dumps(mixed_dialect_request).encode())
    second, second_stats = sanitize_request_body(first)

    assert first_stats.changed
    assert second == first
    assert second_stats == SanitizeStats()


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"{not json",
        b"[1, 2, 3]",
        b'"just a string"',
        b'{"tool_choice": "required", "temperature": NaN}',
        b'{"tool_choice": "required", "x": "\xff"}',
    ],
)
def test_unparseable_or_non_object_body_passes_through(body):
    out, stats = sanitize_request_body(body)

    assert out is body
    assert stats == SanitizeStats()


def test_sanitize_request_does_not_mutate_input(mixed_dialect_request):
    before = copy.deepcopy(mixed_dialect_request)

    sanitized, stats = sanitize_request(mixed_dialect_request)

    assert mixed_dialect_request == before
    assert sanitized != before
    assert stats.changed


def test_failing_transformer_is_skipped(caplog):
    pipeline = RequestPipelineFactory.create_custom(
        [ExplodingTransformer(), ToolChoiceTransformer()]
    )

    out, stats = sanitize_request_body(b'{"tool_choice":"required"}', pipeline)

    assert out == b'{"tool_choice":"auto"}'
    assert stats.total_removed == 1
    assert "ExplodingTransformer failed" in caplog.text
