"""Unit tests for the field-level transformers.

Test Categories:
    1. RootFieldTransformer: top-level denylist
    2. ToolChoiceTransformer: string and object tool_choice mapping
    3. MessageAnnotationTransformer: cache_control/name stripping, depth bound
"""

import copy

import pytest

from src.conversion.pipeline import SanitizeContext
from src.conversion.pipeline.transformers import (
    MessageAnnotationTransformer,
    RootFieldTransformer,
    ToolChoiceTransformer,
)


def run(transformer, request):
    return transformer.transform(SanitizeContext(request=request))


# =============================================================================
# Category 1: Root fields
# =============================================================================


def test_root_fields_removes_each_denylisted_key():
    request = {
        "model": "m",
        "metadata": {"user_id": "u"},
        "logprobs": True,
        "service_tier": "auto",
        "custom_field": 1,
    }

    result = run(RootFieldTransformer(), request)

    assert result.request == {"model": "m", "custom_field": 1}
    assert result.stats.total_removed == 3


def test_root_fields_noop_returns_same_context():
    context = SanitizeContext(request={"model": "m", "messages": []})

    assert RootFieldTransformer().transform(context) is context


def test_root_fields_does_not_mutate_input():
    request = {"model": "m", "citations": True}
    before = copy.deepcopy(request)

    run(RootFieldTransformer(), request)

    assert request == before


# =============================================================================
# Category 2: Tool choice
# =============================================================================


@pytest.mark.parametrize(
    "tool_choice",
    ["required", "validated", {"type": "any"}, {"type": "auto"}, {}, {"type": ""}],
)
def test_tool_choice_rewritten_to_auto(tool_choice):
    result = run(ToolChoiceTransformer(), {"tool_choice": tool_choice})

    assert result.request == {"tool_choice": "auto"}
    assert result.stats.total_removed == 1


@pytest.mark.parametrize(
    "tool_choice",
    [
        {"type": "tool", "name": "write"},
        {"type": "function", "function": {"name": "write"}},
    ],
)
def test_forced_tool_choice_is_dropped(tool_choice):
    result = run(ToolChoiceTransformer(), {"model": "m", "tool_choice": tool_choice})

    assert result.request == {"model": "m"}
    assert result.stats.total_removed == 1


@pytest.mark.parametrize("tool_choice", ["auto", "none", {"type": "none"}, None, 3])
def test_other_tool_choice_shapes_pass_through(tool_choice):
    context = SanitizeContext(request={"tool_choice": tool_choice})

    assert ToolChoiceTransformer().transform(context) is context


def test_absent_tool_choice_is_noop():
    context = SanitizeContext(request={"model": "m"})

    assert ToolChoiceTransformer().transform(context) is context


# =============================================================================
# Category 3: Message annotations
# =============================================================================


def test_strips_annotations_at_all_three_levels():
    request = {
        "messages": [
            {
                "role": "user",
                "name": "bob",
                "cache_control": {"type": "ephemeral"},
                "content": [
                    {"type": "text", "text": "a", "cache_control": {"type": "ephemeral"}},
                    {
                        "type": "tool_result",
                        "tool_use_id": "t1",
                        "cache_control": {"type": "ephemeral"},
                        "content": [
                            {"type": "text", "text": "x", "cache_control": {"type": "ephemeral"}}
                        ],
                    },
                ],
            }
        ]
    }
    before = copy.deepcopy(request)

    result = run(MessageAnnotationTransformer(), request)

    assert result.request == {
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "a"},
                    {
                        "type": "tool_result",
                        "tool_use_id": "t1",
                        "content": [{"type": "text", "text": "x"}],
                    },
                ],
            }
        ]
    }
    assert result.stats.total_removed == 5
    assert request == before


def test_does_not_inspect_beyond_third_level():
    deep_item = {
        "type": "wrapper",
        "content": [{"type": "text", "text": "deep", "cache_control": {"type": "ephemeral"}}],
    }
    request = {
        "messages": [
            {
                "role": "user",
                "content": [{"type": "tool_result", "tool_use_id": "t1", "content": [deep_item]}],
            }
        ]
    }
    context = SanitizeContext(request=request)

    assert MessageAnnotationTransformer().transform(context) is context


def test_string_content_messages_only_lose_message_fields():
    request = {"messages": [{"role": "assistant", "content": "hi", "name": "helper"}]}

    result = run(MessageAnnotationTransformer(), request)

    assert result.request == {"messages": [{"role": "assistant", "content": "hi"}]}
    assert result.stats.total_removed == 1


def test_missing_messages_is_noop():
    context = SanitizeContext(request={"messages": "not-a-list"})

    assert MessageAnnotationTransformer().transform(context) is context
