"""Shared pytest configuration and fixtures for proxy tests."""

import os

import pytest

from tests.config import DEFAULT_TEST_ENV
from tests.fixtures.mock_http import (  # noqa: F401
    mock_upstream_api,
    openai_chat_completion,
    streaming_tool_call_with_duplicate_stop,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")


def pytest_collection_modifyitems(config, items):
    """Every test in this suite mocks its HTTP calls; mark them all as unit tests."""
    for item in items:
        if "tests/" in str(item.path):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(scope="function", autouse=True)
def setup_test_environment():
    """Give every test a clean, known configuration.

    The config singleton is rebuilt after the environment is set, and again
    after it is restored, so no test observes another test's settings.
    """
    from src.core.config import Config

    original_env = {key: os.environ.get(key) for key in DEFAULT_TEST_ENV}
    try:
        os.environ.update(DEFAULT_TEST_ENV)
        Config.reset_singleton()
        yield
    finally:
        for key, value in original_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        Config.reset_singleton()


@pytest.fixture
def mixed_dialect_request():
    """A request mixing both dialects and most unsupported fields."""
    return {
        "model": "gemini-2.5-pro",
        "metadata": {"user_id": "u-1"},
        "parallel_tool_calls": True,
        "tool_choice": {"type": "any"},
        "system": [{"type": "text", "text": "be brief", "cache_control": {"type": "ephemeral"}}],
        "tools": [
            {
                "name": "write",
                "input_schema": {
                    "type": "object",
                    "$schema": "http://json-schema.org/draft-07/schema#",
                    "additionalProperties": False,
                    "properties": {"path": {"type": "string", "minLength": 1}},
                },
            }
        ],
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "write a file", "cache_control": {"type": "ephemeral"}}
                ],
            },
            {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "on it"},
                    {"type": "tool_use", "id": "t1", "name": "write", "input": {"path": "a.txt"}},
                ],
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "t1",
                        "content": [{"type": "text", "text": "ok", "cache_control": {"type": "ephemeral"}}],
                    }
                ],
            },
        ],
    }
