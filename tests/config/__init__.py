"""Test configuration constants for proxy tests."""

TEST_UPSTREAM_BASE_URL = "http://upstream.test/v1"

TEST_API_KEYS = {
    "UPSTREAM_API_KEY": "test-upstream-key-mocked",
}

DEFAULT_TEST_ENV = {
    "UPSTREAM_BASE_URL": TEST_UPSTREAM_BASE_URL,
    "LOG_LEVEL": "DEBUG",
    "SANITIZE_ENABLED": "true",
    **TEST_API_KEYS,
}

__all__ = ["TEST_UPSTREAM_BASE_URL", "TEST_API_KEYS", "DEFAULT_TEST_ENV"]
