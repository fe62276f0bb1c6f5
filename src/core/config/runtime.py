"""Configuration singleton for the dialect sanitizer proxy.

Gives direct property access to configuration values, which are loaded once
from environment variables at initialization time.
"""

import hashlib

from src.core.config.settings import SanitizerConfig, ServerConfig, UpstreamConfig


class Config:
    """Configuration singleton with direct access to all settings."""

    def __init__(self) -> None:
        self._server = ServerConfig.load()
        self._upstream = UpstreamConfig.load()
        self._sanitizer = SanitizerConfig.load()

    # Server settings
    @property
    def host(self) -> str:
        return self._server.host

    @property
    def port(self) -> int:
        return self._server.port

    @property
    def log_level(self) -> str:
        return self._server.log_level

    # Upstream settings
    @property
    def upstream_base_url(self) -> str:
        return self._upstream.base_url

    @property
    def upstream_api_key(self) -> str | None:
        return self._upstream.api_key

    @property
    def request_timeout(self) -> int:
        return self._upstream.request_timeout

    @property
    def streaming_connect_timeout(self) -> float:
        return self._upstream.streaming_connect_timeout

    # Sanitizer settings
    @property
    def sanitize_enabled(self) -> bool:
        return self._sanitizer.enabled

    @property
    def api_key_hash(self) -> str:
        return (
            "<not-set>"
            if not self.upstream_api_key
            else "sha256:" + hashlib.sha256(self.upstream_api_key.encode()).hexdigest()[:16] + "..."
        )

    @classmethod
    def reset_singleton(cls) -> None:
        """Reset the global config singleton for test isolation.

        WARNING: Never call this in production code!
        """
        global config
        config = cls()


# Module-level singleton
config = Config()
