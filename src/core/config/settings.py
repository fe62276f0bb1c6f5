"""Focused settings groups loaded from the environment.

- ServerConfig: bind address and log level
- UpstreamConfig: backend base URL, credentials and timeouts
- SanitizerConfig: request sanitization toggle
"""

from dataclasses import dataclass

from src.core.config.schema import ConfigSchema
from src.core.config.validation import load_env_var


@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int
    log_level: str

    @classmethod
    def load(cls) -> "ServerConfig":
        return cls(
            host=load_env_var(ConfigSchema.HOST),
            port=load_env_var(ConfigSchema.PORT),
            log_level=load_env_var(ConfigSchema.LOG_LEVEL),
        )


@dataclass(frozen=True)
class UpstreamConfig:
    """Settings for the single chat-completions backend.

    Attributes:
        base_url: Backend base URL, without trailing slash
        api_key: Optional bearer key for the backend
        request_timeout: Total timeout for non-streaming requests (seconds)
        streaming_connect_timeout: Connect timeout for streaming requests (seconds)
    """

    base_url: str
    api_key: str | None
    request_timeout: int
    streaming_connect_timeout: float

    @classmethod
    def load(cls) -> "UpstreamConfig":
        return cls(
            base_url=load_env_var(ConfigSchema.UPSTREAM_BASE_URL).rstrip("/"),
            api_key=load_env_var(ConfigSchema.UPSTREAM_API_KEY),
            request_timeout=load_env_var(ConfigSchema.REQUEST_TIMEOUT),
            streaming_connect_timeout=load_env_var(
                ConfigSchema.STREAMING_CONNECT_TIMEOUT_SECONDS
            ),
        )


@dataclass(frozen=True)
class SanitizerConfig:
    enabled: bool

    @classmethod
    def load(cls) -> "SanitizerConfig":
        return cls(enabled=load_env_var(ConfigSchema.SANITIZE_ENABLED))
