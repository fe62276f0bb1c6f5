"""Declarative schema for environment variable configuration.

Every configurable value is declared once here, with its default, type and
validation rule. Settings modules load values through
``src.core.config.validation.load_env_var``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=8082,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.split()[0].upper()
        in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    # === Upstream Settings ===

    UPSTREAM_BASE_URL = EnvVarSpec(
        name="UPSTREAM_BASE_URL",
        default="http://localhost:8317/v1",
        type_hint=str,
        description="Base URL of the chat-completions backend requests are forwarded to",
        validator=lambda x: x.startswith(("http://", "https://")),
    )

    UPSTREAM_API_KEY = EnvVarSpec(
        name="UPSTREAM_API_KEY",
        default=None,
        type_hint=str,
        description="Bearer key sent to the backend (unset = forward client Authorization)",
    )

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=90,
        type_hint=int,
        description="Upstream request timeout in seconds",
        validator=lambda x: x > 0,
    )

    STREAMING_CONNECT_TIMEOUT_SECONDS = EnvVarSpec(
        name="STREAMING_CONNECT_TIMEOUT_SECONDS",
        default=30.0,
        type_hint=float,
        description="Connect timeout for streaming requests",
        validator=lambda x: x > 0,
    )

    # === Sanitizer Settings ===

    SANITIZE_ENABLED = EnvVarSpec(
        name="SANITIZE_ENABLED",
        default=True,
        type_hint=bool,
        description="Sanitize chat/completion/message request bodies before forwarding",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Return every declared spec keyed by attribute name."""
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        """Get specification for a specific env var by name."""
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None
