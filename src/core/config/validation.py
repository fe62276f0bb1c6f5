"""Type coercion and validation for configuration loading.

Errors are raised with clear messages to help users fix configuration issues.
"""

import os
from typing import Any

from src.core.config.schema import ConfigSchema, EnvVarSpec


class ConfigError(Exception):
    """An environment variable failed coercion or validation.

    Attributes:
        env_var: The environment variable name
        value: The raw value that failed validation
        message: Human-readable error message
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


_COERCERS = {bool: _parse_bool, int: int, float: float}


def load_env_var(spec: EnvVarSpec) -> Any:
    """Load, coerce and validate a single environment variable.

    Unset variables resolve to their declared default without validation.

    Raises:
        ConfigError: If type conversion or validation fails.
    """
    raw_value = os.environ.get(spec.name)
    if raw_value is None:
        return spec.default

    coerce = _COERCERS.get(spec.type_hint)
    try:
        value = coerce(raw_value) if coerce else raw_value
    except (ValueError, TypeError) as e:
        raise ConfigError(
            spec.name, raw_value, f"Cannot convert to {spec.type_hint.__name__}: {e}"
        ) from e

    if spec.validator is not None:
        try:
            valid = spec.validator(value)
        except (TypeError, AttributeError) as e:
            raise ConfigError(spec.name, raw_value, f"Validation error: {e}") from e
        if not valid:
            raise ConfigError(
                spec.name, raw_value, f"Validation failed for type {spec.type_hint.__name__}"
            )

    return value


def validate_all() -> list[ConfigError]:
    """Validate all environment variables and return any errors.

    Useful at startup to report every configuration problem at once rather
    than failing on the first one.
    """
    errors: list[ConfigError] = []
    for spec in ConfigSchema.all_specs().values():
        try:
            load_env_var(spec)
        except ConfigError as e:
            errors.append(e)
    return errors
