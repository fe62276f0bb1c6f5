"""Configuration package.

``config`` is resolved lazily so that ``Config.reset_singleton()`` (used by
tests after changing the environment) is visible through
``from src.core.config import config`` at call time.
"""

from typing import Any

from src.core.config import runtime
from src.core.config.runtime import Config
from src.core.config.validation import ConfigError, validate_all

__all__ = ["Config", "ConfigError", "config", "validate_all"]


def __getattr__(name: str) -> Any:
    if name == "config":
        return runtime.config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
