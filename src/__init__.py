"""Dialect Sanitizer Proxy

A proxy that normalizes mixed OpenAI/Anthropic-dialect chat requests into the
single dialect an upstream chat-completions backend accepts.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("dialect-sanitizer-proxy")
except PackageNotFoundError:
    __version__ = "0.1.0"
