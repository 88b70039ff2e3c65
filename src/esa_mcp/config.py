"""Environment-backed configuration.

Values are read at the point of use so that a missing key only fails the
operations that need it.
"""
import os

from .errors import ConfigurationError

ESA_API_KEY = "ESA_API_KEY"
DEFAULT_ESA_TEAM = "DEFAULT_ESA_TEAM"
ESA_API_BASE_URL = "ESA_API_BASE_URL"
ESA_MCP_LOG_LEVEL = "ESA_MCP_LOG_LEVEL"

DEFAULT_API_BASE_URL = "https://api.esa.io"


def get_required_env(key: str) -> str:
    """Return the value of ``key`` or raise ConfigurationError if unset or empty."""
    value = os.getenv(key)
    if not value:
        raise ConfigurationError(key)
    return value


def get_env(key: str, default: str) -> str:
    """Return the value of ``key``, falling back to ``default`` when unset or empty."""
    return os.getenv(key) or default


def get_api_base_url() -> str:
    return get_env(ESA_API_BASE_URL, DEFAULT_API_BASE_URL)
