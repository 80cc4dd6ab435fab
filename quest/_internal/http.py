"""Shared HTTP client configuration."""

import os

import httpx

from quest._version import __version__

DEFAULT_TIMEOUT = 30.0
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
USER_AGENT = f"quest/{__version__}"

DEBUG_ENV_VAR = "QUEST_DEBUG"


def create_http_client(*, timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )


def debug_from_env() -> bool:
    """Read the debug flag from the QUEST_DEBUG environment variable."""
    return os.environ.get(DEBUG_ENV_VAR, "") == "1"
