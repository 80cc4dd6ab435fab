"""Shortcut constructors for RequestBuilder."""

from typing import Any

import httpx

from quest.builder import RequestBuilder
from quest.methods import Method


def request(method: str | Method, url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    """Create a RequestBuilder.

    Args:
        method: HTTP method, case-insensitive.
        url: Target URL.
        **kwargs: Passed to RequestBuilder (client, timeout, debug).

    Returns:
        A new, unsent RequestBuilder.
    """
    return RequestBuilder(method, url, **kwargs)


def get(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.GET, url, **kwargs)


def head(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.HEAD, url, **kwargs)


def options(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.OPTIONS, url, **kwargs)


def post(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.POST, url, **kwargs)


def put(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.PUT, url, **kwargs)


def patch(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.PATCH, url, **kwargs)


def delete(url: str | httpx.URL, **kwargs: Any) -> RequestBuilder:
    return request(Method.DELETE, url, **kwargs)
