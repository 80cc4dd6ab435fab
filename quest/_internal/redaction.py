"""Redaction of sensitive header values in debug output."""

from collections.abc import Iterable

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Build a printable copy of `headers` with sensitive values redacted.

    Multi-valued headers are joined with ", ". The input is never mutated.

    Args:
        headers: Header name/value pairs, e.g. ``httpx.Headers.multi_items()``.

    Returns:
        A new dictionary with sensitive values replaced by "[REDACTED]".
    """
    result: dict[str, str] = {}
    for name, value in headers:
        if name.lower() in REDACT_HEADERS:
            value = REDACTED_VALUE
        if name in result:
            result[name] = f"{result[name]}, {value}"
        else:
            result[name] = value
    return result
