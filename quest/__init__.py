"""quest: a fluent HTTP request builder on top of httpx.

Public API:
    RequestBuilder - Accumulates a request and dispatches it at most once
    request, get, post, put, patch, delete, head, options - Constructors
    Method - HTTP method enumeration

Internal (not for direct use):
    _internal - Body encoding and shared client configuration
"""

from quest._version import __version__
from quest.api import delete, get, head, options, patch, post, put, request
from quest.builder import JSONMap, RequestBuilder
from quest.exceptions import (
    QuestDecodingError,
    QuestEncodingError,
    QuestError,
    QuestTransportError,
    QuestValidationError,
)
from quest.methods import Method

__all__ = [
    "__version__",
    "RequestBuilder",
    "JSONMap",
    "Method",
    "request",
    "get",
    "post",
    "put",
    "patch",
    "delete",
    "head",
    "options",
    "QuestError",
    "QuestEncodingError",
    "QuestTransportError",
    "QuestDecodingError",
    "QuestValidationError",
]
