"""HTTP method enumeration."""

from enum import Enum


class Method(str, Enum):
    """HTTP request methods understood by the builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: "str | Method") -> "Method":
        """Return the Method for `value`, ignoring case.

        Raises:
            ValueError: If `value` is not a known method.
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).upper())

    def __str__(self) -> str:
        return self.value


URL_ENCODED_METHODS: frozenset[Method] = frozenset({Method.GET, Method.HEAD, Method.DELETE})


def encodes_parameters_in_url(method: Method) -> bool:
    """Check whether parameters for `method` belong in the URL rather than the body."""
    return method in URL_ENCODED_METHODS
