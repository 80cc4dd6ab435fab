"""Fluent HTTP request builder."""

import io
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from quest._internal.body import EncodedBody, encode_body
from quest._internal.http import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_TIMEOUT,
    create_http_client,
    debug_from_env,
)
from quest._internal.redaction import redact_headers
from quest.exceptions import (
    QuestDecodingError,
    QuestEncodingError,
    QuestError,
    QuestTransportError,
    QuestValidationError,
)
from quest.methods import Method, encodes_parameters_in_url

JSONMap: TypeAlias = dict[str, Any]

ResponseHandler: TypeAlias = Callable[
    [httpx.Request | None, httpx.Response | None, io.BytesIO | None, QuestError | None], None
]
BytesHandler: TypeAlias = Callable[
    [httpx.Request | None, httpx.Response | None, bytes, QuestError | None], None
]
StringHandler: TypeAlias = Callable[
    [httpx.Request | None, httpx.Response | None, str, QuestError | None], None
]
JSONHandler: TypeAlias = Callable[
    [httpx.Request | None, httpx.Response | None, JSONMap | None, QuestError | None], None
]

QueryData: TypeAlias = (
    httpx.QueryParams
    | Mapping[str, Any]
    | Sequence[tuple[str, Any]]
    | str
    | bytes
    | bytearray
    | memoryview
)

_JSON_OBJECT = TypeAdapter(JSONMap)


def _escape_non_ascii(raw: bytes) -> bytes:
    """Percent-encode bytes outside ASCII; httpx only accepts ASCII queries."""
    return b"".join(bytes([b]) if b < 0x80 else b"%%%02X" % b for b in raw)


class RequestBuilder:
    """Accumulates a request and dispatches it at most once.

    Configuration methods return the builder so calls can be chained. The
    first terminal accessor (``on_response*`` or ``check_status_code``)
    sends the request; every later accessor reuses the buffered outcome.

    Errors never escape the accessors. Encoding, transport and status
    validation failures become the builder's sticky ``error``: once set,
    configuration calls are ignored, nothing is dispatched, and every
    accessor reports it to its callback.

    Example:
        RequestBuilder("POST", "https://api.example.com/items") \\
            .set_encoding("json") \\
            .set_parameters({"name": "widget", "count": 3}) \\
            .check_status_code(201) \\
            .on_response_json(handle)
    """

    def __init__(
        self,
        method: str | Method,
        url: str | httpx.URL,
        *,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            method: HTTP method, case-insensitive.
            url: Target URL.
            client: Optional httpx client to send through. When omitted a
                fresh client is created for the dispatch and closed after it.
            timeout: Timeout in seconds for an internally created client.
            debug: Enable debug logging to stderr. Defaults to the
                QUEST_DEBUG environment variable.

        Raises:
            ValueError: If `method` is not a known HTTP method.
        """
        self._method = Method.parse(method)
        self._url = httpx.URL(url)
        self._headers = httpx.Headers()
        self._body: EncodedBody | None = None
        self._client = client
        self._timeout = timeout
        self._debug = debug_from_env() if debug is None else debug

        self._error: QuestError | None = None
        self._sent = False
        self._request: httpx.Request | None = None
        self._response: httpx.Response | None = None
        self._buffer: bytes | None = None

    def __repr__(self) -> str:
        return f"<RequestBuilder [{self._method}] {self._url}>"

    @property
    def method(self) -> Method:
        return self._method

    @property
    def url(self) -> httpx.URL:
        return self._url

    @property
    def headers(self) -> httpx.Headers:
        return self._headers

    @property
    def body(self) -> EncodedBody | None:
        return self._body

    @property
    def error(self) -> QuestError | None:
        """The sticky error, if any."""
        return self._error

    @property
    def sent(self) -> bool:
        """Whether dispatch has already happened."""
        return self._sent

    @property
    def request(self) -> httpx.Request | None:
        return self._request

    @property
    def response(self) -> httpx.Response | None:
        return self._response

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[quest] {message}", file=sys.stderr)

    def _fail(self, error: QuestError) -> None:
        self._log_debug(f"{type(error).__name__}: {error}")
        self._error = error

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_query(self, data: QueryData) -> "RequestBuilder":
        """Replace the URL query component.

        Args:
            data: Key/value pairs, a raw query string, or raw bytes holding
                a query string.
        """
        if self._error is not None:
            return self
        if isinstance(data, (bytes, bytearray, memoryview)):
            query = _escape_non_ascii(bytes(data))
        elif isinstance(data, str):
            query = _escape_non_ascii(data.encode("utf-8"))
        else:
            query = str(httpx.QueryParams(data)).encode("utf-8")
        # An empty query drops the "?" entirely.
        self._url = self._url.copy_with(query=query or None)
        return self

    def set_parameters(self, data: Any) -> "RequestBuilder":
        """Set the request body from `data`.

        Ignored for methods that carry parameters in the URL (GET, HEAD,
        DELETE); use ``set_query`` for those. See ``encode_body`` for how
        the shape of `data` picks the encoding. A value that cannot be
        serialized sets a sticky QuestEncodingError and leaves the body
        unset.
        """
        if self._error is not None or encodes_parameters_in_url(self._method):
            return self
        try:
            self._body = encode_body(data)
        except QuestEncodingError as e:
            self._fail(e)
        return self

    def set_encoding(self, content_type: str) -> "RequestBuilder":
        """Set the Content-Type header. "json" in any case means application/json."""
        if self._error is not None or not content_type:
            return self
        if content_type.upper() == "JSON":
            content_type = "application/json"
        self._headers["Content-Type"] = content_type
        return self

    def set_header(self, name: str, value: str) -> "RequestBuilder":
        """Set header `name`, replacing any existing values."""
        if self._error is None:
            self._headers[name] = value
        return self

    def add_header(self, name: str, value: str) -> "RequestBuilder":
        """Append a value to header `name`."""
        if self._error is None:
            self._headers = httpx.Headers([*self._headers.multi_items(), (name, value)])
        return self

    def set_authenticate(self, username: str, password: str) -> "RequestBuilder":
        raise NotImplementedError("authentication is not supported by RequestBuilder")

    def set_progress(self, callback: Callable[[int, int], None]) -> "RequestBuilder":
        raise NotImplementedError("progress reporting is not supported by RequestBuilder")

    def cancel(self) -> None:
        raise NotImplementedError("in-flight cancellation is not supported by RequestBuilder")

    def validate(self) -> "RequestBuilder":
        """Reserved for response validation hooks; currently does nothing."""
        return self

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _ensure_response(self) -> tuple[bytes | None, QuestError | None]:
        """Dispatch once, then keep returning the buffered outcome."""
        if self._error is not None or self._sent:
            return self._buffer, self._error
        self._sent = True
        try:
            self._buffer = self._dispatch()
        except QuestTransportError as e:
            self._fail(e)
        return self._buffer, self._error

    def _dispatch(self) -> bytes:
        """Send the request and read the whole response body.

        Raises:
            QuestTransportError: If httpx fails to send or receive.
        """
        headers = httpx.Headers(self._headers)
        if "Content-Type" not in headers:
            headers["Content-Type"] = DEFAULT_CONTENT_TYPE
        content = None
        if self._body is not None:
            content = self._body.content
            headers["Content-Length"] = str(self._body.length)

        if self._client is not None:
            return self._send(self._client, headers, content)
        with create_http_client(timeout=self._timeout) as client:
            return self._send(client, headers, content)

    def _send(self, client: httpx.Client, headers: httpx.Headers, content: Any) -> bytes:
        request = client.build_request(
            self._method.value,
            self._url,
            headers=headers,
            content=content,
        )
        self._request = request
        self._log_debug(
            f"Sending {request.method} {request.url} "
            f"headers={redact_headers(request.headers.multi_items())}"
        )
        try:
            response = client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise QuestTransportError(str(e)) from e

        try:
            buffer = response.read()
        except httpx.HTTPError as e:
            raise QuestTransportError(str(e)) from e
        finally:
            response.close()

        self._response = response
        self._log_debug(f"Received {response.status_code} ({len(buffer)} bytes)")
        return buffer

    # =========================================================================
    # Accessors
    # =========================================================================

    def on_response(self, handler: ResponseHandler) -> "RequestBuilder":
        """Pass the buffered body as a BytesIO (None on transport failure)."""
        buffer, error = self._ensure_response()
        body = io.BytesIO(buffer) if buffer is not None else None
        handler(self._request, self._response, body, error)
        return self

    def on_response_bytes(self, handler: BytesHandler) -> "RequestBuilder":
        buffer, error = self._ensure_response()
        handler(self._request, self._response, buffer or b"", error)
        return self

    def on_response_string(self, handler: StringHandler) -> "RequestBuilder":
        """Pass the body decoded with the response charset (UTF-8 by default)."""
        buffer, error = self._ensure_response()
        text = self._response.text if buffer is not None and self._response is not None else ""
        handler(self._request, self._response, text, error)
        return self

    def on_response_json(self, handler: JSONHandler) -> "RequestBuilder":
        """Pass the body decoded as a JSON object.

        A body that is not a JSON object is reported as QuestDecodingError
        with a None payload. The failure is local to this call; the buffered
        body stays available to the other accessors.
        """
        buffer, error = self._ensure_response()
        if error is not None or buffer is None:
            handler(self._request, self._response, None, error)
            return self
        try:
            data = _JSON_OBJECT.validate_json(buffer)
        except PydanticValidationError as e:
            handler(
                self._request,
                self._response,
                None,
                QuestDecodingError(f"response body is not a JSON object: {e}"),
            )
            return self
        handler(self._request, self._response, data, None)
        return self

    # =========================================================================
    # Validation
    # =========================================================================

    def check_status_code(self, *status_codes: int) -> "RequestBuilder":
        """Require the response status to be one of `status_codes`.

        With no arguments any 2xx status is accepted. Forces dispatch. A
        mismatch sets a sticky QuestValidationError.
        """
        _, error = self._ensure_response()
        if error is not None or self._response is None:
            return self
        status_code = self._response.status_code
        if not self._validate_status_code(status_code, *status_codes):
            self._fail(
                QuestValidationError(f"invalid status code {status_code}", status_code=status_code)
            )
        return self

    def _validate_status_code(self, status_code: int, *status_codes: int) -> bool:
        if status_codes:
            return status_code in status_codes
        return 200 <= status_code < 300

    def check_accept_content_type(self, accepted: Mapping[str, str]) -> bool:
        """Reserved; always reports success."""
        return self._validate_accept_content_type(accepted)

    def _validate_accept_content_type(self, accepted: Mapping[str, str]) -> bool:
        return True

    def raise_for_error(self) -> "RequestBuilder":
        """Raise the sticky error, if any.

        Raises:
            QuestError: The builder's sticky error.
        """
        if self._error is not None:
            raise self._error
        return self
