"""Tests for request body encoding."""

import io
import json
import math
from datetime import date

import httpx
import pytest
from pydantic import BaseModel

from quest._internal.body import BodyKind, EncodedBody, encode_body
from quest.exceptions import QuestEncodingError


class TestFormBody:
    """Tests for key/value collections."""

    def test_string_mapping(self):
        """Should URL-encode a mapping of strings."""
        body = encode_body({"a": "1", "b": "2"})
        assert body.kind is BodyKind.FORM
        assert dict(httpx.QueryParams(body.content.decode())) == {"a": "1", "b": "2"}
        assert body.length == len(body.content)

    def test_multi_values(self):
        """Should repeat keys for list values."""
        body = encode_body({"tag": ["x", "y"]})
        assert body.kind is BodyKind.FORM
        assert httpx.QueryParams(body.content.decode()).get_list("tag") == ["x", "y"]

    def test_query_params(self):
        """Should accept httpx.QueryParams."""
        body = encode_body(httpx.QueryParams({"q": "hello world"}))
        assert body.kind is BodyKind.FORM
        assert body.content == b"q=hello+world"

    def test_non_string_values_fall_through_to_json(self):
        """Mappings with non-string values are JSON objects, not forms."""
        body = encode_body({"count": 3})
        assert body.kind is BodyKind.JSON
        assert json.loads(body.content) == {"count": 3}


class TestRawBody:
    """Tests for strings and bytes."""

    def test_string(self):
        """Should encode strings as UTF-8 and count bytes."""
        body = encode_body("héllo")
        assert body.kind is BodyKind.TEXT
        assert body.content == "héllo".encode()
        assert body.length == 6

    @pytest.mark.parametrize("data", [b"raw", bytearray(b"raw"), memoryview(b"raw")])
    def test_bytes_like(self, data):
        """Should accept any bytes-like value."""
        body = encode_body(data)
        assert body.kind is BodyKind.BYTES
        assert body.content == b"raw"
        assert body.length == 3


class TestStreamBody:
    """Tests for in-memory streams."""

    def test_bytes_io_adopted(self):
        """Should adopt a BytesIO and count only unread bytes."""
        stream = io.BytesIO(b"hello")
        stream.read(1)
        body = encode_body(stream)
        assert body.kind is BodyKind.STREAM
        assert body.content is stream
        assert body.length == 4

    def test_string_io(self):
        """Should re-buffer text streams as UTF-8."""
        body = encode_body(io.StringIO("héllo"))
        assert body.kind is BodyKind.STREAM
        assert body.content.read() == "héllo".encode()
        assert body.length == 6


class TestJSONBody:
    """Tests for the JSON fallback."""

    def test_bare_number(self):
        """Should marshal a bare value."""
        body = encode_body(42)
        assert body.kind is BodyKind.JSON
        assert body.content == b"42"
        assert body.length == 2

    def test_list(self):
        """Should marshal lists."""
        assert encode_body([1, "two"]).content == b'[1,"two"]'

    def test_pydantic_model(self):
        """Should marshal pydantic models."""

        class Item(BaseModel):
            name: str
            added: date

        body = encode_body(Item(name="widget", added=date(2024, 1, 2)))
        assert json.loads(body.content) == {"name": "widget", "added": "2024-01-02"}

    def test_unserializable_raises(self):
        """Should raise QuestEncodingError for values JSON cannot represent."""
        with pytest.raises(QuestEncodingError):
            encode_body({"handle": object()})

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_float_raises(self, value):
        """NaN and infinities have no JSON representation."""
        with pytest.raises(QuestEncodingError):
            encode_body({"x": value})

    def test_nested_non_finite_float_raises(self):
        """Should reject non-finite floats at any depth."""
        with pytest.raises(QuestEncodingError):
            encode_body([1.0, {"ratio": math.nan}])

    def test_circular_reference_raises(self):
        """Should reject self-referencing containers."""
        data: dict = {}
        data["self"] = data
        with pytest.raises(QuestEncodingError):
            encode_body(data)

    def test_keeps_non_ascii_text(self):
        """Should emit UTF-8 rather than escape sequences."""
        assert encode_body({"name": "café", "n": 1}).content == '{"name":"café","n":1}'.encode()


class TestEncodedBody:
    """Tests for the EncodedBody model."""

    def test_rejects_negative_length(self):
        """Length must not be negative."""
        with pytest.raises(ValueError):
            EncodedBody(kind=BodyKind.BYTES, content=b"", length=-1)
