"""Request body encoding.

Parameters handed to ``RequestBuilder.set_parameters`` are classified by
shape into one of the ``BodyKind`` variants and packed into an
``EncodedBody`` carrying the content for httpx and its byte length.
"""

import io
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field
from pydantic_core import to_jsonable_python

from quest.exceptions import QuestEncodingError


class BodyKind(str, Enum):
    """Shape of the parameters a body was built from."""

    FORM = "form"
    TEXT = "text"
    BYTES = "bytes"
    STREAM = "stream"
    JSON = "json"


class EncodedBody(BaseModel):
    """Request body ready to be handed to httpx.

    Fields:
        kind: Which parameter shape produced the body.
        content: ``bytes`` for buffered variants, a binary file-like object
            for ``BodyKind.STREAM``.
        length: Number of bytes the body will produce (Content-Length).
    """

    kind: BodyKind
    content: Any
    length: int = Field(ge=0)

    model_config = {"arbitrary_types_allowed": True}


def encode_body(data: Any) -> EncodedBody:
    """Classify `data` and pack it into an EncodedBody.

    Shapes are tried in order: form parameters, str, bytes-like, in-memory
    stream, and finally JSON for anything else.

    Args:
        data: The parameters to send as the request body.

    Returns:
        The encoded body.

    Raises:
        QuestEncodingError: If `data` falls through to JSON and cannot be
            serialized.
    """
    if _is_form(data):
        return _pack_bytes(BodyKind.FORM, str(httpx.QueryParams(data)).encode("utf-8"))
    if isinstance(data, str):
        return _pack_bytes(BodyKind.TEXT, data.encode("utf-8"))
    if isinstance(data, (bytes, bytearray, memoryview)):
        return _pack_bytes(BodyKind.BYTES, bytes(data))
    if isinstance(data, io.BytesIO):
        remaining = len(data.getbuffer()) - data.tell()
        return EncodedBody(kind=BodyKind.STREAM, content=data, length=max(remaining, 0))
    if isinstance(data, io.StringIO):
        # Text streams are re-buffered as UTF-8 so the length is in bytes.
        encoded = data.read().encode("utf-8")
        return EncodedBody(kind=BodyKind.STREAM, content=io.BytesIO(encoded), length=len(encoded))

    try:
        payload = json.dumps(
            to_jsonable_python(data),
            allow_nan=False,
            ensure_ascii=False,
            separators=(",", ":"),
        )
    except ValueError as e:
        raise QuestEncodingError(f"cannot encode parameters as JSON: {e}") from e
    return _pack_bytes(BodyKind.JSON, payload.encode("utf-8"))


def _pack_bytes(kind: BodyKind, content: bytes) -> EncodedBody:
    return EncodedBody(kind=kind, content=content, length=len(content))


def _is_form(data: Any) -> bool:
    """Check whether `data` is a key/value collection of strings."""
    if isinstance(data, httpx.QueryParams):
        return True
    if not isinstance(data, Mapping):
        return False
    for key, value in data.items():
        if not isinstance(key, str):
            return False
        if isinstance(value, (list, tuple)):
            if not all(isinstance(item, str) for item in value):
                return False
        elif not isinstance(value, str):
            return False
    return True
