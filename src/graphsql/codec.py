"""Serialization of vertex values, keys, attribute maps and edge payloads.

Public API:
    Codec: Protocol for value codecs.
    JsonCodec: Canonical JSON codec; ``bytes`` survive as base64.
    encode_attributes / decode_attributes: Attribute map helpers.
"""

from __future__ import annotations

import base64
import json
from typing import Any, Protocol, runtime_checkable

_BYTES_TAG = "__bytes__"


@runtime_checkable
class Codec(Protocol):
    """Turns Python values into text stored in a column, and back."""

    def encode(self, obj: Any) -> str:
        ...

    def decode(self, raw: Any) -> Any:
        ...


def _as_text(raw: Any) -> Any:
    if isinstance(raw, memoryview):
        raw = raw.tobytes()
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8")
    return raw


class JsonCodec:
    """Canonical JSON: sorted keys, compact separators.

    The same value always encodes to the same text, which is what makes it
    usable for vertex hashes.  ``bytes`` values are wrapped in a tagged
    object so they decode back to ``bytes``.
    """

    def encode(self, obj: Any) -> str:
        return json.dumps(
            obj,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=self._default,
        )

    def decode(self, raw: Any) -> Any:
        """Decode stored text.

        Values the driver already decoded (numbers, dicts) are returned as is.
        """
        raw = _as_text(raw)
        if not isinstance(raw, str):
            return raw
        return json.loads(raw, object_hook=self._object_hook)

    @staticmethod
    def _default(obj: Any) -> Any:
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return {_BYTES_TAG: base64.b64encode(bytes(obj)).decode("ascii")}
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    @staticmethod
    def _object_hook(obj: dict[str, Any]) -> Any:
        if len(obj) == 1 and _BYTES_TAG in obj:
            return base64.b64decode(obj[_BYTES_TAG])
        return obj


def wrap_document(text: str) -> str:
    """Store codec output as a JSON string literal.

    The stored text always starts with a quote, so no engine treats it as a
    number (SQLite gives ``JSON`` columns NUMERIC affinity) and any codec
    output fits a JSON-typed column.
    """
    return json.dumps(text, ensure_ascii=False)


def unwrap_document(raw: Any) -> str:
    """Return the codec output stored by :func:`wrap_document`."""
    raw = _as_text(raw)
    if not isinstance(raw, str):
        raise TypeError(f"Expected stored text, got {type(raw).__name__}")
    inner = json.loads(raw)
    if not isinstance(inner, str):
        raise TypeError(f"Stored value is not a wrapped document: {raw!r}")
    return inner


def encode_attributes(attributes: dict[str, str] | None) -> str:
    """Encode a string-to-string map as a JSON object.

    Raises:
        TypeError: If a key or value is not a string.
    """
    attributes = attributes or {}
    for k, v in attributes.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise TypeError(f"Attributes must map str to str, got {k!r}: {v!r}")
    return json.dumps(attributes, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def decode_attributes(raw: Any) -> dict[str, str]:
    raw = _as_text(raw)
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return dict(raw)
    return dict(json.loads(raw))


__all__ = [
    "Codec",
    "JsonCodec",
    "wrap_document",
    "unwrap_document",
    "encode_attributes",
    "decode_attributes",
]
