"""
Structured Payload Codec
========================

Self-describing binary documents (MessagePack). A document is always a
mapping of field name to value at the top level; plain values go through the
value holder.

The versioning layer only sees the DocumentCodec interface, so another
document format can be plugged in without touching migrations.
"""

from __future__ import annotations
from typing import Any, Dict, Protocol

import msgpack

from ..contracts.errors import MalformedPayloadError, PayloadEncodingError

VALUE_FIELD = "Value"


class DocumentCodec(Protocol):
    """Encode/decode a flat mapping of named fields."""

    def encode(self, fields: Dict[str, Any]) -> bytes:
        ...

    def decode(self, data: bytes) -> Dict[str, Any]:
        ...


class MsgpackDocumentCodec:
    """MessagePack document codec."""

    def encode(self, fields: Dict[str, Any]) -> bytes:
        if not isinstance(fields, dict):
            raise PayloadEncodingError(
                f"Document must be a mapping, got {type(fields).__name__}"
            )
        try:
            return msgpack.packb(fields, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise PayloadEncodingError(f"MessagePack encode failed: {e}") from e

    def decode(self, data: bytes) -> Dict[str, Any]:
        """
        Decode a document.

        Raises:
            MalformedPayloadError: empty, truncated or trailing bytes, or the
                top-level object is not a mapping
        """
        if not data:
            raise MalformedPayloadError("Payload is empty")

        try:
            obj = msgpack.unpackb(data, raw=False)
        except msgpack.ExtraData as e:
            raise MalformedPayloadError("Trailing bytes after payload document") from e
        except (msgpack.UnpackException, ValueError, TypeError) as e:
            raise MalformedPayloadError(f"MessagePack decode failed: {e}") from e

        if not isinstance(obj, dict):
            raise MalformedPayloadError(
                f"Expected a mapping document, got {type(obj).__name__}"
            )
        return obj


DEFAULT_CODEC = MsgpackDocumentCodec()


# =============================================================================
# VALUE HOLDER (plain values need a mapping wrapper)
# =============================================================================

def serialize_value(value: Any, codec: DocumentCodec = DEFAULT_CODEC) -> bytes:
    """Encode any plain value as a single-field document."""
    return codec.encode({VALUE_FIELD: value})


def deserialize_value(data: bytes, codec: DocumentCodec = DEFAULT_CODEC) -> Any:
    """Inverse of serialize_value."""
    document = codec.decode(data)
    if VALUE_FIELD not in document:
        raise MalformedPayloadError(f"Value document has no '{VALUE_FIELD}' field")
    return document[VALUE_FIELD]
