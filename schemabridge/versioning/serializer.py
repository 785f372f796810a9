"""
Versioned serialization entry points.

Callers should use these rather than calling the resolver directly; the
resolver is public mainly for testing upgrade steps in isolation.
"""

from __future__ import annotations
from typing import Optional, Type, TypeVar
import logging

from ..codec.envelope import decode_envelope, encode_envelope
from ..codec.payload import DEFAULT_CODEC, DocumentCodec
from .migration import initialize_from, migration_chain
from .records import VersionedRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=VersionedRecord)


def serialize_versioned(record: VersionedRecord, codec: Optional[DocumentCodec] = None) -> bytes:
    """Payload document prefixed with the record's version header."""
    codec = codec or DEFAULT_CODEC
    migration_chain(type(record))
    payload = codec.encode(record.to_document())
    return encode_envelope(payload, type(record).SERIALIZATION_VERSION)


def serialize_unversioned(record: VersionedRecord, codec: Optional[DocumentCodec] = None) -> bytes:
    """Payload document only, in the headerless legacy form."""
    codec = codec or DEFAULT_CODEC
    return codec.encode(record.to_document())


def deserialize_versioned(
    record_type: Type[R],
    data: bytes,
    codec: Optional[DocumentCodec] = None,
) -> R:
    """
    Read data (versioned or legacy) into a new record_type instance.

    The data may be at any version up to record_type.SERIALIZATION_VERSION;
    older data is migrated forward through the chain.
    """
    codec = codec or DEFAULT_CODEC
    data_version, offset = decode_envelope(data)
    logger.debug(
        "Deserializing %s: data version %d, payload offset %d",
        record_type.__name__, data_version, offset,
    )

    record = record_type()
    initialize_from(record, memoryview(data)[offset:], data_version, codec)
    return record
