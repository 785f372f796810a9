"""
Versioned Envelope
==================

Frames an opaque payload with a 5-byte header:

    offset 0  size 4  version       big-endian uint32
    offset 4  size 1  magic marker  0xAA
    offset 5  size N  payload

Data without a valid header (shorter than 5 bytes, or byte 4 is not the
marker) is legacy/unversioned and reads as version 0 at offset 0.

KNOWN LIMITATION:
A legacy payload whose 5th byte happens to be 0xAA is detected as versioned.
Already-persisted legacy data depends on this exact heuristic, so it is kept
as is.
"""

from __future__ import annotations
from typing import Tuple
import struct

MAGIC_BYTE = 0xAA
HEADER_LENGTH = 5
MAX_VERSION = 0xFFFFFFFF
LEGACY_VERSION = 0

_VERSION_FORMAT = ">I"


def encode_envelope(payload: bytes, version: int) -> bytes:
    """
    Prefix payload with the version header.

    len(result) == len(payload) + HEADER_LENGTH.
    Version 0 is reserved for headerless legacy data and is rejected.
    """
    if not 1 <= version <= MAX_VERSION:
        raise ValueError(f"Envelope version must be in 1..{MAX_VERSION}: {version}")
    return struct.pack(_VERSION_FORMAT, version) + bytes((MAGIC_BYTE,)) + bytes(payload)


def decode_envelope(data: bytes) -> Tuple[int, int]:
    """Return (version, payload_offset). Legacy data yields (0, 0)."""
    if len(data) < HEADER_LENGTH:
        return LEGACY_VERSION, 0

    # In legacy data this byte belongs to the payload's own leading fields.
    if data[4] != MAGIC_BYTE:
        return LEGACY_VERSION, 0

    (version,) = struct.unpack_from(_VERSION_FORMAT, data, 0)
    return version, HEADER_LENGTH


def split_envelope(data: bytes) -> Tuple[int, bytes]:
    """Return (version, payload bytes)."""
    version, offset = decode_envelope(data)
    return version, bytes(data[offset:])


def is_versioned(data: bytes) -> bool:
    """True when data carries an envelope header."""
    return decode_envelope(data)[1] == HEADER_LENGTH
