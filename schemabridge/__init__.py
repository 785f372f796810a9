"""
Schema Bridge

Version-tolerant binary persistence. Records are written inside a small
versioned envelope and read back through a forward migration chain, so data
written by older code keeps loading after the record shape evolves. A
companion type-name parser and binder let qualified type names written
against one module version resolve against whatever version is loaded now.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Responsibility: Shared immutable types, error codes, collaborator interfaces
   - MUST NOT: Depend on any other layer

2. CODEC (codec/)
   - Responsibility: Envelope framing and the structured payload document format
   - Outputs: bytes / (version, offset) / field mappings
   - MUST NOT: Know about record types or migrations

3. VERSIONING (versioning/)
   - Responsibility: Versioned record contracts, migration chain resolution
   - Allowed inputs: Raw bytes and a target record type
   - MUST NOT: Return partially populated records

4. TYPE NAMES (typenames/)
   - Responsibility: Parse/serialize qualified type names, rebind module versions
   - Allowed inputs: Type-name strings and a module registry snapshot
   - MUST NOT: Raise for names or modules it cannot resolve

CONSTRAINTS ENFORCED:
=====================
- No global registries: collaborators are passed in explicitly
- Fatal data errors raise; tolerable lookup misses are returned as data
- Input buffers and strings are never mutated
"""

import logging

from .codec.envelope import decode_envelope, encode_envelope
from .contracts.errors import (
    MalformedPayloadError,
    MigrationChainError,
    PayloadEncodingError,
    SerializationError,
    VersionMismatchError,
)
from .contracts.signature import TypeSignature
from .typenames.binder import VersionTolerantBinder
from .typenames.parser import parse_type_name, serialize_type_name
from .versioning.records import DerivedVersionedRecord, InitialVersionedRecord, VersionedRecord
from .versioning.serializer import deserialize_versioned, serialize_versioned

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "decode_envelope",
    "encode_envelope",
    "MalformedPayloadError",
    "MigrationChainError",
    "PayloadEncodingError",
    "SerializationError",
    "VersionMismatchError",
    "TypeSignature",
    "VersionTolerantBinder",
    "parse_type_name",
    "serialize_type_name",
    "DerivedVersionedRecord",
    "InitialVersionedRecord",
    "VersionedRecord",
    "deserialize_versioned",
    "serialize_versioned",
]
