"""
Migration Chain Resolver
========================

Turns payload bytes of any supported version into a fully populated instance
of the requested record type.

STATE MACHINE (one state per record version):
- initial type:  data version 0 or 1 -> decode directly, else VersionMismatch
- derived type N:
    data version >  N -> VersionMismatch (never read newer data)
    data version == N -> decode directly
    data version <  N -> build predecessor, resolve it from the SAME bytes,
                         then upgrade_from(predecessor)

GUARANTEES:
- Payload bytes are never mutated; only the object graph narrows per level
- Data already at the target version is decoded exactly once, no recursion
- Upgrade steps run once each, in ascending version order
- Failures propagate; a failed call never hands back a record
"""

from __future__ import annotations
from typing import Set, Tuple, Type
import logging

from ..codec.envelope import LEGACY_VERSION, MAX_VERSION
from ..codec.payload import DEFAULT_CODEC, DocumentCodec
from ..contracts.errors import MalformedPayloadError, MigrationChainError, VersionMismatchError
from .records import DerivedVersionedRecord, InitialVersionedRecord, VersionedRecord

logger = logging.getLogger(__name__)


# =============================================================================
# CHAIN VALIDATION
# =============================================================================

def migration_chain(record_type: Type[VersionedRecord]) -> Tuple[Type[VersionedRecord], ...]:
    """
    Ordered chain from the initial type up to record_type.

    Raises:
        MigrationChainError: broken predecessor links, non-increasing
            versions, a cycle, or no initial type at version 1
    """
    chain = []
    seen: Set[type] = set()
    current = record_type
    newer_version = None

    while True:
        if not (isinstance(current, type) and issubclass(current, VersionedRecord)):
            raise MigrationChainError(f"{current!r} is not a VersionedRecord type")
        if current in seen:
            raise MigrationChainError(f"Cycle in migration chain at {current.__name__}")
        seen.add(current)

        version = getattr(current, "SERIALIZATION_VERSION", None)
        if not isinstance(version, int) or isinstance(version, bool) or version < 1:
            raise MigrationChainError(
                f"{current.__name__}.SERIALIZATION_VERSION must be a positive int, got {version!r}"
            )
        if newer_version is not None and version >= newer_version:
            raise MigrationChainError(
                f"{current.__name__} (version {version}) must be older than its "
                f"successor (version {newer_version})"
            )
        chain.append(current)

        previous = current.PREVIOUS_VERSION
        if previous is None:
            if not issubclass(current, InitialVersionedRecord) or version != 1:
                raise MigrationChainError(
                    f"{current.__name__} has no PREVIOUS_VERSION but is not an "
                    f"initial record at version 1"
                )
            break

        if not issubclass(current, DerivedVersionedRecord):
            raise MigrationChainError(
                f"{current.__name__} declares PREVIOUS_VERSION but does not derive "
                f"from DerivedVersionedRecord"
            )
        newer_version = version
        current = previous

    return tuple(reversed(chain))


# =============================================================================
# RESOLVER
# =============================================================================

def initialize_from(
    instance: VersionedRecord,
    payload: bytes,
    data_version: int,
    codec: DocumentCodec = DEFAULT_CODEC,
) -> None:
    """
    Populate instance from payload bytes written at data_version.

    Raises:
        VersionMismatchError: data newer than the instance's type, or an
            initial type given anything but version 0/1
        MalformedPayloadError: the payload codec cannot decode the bytes
        MigrationChainError: the record type's chain is invalid
    """
    if not 0 <= data_version <= MAX_VERSION:
        raise ValueError(f"Data version must be in 0..{MAX_VERSION}: {data_version}")

    migration_chain(type(instance))
    _initialize(instance, bytes(payload), data_version, codec)


def _initialize(
    instance: VersionedRecord,
    payload: bytes,
    data_version: int,
    codec: DocumentCodec,
) -> None:
    record_type = type(instance)
    version = record_type.SERIALIZATION_VERSION
    previous_type = record_type.PREVIOUS_VERSION

    if previous_type is None:
        if data_version not in (LEGACY_VERSION, version):
            raise VersionMismatchError(data_version, version, record_type)
        logger.debug("Decoding %s from data version %d", record_type.__name__, data_version)
        _populate(instance, payload, codec)
        return

    if data_version > version:
        raise VersionMismatchError(
            data_version, version, record_type,
            message=(
                f"Cannot deserialize {record_type.__name__}: data version {data_version} "
                f"is newer than supported version {version}"
            ),
        )

    if data_version == version:
        logger.debug("Decoding %s at its own version %d", record_type.__name__, version)
        _populate(instance, payload, codec)
        return

    previous = previous_type()
    _initialize(previous, payload, data_version, codec)

    logger.debug(
        "Upgrading %s (v%d) -> %s (v%d)",
        previous_type.__name__, previous_type.SERIALIZATION_VERSION,
        record_type.__name__, version,
    )
    instance.upgrade_from(previous)


def _populate(instance: VersionedRecord, payload: bytes, codec: DocumentCodec) -> None:
    document = codec.decode(payload)
    try:
        instance.populate_from(document)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedPayloadError(
            f"Document does not match {type(instance).__name__}: {e!r}"
        ) from e
