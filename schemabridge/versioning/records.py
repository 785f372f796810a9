"""
Versioned Record Contracts
==========================

Each persisted record shape is a class. The first shape derives from
InitialVersionedRecord; every later shape derives from DerivedVersionedRecord
and names its immediate predecessor:

    class SettingsV1(InitialVersionedRecord): ...

    class SettingsV2(DerivedVersionedRecord):
        SERIALIZATION_VERSION = 2
        PREVIOUS_VERSION = SettingsV1

        def upgrade_from(self, previous: SettingsV1) -> None: ...

Records own their document mapping explicitly (populate_from / to_document);
nothing in this package introspects record fields.

Records must be constructible with no arguments: the resolver instantiates
predecessors on its own while walking the chain.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Type


class VersionedRecord(ABC):
    """A record persisted with an explicit schema version."""

    SERIALIZATION_VERSION: ClassVar[int]
    PREVIOUS_VERSION: ClassVar[Optional[Type[VersionedRecord]]] = None

    @abstractmethod
    def populate_from(self, document: Dict[str, Any]) -> None:
        """Assign fields from a decoded document of this record's own version."""

    @abstractmethod
    def to_document(self) -> Dict[str, Any]:
        """Field mapping written to the payload."""


class InitialVersionedRecord(VersionedRecord):
    """
    First version of a record (version 1, no predecessor).

    Also reads legacy data written before versioning existed (version 0),
    so version 1 must stay compatible with any published unversioned shape.
    """

    SERIALIZATION_VERSION: ClassVar[int] = 1
    PREVIOUS_VERSION: ClassVar[Optional[Type[VersionedRecord]]] = None


class DerivedVersionedRecord(VersionedRecord):
    """Later version of a record; migrates forward from PREVIOUS_VERSION."""

    @abstractmethod
    def upgrade_from(self, previous: Any) -> None:
        """
        Populate self from a fully initialized instance of PREVIOUS_VERSION.

        Pure field mapping: must not touch anything but self.
        """
