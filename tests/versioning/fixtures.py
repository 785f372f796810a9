"""
Versioning Test Fixtures

A three-step record chain (ContactV1 -> ContactV2 -> ContactV3) and a codec
that counts its calls. Each upgrade appends its version to upgrade_trail,
which is not persisted, so tests can see which steps ran and in what order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from schemabridge.codec.payload import MsgpackDocumentCodec
from schemabridge.versioning.records import DerivedVersionedRecord, InitialVersionedRecord


# =============================================================================
# RECORD CHAIN
# =============================================================================

@dataclass
class ContactV1(InitialVersionedRecord):
    """Version 1: single name field, single phone."""
    name: str = ""
    phone: str = ""
    upgrade_trail: Tuple[int, ...] = ()

    def populate_from(self, document: Dict[str, Any]) -> None:
        self.name = document["Name"]
        self.phone = document.get("Phone", "")

    def to_document(self) -> Dict[str, Any]:
        return {"Name": self.name, "Phone": self.phone}


@dataclass
class ContactV2(DerivedVersionedRecord):
    """Version 2: name split into first/last."""
    SERIALIZATION_VERSION = 2
    PREVIOUS_VERSION = ContactV1

    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    upgrade_trail: Tuple[int, ...] = ()

    def populate_from(self, document: Dict[str, Any]) -> None:
        self.first_name = document["FirstName"]
        self.last_name = document["LastName"]
        self.phone = document.get("Phone", "")

    def to_document(self) -> Dict[str, Any]:
        return {"FirstName": self.first_name, "LastName": self.last_name, "Phone": self.phone}

    def upgrade_from(self, previous: ContactV1) -> None:
        first, _, last = previous.name.partition(" ")
        self.first_name = first
        self.last_name = last
        self.phone = previous.phone
        self.upgrade_trail = previous.upgrade_trail + (2,)


@dataclass
class ContactV3(DerivedVersionedRecord):
    """Version 3: any number of phones."""
    SERIALIZATION_VERSION = 3
    PREVIOUS_VERSION = ContactV2

    first_name: str = ""
    last_name: str = ""
    phones: List[str] = field(default_factory=list)
    upgrade_trail: Tuple[int, ...] = ()

    def populate_from(self, document: Dict[str, Any]) -> None:
        self.first_name = document["FirstName"]
        self.last_name = document["LastName"]
        self.phones = list(document["Phones"])

    def to_document(self) -> Dict[str, Any]:
        return {"FirstName": self.first_name, "LastName": self.last_name, "Phones": list(self.phones)}

    def upgrade_from(self, previous: ContactV2) -> None:
        self.first_name = previous.first_name
        self.last_name = previous.last_name
        self.phones = [previous.phone] if previous.phone else []
        self.upgrade_trail = previous.upgrade_trail + (3,)


# =============================================================================
# COUNTING CODEC
# =============================================================================

class CountingCodec(MsgpackDocumentCodec):
    """MessagePack codec that records every call."""

    def __init__(self):
        self.encode_calls = 0
        self.decode_calls = 0

    def encode(self, fields):
        self.encode_calls += 1
        return super().encode(fields)

    def decode(self, data):
        self.decode_calls += 1
        return super().decode(data)


def ada_v1() -> ContactV1:
    return ContactV1(name="Ada Lovelace", phone="555-0100")


def ada_v2() -> ContactV2:
    return ContactV2(first_name="Ada", last_name="Lovelace", phone="555-0100")


def ada_v3() -> ContactV3:
    return ContactV3(first_name="Ada", last_name="Lovelace", phones=["555-0100", "555-0199"])
