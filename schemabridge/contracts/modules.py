"""
Module Registry Contract

A module is a logical deployable unit that can be loaded at different
versions over time. Its full identifier carries qualifiers:

    Acme.Widgets, Version=1.3.0.0, Culture=neutral, PublicKeyToken=abc

while its logical name ignores them ("Acme.Widgets").

The registry is an explicit collaborator handed to the binder. It is read as
a snapshot at call time; nothing here caches module listings.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional


def logical_module_name(reference: str) -> str:
    """Module name with version/culture/key qualifiers stripped."""
    return reference.split(",", 1)[0].strip()


@dataclass(frozen=True)
class LoadedModule:
    """A module currently available to the process."""
    logical_name: str
    full_identifier: str

    @staticmethod
    def from_identifier(full_identifier: str) -> LoadedModule:
        """Build from a full identifier, deriving the logical name."""
        return LoadedModule(
            logical_name=logical_module_name(full_identifier),
            full_identifier=full_identifier.strip()
        )


class ModuleRegistry(ABC):
    """
    Loaded-module and loaded-type lookup.

    GUARANTEES expected from implementations:
    - loaded_modules() reflects the state at call time
    - resolve_type() returns None for anything it cannot resolve, never raises
    """

    @abstractmethod
    def loaded_modules(self) -> Iterable[LoadedModule]:
        """Enumerate modules available right now."""

    @abstractmethod
    def resolve_type(self, qualified_name: str) -> Optional[object]:
        """Resolve a serialized qualified type name to a type handle."""

    def find_module(self, logical_name: str) -> Optional[LoadedModule]:
        """First loaded module with the given logical name, if any."""
        for module in self.loaded_modules():
            if module.logical_name == logical_name:
                return module
        return None
