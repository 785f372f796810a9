"""
Type Signature Contract

Structured form of a qualified type name:

    Namespace.Outer+Inner`1[[Arg, Module]][], Module, Version=1.0.0.0

INVARIANTS:
- generic_parameters is an empty tuple (never an empty-bracket placeholder)
  when the name has no generic arguments
- module_reference / array_specifier are None when absent, never ""
- Instances are immutable; rebinding produces a new tree
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple
import re


_ARITY_SUFFIX = re.compile(r"`\d+$")


@dataclass(frozen=True)
class TypeSignature:
    """Parsed qualified type name."""
    name: str
    module_reference: Optional[str] = None
    array_specifier: Optional[str] = None
    generic_parameters: Tuple[TypeSignature, ...] = field(default_factory=tuple)

    @property
    def is_generic(self) -> bool:
        return bool(self.generic_parameters)

    @property
    def is_array(self) -> bool:
        return bool(self.array_specifier)

    @property
    def simple_name(self) -> str:
        """Last name segment with any generic arity suffix removed."""
        last = re.split(r"[.+]", self.name)[-1]
        return _ARITY_SUFFIX.sub("", last)

    def walk(self) -> Iterator[TypeSignature]:
        """Pre-order traversal: self first, then generic parameters in order."""
        yield self
        for parameter in self.generic_parameters:
            yield from parameter.walk()

    def __str__(self) -> str:
        # Local import: the parser depends on this module.
        from ..typenames.parser import serialize_type_name
        return serialize_type_name(self)
