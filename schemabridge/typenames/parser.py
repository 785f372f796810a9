"""
Type Signature Parser / Serializer
==================================

Grammar (per flat string):

    Name ['`' digits] (('.'|'+') Name ['`' digits])*
        ['[' '[' GenericParamList ']' ']']
        ['[' ArrayRankSpecifiers ']']
        [',' ModuleReference]

GUARANTEES:
- parse(serialize(x)) == x for every signature serialize produces
- Strings that do not fit the grammar are never rejected: they come back as
  an opaque signature (name = whole string, nothing else set)
- Generic arguments are split by bracket depth, not by commas, so nested
  argument lists with their own module references stay intact
"""

from __future__ import annotations
from typing import List
import re

from ..contracts.signature import TypeSignature

_TYPE_NAME_PATTERN = re.compile(
    r"^(?P<name>\w*(?:`\d+)?(?:[.+]\w+(?:`\d+)?)*)"
    r"(?:\[(?P<generics>\[.*\])\])?"
    r"(?P<arrays>\[[\[\],]*\])?"
    r"(?:,\s?(?P<module>.*))?$",
    re.DOTALL,
)


def parse_type_name(text: str) -> TypeSignature:
    """Parse a qualified type name into a fresh TypeSignature tree."""
    match = _TYPE_NAME_PATTERN.match(text)
    if not match:
        return TypeSignature(name=text)

    generics = match.group("generics")
    parameters = ()
    if generics is not None:
        parameters = tuple(parse_type_name(entry) for entry in split_generic_arguments(generics))

    return TypeSignature(
        name=match.group("name"),
        module_reference=match.group("module") or None,
        array_specifier=match.group("arrays") or None,
        generic_parameters=parameters,
    )


def split_generic_arguments(blob: str) -> List[str]:
    """
    Split "[A, M],[B`1[[C, M]], M]" into top-level entries.

    '[' raises depth (kept once inside an entry), ']' lowers it and closes the
    entry when depth returns to zero; anything at depth zero is a separator.
    """
    entries: List[str] = []
    buffer: List[str] = []
    depth = 0

    for character in blob:
        if character == "[":
            depth += 1
            if depth > 1:
                buffer.append(character)
        elif character == "]":
            depth -= 1
            if depth == 0:
                entries.append("".join(buffer))
                buffer = []
            else:
                buffer.append(character)
        elif depth > 0:
            buffer.append(character)

    return entries


def serialize_type_name(signature: TypeSignature) -> str:
    """Exact inverse of parse_type_name."""
    parts = [signature.name]

    if signature.generic_parameters:
        parts.append("[")
        parts.append(",".join(
            f"[{serialize_type_name(parameter)}]"
            for parameter in signature.generic_parameters
        ))
        parts.append("]")

    if signature.array_specifier:
        parts.append(signature.array_specifier)

    if signature.module_reference:
        parts.append(", ")
        parts.append(signature.module_reference)

    return "".join(parts)
