"""
Cross-Version Module Binder
===========================

Payloads record qualified type names against the module version that wrote
them. A process with a different version of that module loaded would fail to
resolve them; the binder rewrites every module reference in the name
(including those inside generic arguments) to the identifier of the module
version actually loaded, matched by logical name.

Only module references change. Names, generic structure and array
specifiers are preserved exactly.

Misses are not errors: an unloaded module leaves its reference unchanged and
an unresolvable type returns None, so callers choose the fallback.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
import logging

from ..contracts.errors import Error, ErrorCode
from ..contracts.modules import ModuleRegistry, logical_module_name
from ..contracts.signature import TypeSignature
from .parser import parse_type_name, serialize_type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingResult:
    """
    Outcome of one binding call.

    INVARIANT: resolved is None exactly when errors holds a TYPE_NOT_FOUND.
    """
    signature: TypeSignature
    qualified_name: str
    resolved: Optional[object] = None
    errors: Tuple[Error, ...] = field(default_factory=tuple)

    @property
    def is_resolved(self) -> bool:
        return self.resolved is not None


class VersionTolerantBinder:
    """
    Binds (type name, module reference) pairs to loaded types.

    Holds no state besides the registry, so one binder can serve any number
    of concurrent callers.
    """

    def __init__(self, registry: ModuleRegistry):
        self._registry = registry

    def bind_type(self, name: str, module_reference: str) -> Optional[object]:
        """Resolved type handle, or None when it cannot be resolved."""
        return self.bind(name, module_reference).resolved

    def bind(self, name: str, module_reference: str) -> BindingResult:
        """Bind and report everything that could not be resolved."""
        return self.bind_signature(parse_type_name(f"{name}, {module_reference}"))

    def bind_signature(self, signature: TypeSignature) -> BindingResult:
        """Same as bind, for a name that is already parsed."""
        unresolved: List[Error] = []
        rebound = self._rebind(signature, unresolved)

        qualified_name = serialize_type_name(rebound)
        resolved = self._registry.resolve_type(qualified_name)

        errors = list(unresolved)
        if resolved is None:
            logger.debug("Type not found after binding: %s", qualified_name)
            errors.append(Error(
                code=ErrorCode.TYPE_NOT_FOUND,
                message=f"No loaded type matches {qualified_name}",
                context=(("qualified_name", qualified_name),)
            ))

        return BindingResult(
            signature=rebound,
            qualified_name=qualified_name,
            resolved=resolved,
            errors=tuple(errors)
        )

    def rebind_signature(self, signature: TypeSignature) -> TypeSignature:
        """Copy of signature with module references pointed at loaded modules."""
        return self._rebind(signature, [])

    def _rebind(self, signature: TypeSignature, unresolved: List[Error]) -> TypeSignature:
        module_reference = signature.module_reference
        if module_reference:
            loaded = self._registry.find_module(logical_module_name(module_reference))
            if loaded is None:
                logger.debug("No loaded module for %s; reference kept", module_reference)
                unresolved.append(Error(
                    code=ErrorCode.UNRESOLVED_MODULE,
                    message=f"No loaded module named {logical_module_name(module_reference)}",
                    context=(("module_reference", module_reference),)
                ))
            else:
                if loaded.full_identifier != module_reference:
                    logger.debug("Rebinding %s -> %s", module_reference, loaded.full_identifier)
                module_reference = loaded.full_identifier

        parameters = tuple(
            self._rebind(parameter, unresolved)
            for parameter in signature.generic_parameters
        )
        return replace(
            signature,
            module_reference=module_reference,
            generic_parameters=parameters
        )
