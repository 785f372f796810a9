"""
Module Registries
=================

Concrete ModuleRegistry implementations.

- InMemoryModuleRegistry: explicit snapshot of modules and types. Used by
  tests, by the CLI, and by hosts that track their own plugin modules.
- InstalledDistributionRegistry: the running interpreter. Modules are the
  installed distributions; types are resolved from already-imported Python
  modules only (resolution never imports anything).
"""

from __future__ import annotations
from importlib import metadata
from typing import Dict, Iterable, List, Mapping, Optional, Union
import sys

from .contracts.modules import LoadedModule, ModuleRegistry
from .contracts.signature import TypeSignature
from .typenames.parser import parse_type_name

ModuleSpec = Union[LoadedModule, str]


def _as_module(module: ModuleSpec) -> LoadedModule:
    if isinstance(module, LoadedModule):
        return module
    return LoadedModule.from_identifier(module)


class InMemoryModuleRegistry(ModuleRegistry):
    """Registry over an explicit list of modules and qualified type names."""

    def __init__(
        self,
        modules: Iterable[ModuleSpec] = (),
        types: Optional[Mapping[str, object]] = None,
    ):
        self._modules: List[LoadedModule] = [_as_module(m) for m in modules]
        self._types: Dict[str, object] = dict(types or {})

    def load(self, module: ModuleSpec) -> LoadedModule:
        """Make a module available (simulates a late module load)."""
        loaded = _as_module(module)
        self._modules.append(loaded)
        return loaded

    def register_type(self, qualified_name: str, handle: object) -> None:
        self._types[qualified_name] = handle

    def loaded_modules(self) -> Iterable[LoadedModule]:
        return tuple(self._modules)

    def resolve_type(self, qualified_name: str) -> Optional[object]:
        return self._types.get(qualified_name)


class InstalledDistributionRegistry(ModuleRegistry):
    """
    Registry backed by the running interpreter.

    Module identifiers look like "msgpack, Version=1.0.8". Type names are
    dotted Python paths ('+' separates nested classes), optionally with
    generic arguments applied by subscription (builtins.list`1[[builtins.int]]
    resolves to list[int]). Array specifiers are not supported.
    """

    def loaded_modules(self) -> Iterable[LoadedModule]:
        modules = []
        for distribution in metadata.distributions():
            name = distribution.metadata.get("Name")
            if not name:
                continue
            modules.append(LoadedModule(
                logical_name=name,
                full_identifier=f"{name}, Version={distribution.version}"
            ))
        return modules

    def resolve_type(self, qualified_name: str) -> Optional[object]:
        return self._resolve(parse_type_name(qualified_name))

    def _resolve(self, signature: TypeSignature) -> Optional[object]:
        if signature.array_specifier:
            return None
        if signature.module_reference and not self._is_loaded(signature.module_reference):
            return None

        base = _lookup_attribute_path(signature.name)
        if base is None or not signature.generic_parameters:
            return base

        arguments = [self._resolve(p) for p in signature.generic_parameters]
        if any(argument is None for argument in arguments):
            return None
        try:
            return base[arguments[0] if len(arguments) == 1 else tuple(arguments)]
        except TypeError:
            return None

    def _is_loaded(self, module_reference: str) -> bool:
        reference = module_reference.strip()
        return any(m.full_identifier == reference for m in self.loaded_modules())


def _lookup_attribute_path(name: str) -> Optional[object]:
    """Resolve "pkg.mod.Outer+Inner" against sys.modules without importing."""
    segments = [s.split("`", 1)[0] for s in name.replace("+", ".").split(".")]
    if not all(segments):
        return None

    for split in range(len(segments), 0, -1):
        module = sys.modules.get(".".join(segments[:split]))
        if module is None:
            continue
        target: object = module
        for attribute in segments[split:]:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target
    return None
