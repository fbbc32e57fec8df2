"""
Import hook that routes unknown attribute lookups to exception registries.

Modules under a registered package prefix receive a module-level
``__getattr__`` (PEP 562) that asks the registry to synthesize the missing
name. Modules are hooked as they are imported by a ``sys.meta_path`` finder;
namespaces that have no real module behind them are synthesized as empty
packages so that ``from acme.data import NotFoundException`` works without an
``acme/data.py`` on disk.

A namespace is only synthesized when its parent is absent or synthetic
itself. Real packages keep ordinary import semantics: a missing submodule of
a package on disk is still a ModuleNotFoundError.

Thread Safety:
    The finder holds no registry state. The last attribute name a hook
    declined is tracked per thread so that the follow-up submodule import
    made by ``from x import y`` is not answered with a synthetic package.
    Hook installation is idempotent per (module, registry) pair, and
    resolution is serialized by the registry.
"""
import importlib.abc
import importlib.machinery
import logging
import sys
import threading
from types import ModuleType
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence

from exception_factory.constants.constants import HOOK_REGISTRY_ATTR

if TYPE_CHECKING:
    from exception_factory.core.registry import ExceptionRegistry

logger = logging.getLogger(__name__)

_declined = threading.local()


def install_lazy_getattr(module: ModuleType, registry: "ExceptionRegistry") -> bool:
    """
    Give a module a ``__getattr__`` that resolves missing names through a registry.

    A ``__getattr__`` the module already defines is consulted first; only when it
    raises AttributeError is the registry asked.

    Args:
        module: Module to hook
        registry: Registry that resolves missing names

    Returns:
        True if a hook was installed, False if this registry already hooks the module
    """
    current = module.__dict__.get("__getattr__")
    hooked = current
    while hooked is not None:
        if getattr(hooked, HOOK_REGISTRY_ATTR, None) is registry:
            return False
        hooked = getattr(hooked, "__wrapped_getattr__", None)

    module_name = module.__name__

    def __getattr__(name: str) -> Any:
        if current is not None:
            try:
                return current(name)
            except AttributeError:
                pass
        fully_qualified_name = f"{module_name}.{name}"
        resolved = registry.resolve(fully_qualified_name)
        if resolved is None:
            _declined.name = fully_qualified_name
            raise AttributeError(f"module {module_name!r} has no attribute {name!r}")
        return resolved

    setattr(__getattr__, HOOK_REGISTRY_ATTR, registry)
    __getattr__.__wrapped_getattr__ = current
    module.__getattr__ = __getattr__
    logger.debug(f"Installed lazy exception hook on module {module_name}")
    return True


def active_finders() -> Iterator["LazyExceptionFinder"]:
    """Yield the lazy exception finders currently on ``sys.meta_path``."""
    for finder in list(sys.meta_path):
        if isinstance(finder, LazyExceptionFinder):
            yield finder


def _hook_for_managing_registries(module: ModuleType, owner: "ExceptionRegistry") -> None:
    install_lazy_getattr(module, owner)
    for finder in active_finders():
        if finder.registry is not owner and finder.registry.is_managed(module.__name__):
            install_lazy_getattr(module, finder.registry)


class _HookingLoader(importlib.abc.Loader):
    """Wraps a real loader and hooks the module once it has executed."""

    def __init__(self, loader: importlib.abc.Loader, registry: "ExceptionRegistry"):
        self._loader = loader
        self._registry = registry

    def create_module(self, spec):
        return self._loader.create_module(spec)

    def exec_module(self, module: ModuleType) -> None:
        self._loader.exec_module(module)
        _hook_for_managing_registries(module, self._registry)

    def __getattr__(self, name: str) -> Any:
        # get_source, get_resource_reader, is_package, ...
        if name == "_loader":
            raise AttributeError(name)
        return getattr(self._loader, name)


class _SyntheticPackageLoader(importlib.abc.Loader):
    """Creates an empty package for a namespace that has no module on disk."""

    def __init__(self, registry: "ExceptionRegistry"):
        self._registry = registry

    def create_module(self, spec):
        return None

    def exec_module(self, module: ModuleType) -> None:
        module.__doc__ = f"Namespace synthesized for lazily generated exceptions in {module.__name__}."
        _hook_for_managing_registries(module, self._registry)


def _is_synthetic(module: Optional[ModuleType]) -> bool:
    spec = getattr(module, "__spec__", None)
    return isinstance(getattr(spec, "loader", None), _SyntheticPackageLoader)


class LazyExceptionFinder(importlib.abc.MetaPathFinder):
    """
    Meta path finder for modules under a registry's package prefixes.

    Real modules are located by the remaining finders on ``sys.meta_path`` and
    hooked after they execute. Missing namespaces are synthesized, except for
    names that look like exception types themselves.
    """

    def __init__(self, registry: "ExceptionRegistry"):
        self.registry = registry

    def find_spec(self, fullname: str, path: Optional[Sequence[str]],
                  target: Optional[ModuleType] = None) -> Optional[importlib.machinery.ModuleSpec]:
        if not self.registry.is_managed(fullname):
            return None

        spec = self._find_real_spec(fullname, path, target)
        if spec is not None:
            loader = spec.loader
            if (loader is not None and hasattr(loader, "exec_module")
                    and not isinstance(loader, (_HookingLoader, _SyntheticPackageLoader))):
                spec.loader = _HookingLoader(loader, self.registry)
            return spec

        parent_name, _, short_name = fullname.rpartition(".")
        if self.registry.error_marker in short_name:
            # Exception names are attributes, never modules
            return None
        if parent_name and not _is_synthetic(sys.modules.get(parent_name)):
            return None
        if getattr(_declined, "name", None) == fullname:
            # Submodule lookup after a declined attribute in ``from x import y``
            return None

        logger.debug(f"Synthesizing namespace package {fullname}")
        return importlib.machinery.ModuleSpec(
            fullname, _SyntheticPackageLoader(self.registry), is_package=True
        )

    def _find_real_spec(self, fullname: str, path: Optional[Sequence[str]],
                        target: Optional[ModuleType]) -> Optional[importlib.machinery.ModuleSpec]:
        for finder in list(sys.meta_path):
            if isinstance(finder, LazyExceptionFinder):
                continue
            find_spec = getattr(finder, "find_spec", None)
            if find_spec is None:
                continue
            spec = find_spec(fullname, path, target)
            if spec is not None:
                return spec
        return None

    def __repr__(self) -> str:
        return f"<LazyExceptionFinder prefixes={sorted(self.registry.package_prefixes)}>"
