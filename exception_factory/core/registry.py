"""
Lazy exception-type registry.

This module provides a registry that synthesizes exception types on first
reference. A name such as ``acme.data.NotFoundException`` is generated when
it is first looked up, provided that:

1. it is namespaced and its short name is a valid identifier,
2. its short name contains the error marker (``"Exception"``),
3. its top-level package is one of the registry's package prefixes.

The parent of a generated type is chosen by precedence: an explicit override
for the short name, then the built-in catalog entry for the short name, then
``builtins.Exception``.

The registry plugs into the import system (see ``import_hook``) so that plain
``from acme.data import NotFoundException`` triggers generation. Generated
types are bound into their namespace module and are never removed.

Thread Safety:
    Module and parent imports run outside the registry lock; the
    check-exists / generate / bind sequence runs under it. Concurrent first
    references to one name therefore bind exactly one type.
"""
from __future__ import annotations

import importlib
import keyword
import logging
import sys
import threading
import types
from typing import Dict, Optional, Set

from exception_factory.constants import (
    DEFAULT_PACKAGE_PREFIX,
    DEFAULT_ROOT_EXCEPTION,
    NAMESPACE_SEPARATOR,
)
from exception_factory.constants.constants import BUILTINS_MODULE, GENERATED_MARKER_ATTR
from exception_factory.core.builtin_catalog import scan_builtin_exceptions
from exception_factory.core.config import RegistryConfig, load_config
from exception_factory.core.exceptions import (
    ExceptionTypeNotFoundError,
    ParentTypeNotFoundError,
)
from exception_factory.core.import_hook import LazyExceptionFinder, install_lazy_getattr
from exception_factory.core.template import load_template, render_template
from exception_factory.utils.import_utils import import_object, split_qualified_name

logger = logging.getLogger(__name__)


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


class ExceptionRegistry:
    """
    Synthesizes and binds exception types for names under allowed package prefixes.

    Construct one with a RegistryConfig, call ``initialize()`` once, then either
    reference names through normal imports or call ``get_or_create()``.
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        config = config or RegistryConfig()
        self.config = config
        self.error_marker: str = config.error_marker
        self.package_prefixes: Set[str] = set(config.package_prefixes) or {DEFAULT_PACKAGE_PREFIX}
        self.parent_overrides: Dict[str, str] = dict(config.parent_overrides)
        self.builtin_parents: Dict[str, str] = {}
        self.finder = LazyExceptionFinder(self)

        self._template: Optional[str] = None
        self._builtins_scanned = False
        self._hooked = False
        self._bound: Dict[str, type] = {}
        self._lock = threading.Lock()
        self._init_lock = threading.Lock()
        self._in_progress = threading.local()

    # ===== ADMINISTRATION =====

    @property
    def initialized(self) -> bool:
        """True once ``initialize()`` has hooked the import system."""
        return self._hooked

    def initialize(self) -> None:
        """
        Hook into the import system, scan built-ins and load the template.

        Safe to call repeatedly; calls after the first are no-ops.

        Raises:
            TemplateLoadError: If the generation template cannot be loaded
        """
        with self._init_lock:
            if self._hooked:
                logger.debug("Exception registry already initialized")
                return

            self._load_resources()

            if not any(finder is self.finder for finder in sys.meta_path):
                sys.meta_path.insert(0, self.finder)
                logger.debug("Installed lazy exception finder on sys.meta_path")

            self._hook_loaded_modules()
            self._hooked = True

        logger.info(f"Exception registry initialized for prefixes {sorted(self.package_prefixes)}")

    def add_package_prefix(self, name: str) -> None:
        """
        Allow exception synthesis under another top-level package.

        Args:
            name: Top-level package name; re-adding an existing prefix is a no-op

        Raises:
            ValueError: If the name is not a single identifier segment
        """
        if not isinstance(name, str) or not _is_identifier(name):
            raise ValueError(f"Package prefix must be a top-level package name, got {name!r}")
        if name in self.package_prefixes:
            return
        self.package_prefixes.add(name)
        logger.info(f"Added package prefix {name!r}")
        if self.initialized:
            self._hook_loaded_modules()

    def set_parent_override(self, short_name: str, parent: str) -> None:
        """
        Make generated types with this short name inherit from ``parent``.

        The parent name is not checked here; an unimportable parent surfaces as
        ParentTypeNotFoundError when a type with this short name is generated.
        Types that are already bound keep their original parent.
        """
        self.parent_overrides[short_name] = parent
        logger.debug(f"Parent override {short_name} -> {parent}")

    def remove_parent_override(self, short_name: str) -> None:
        self.parent_overrides.pop(short_name, None)

    # ===== RESOLUTION =====

    def is_managed(self, fully_qualified_name: str) -> bool:
        """True if the name's top-level package is an allowed prefix."""
        head = fully_qualified_name.split(NAMESPACE_SEPARATOR, 1)[0]
        return head in self.package_prefixes

    def parent_name_for(self, short_name: str) -> str:
        """Dotted name of the parent a type with this short name gets."""
        if short_name in self.parent_overrides:
            return self.parent_overrides[short_name]
        if short_name in self.builtin_parents:
            return f"{BUILTINS_MODULE}{NAMESPACE_SEPARATOR}{self.builtin_parents[short_name]}"
        return DEFAULT_ROOT_EXCEPTION

    def accepts(self, fully_qualified_name: str) -> bool:
        """Check the three gating preconditions, in order."""
        namespace, short_name = split_qualified_name(fully_qualified_name)
        if not namespace or not all(_is_identifier(p) for p in fully_qualified_name.split(NAMESPACE_SEPARATOR)):
            return False
        if self.error_marker not in short_name:
            return False
        return self.is_managed(fully_qualified_name)

    def resolve(self, fully_qualified_name: str) -> Optional[type]:
        """
        Resolution callback: return the exception type bound at a name, creating it if needed.

        Args:
            fully_qualified_name: Dotted name such as ``acme.data.NotFoundException``

        Returns:
            The bound type, or None when a gating precondition declines the name

        Raises:
            ParentTypeNotFoundError: If the resolved parent is not an importable exception type
            TemplateLoadError: If the template has not been loaded yet and cannot load

        Without ``initialize()`` the import system is left untouched, so only
        namespaces backed by an importable module can receive types.
        """
        if not self.accepts(fully_qualified_name):
            return None

        existing = self._bound.get(fully_qualified_name)
        if existing is not None:
            return existing

        if self._template is None:
            with self._init_lock:
                self._load_resources()

        namespace, short_name = split_qualified_name(fully_qualified_name)
        module = self._import_namespace(namespace)
        if module is None:
            return None
        if short_name in module.__dict__:
            with self._lock:
                return self._adopt_existing(fully_qualified_name, module.__dict__[short_name])

        parent_name = self.parent_name_for(short_name)
        pending = self._in_progress.__dict__.setdefault("names", set())
        if fully_qualified_name in pending:
            raise ParentTypeNotFoundError(
                f"Parent chain for {fully_qualified_name!r} loops back to itself"
            )
        pending.add(fully_qualified_name)
        try:
            parent = self._import_parent(parent_name, fully_qualified_name)
        finally:
            pending.discard(fully_qualified_name)

        with self._lock:
            existing = self._bound.get(fully_qualified_name, module.__dict__.get(short_name))
            if existing is not None:
                # Another thread bound it while the parent was imported
                return self._adopt_existing(fully_qualified_name, existing)

            exc_type = self._generate(namespace, short_name, parent_name, parent)
            setattr(module, short_name, exc_type)
            self._bound[fully_qualified_name] = exc_type

        logger.debug(f"Generated {fully_qualified_name} extending {parent_name}")
        return exc_type

    def get_or_create(self, fully_qualified_name: str) -> type:
        """
        Explicit lookup-or-create.

        Raises:
            ExceptionTypeNotFoundError: If the name is declined by a gating precondition
        """
        exc_type = self.resolve(fully_qualified_name)
        if exc_type is None:
            raise ExceptionTypeNotFoundError(
                f"{fully_qualified_name!r} is not a lazily resolvable exception name "
                f"(prefixes: {sorted(self.package_prefixes)}, marker: {self.error_marker!r})"
            )
        return exc_type

    def registered_types(self) -> Dict[str, type]:
        """Snapshot of every type this registry has bound, by fully-qualified name."""
        with self._lock:
            return dict(self._bound)

    # ===== INTERNALS =====

    def _load_resources(self) -> None:
        # Caller holds self._init_lock
        if not self._builtins_scanned:
            self.builtin_parents = scan_builtin_exceptions(self.error_marker)
            self._builtins_scanned = True

        if self._template is None:
            self._template = load_template(self.config.template_path)

    def _adopt_existing(self, fully_qualified_name: str, existing: object) -> Optional[type]:
        # Caller holds self._lock
        if not (isinstance(existing, type) and issubclass(existing, BaseException)):
            return None
        self._bound.setdefault(fully_qualified_name, existing)
        logger.debug(f"{fully_qualified_name} already bound, reusing it")
        return existing

    def _import_namespace(self, namespace: str) -> Optional[types.ModuleType]:
        module = sys.modules.get(namespace)
        if module is not None:
            return module
        try:
            return importlib.import_module(namespace)
        except ModuleNotFoundError as e:
            # Only a missing namespace declines; broken imports inside it propagate
            if e.name and (namespace == e.name or namespace.startswith(e.name + NAMESPACE_SEPARATOR)):
                logger.debug(f"Namespace {namespace} cannot be imported: {e}")
                return None
            raise

    def _import_parent(self, parent_name: str, requested: str) -> type:
        try:
            parent = import_object(parent_name)
        except (ImportError, AttributeError) as e:
            raise ParentTypeNotFoundError(
                f"Parent type {parent_name!r} for {requested!r} not found: {e}"
            ) from e
        if not isinstance(parent, type) or not issubclass(parent, BaseException):
            raise ParentTypeNotFoundError(
                f"Parent {parent_name!r} for {requested!r} is not an exception type"
            )
        return parent

    def _generate(self, namespace: str, short_name: str, parent_name: str, parent: type) -> type:
        doc = render_template(self._template, namespace, short_name, parent_name)

        def exec_body(ns: dict) -> None:
            ns["__module__"] = namespace
            ns["__qualname__"] = short_name
            ns["__doc__"] = doc
            ns[GENERATED_MARKER_ATTR] = True

        return types.new_class(short_name, (parent,), exec_body=exec_body)

    def _hook_loaded_modules(self) -> None:
        for name, module in list(sys.modules.items()):
            if isinstance(module, types.ModuleType) and self.is_managed(name):
                install_lazy_getattr(module, self)


def is_generated(exc_type: type) -> bool:
    """True if the type was synthesized by a registry (not inherited from a generated parent)."""
    return bool(isinstance(exc_type, type) and exc_type.__dict__.get(GENERATED_MARKER_ATTR, False))


# ===== PROCESS-WIDE DEFAULT REGISTRY =====

_default_registry: Optional[ExceptionRegistry] = None
_default_registry_lock = threading.Lock()


def get_registry() -> ExceptionRegistry:
    """
    Return the process-wide registry, creating it on first use.

    Its configuration comes from the EXCEPTION_FACTORY_CONFIG YAML file when set.
    """
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = ExceptionRegistry(load_config())
        return _default_registry


def initialize() -> ExceptionRegistry:
    registry = get_registry()
    registry.initialize()
    return registry


def add_package_prefix(name: str) -> None:
    get_registry().add_package_prefix(name)


def set_parent_override(short_name: str, parent: str) -> None:
    get_registry().set_parent_override(short_name, parent)


def remove_parent_override(short_name: str) -> None:
    get_registry().remove_parent_override(short_name)


def resolve(fully_qualified_name: str) -> Optional[type]:
    return get_registry().resolve(fully_qualified_name)


def get_or_create(fully_qualified_name: str) -> type:
    return get_registry().get_or_create(fully_qualified_name)
