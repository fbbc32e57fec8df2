"""
exception_factory: lazily synthesized exception types.

Exception classes under registered package prefixes are generated on first
reference instead of being declared by hand::

    from exception_factory import add_package_prefix, initialize

    initialize()
    add_package_prefix("acme")

    from acme.data import NotFoundException   # generated here
    raise NotFoundException("widget 42")

This module re-exports the public API and has no import side effects: the
import system is only hooked once ``initialize()`` is called.
"""

__version__ = "0.1.0"

from exception_factory.core.config import RegistryConfig, load_config
from exception_factory.core.exceptions import (
    ConfigurationError,
    ExceptionFactoryError,
    ExceptionTypeNotFoundError,
    ParentTypeNotFoundError,
    TemplateLoadError,
)
from exception_factory.core.registry import (
    ExceptionRegistry,
    add_package_prefix,
    get_or_create,
    get_registry,
    initialize,
    is_generated,
    remove_parent_override,
    resolve,
    set_parent_override,
)

__all__ = [
    # Core functions
    "initialize",
    "add_package_prefix",
    "set_parent_override",
    "remove_parent_override",
    "resolve",
    "get_or_create",
    "get_registry",
    "is_generated",
    "load_config",

    # Key types
    "ExceptionRegistry",
    "RegistryConfig",

    # Errors
    "ExceptionFactoryError",
    "ConfigurationError",
    "ExceptionTypeNotFoundError",
    "ParentTypeNotFoundError",
    "TemplateLoadError",
]
