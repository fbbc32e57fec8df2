"""
Consolidated constants for exception_factory.

This module defines the defaults shared by the registry, its configuration
and the import hook.
"""

from pathlib import Path
from typing import Tuple

# Namespace handling
NAMESPACE_SEPARATOR = "."
DEFAULT_PACKAGE_PREFIX = "exception_factory"
DEFAULT_PACKAGE_PREFIXES: Tuple[str, ...] = (DEFAULT_PACKAGE_PREFIX,)

# Naming convention gate for error-like names
DEFAULT_ERROR_MARKER = "Exception"

# Built-in catalog
BUILTINS_MODULE = "builtins"
BUILTIN_ERROR_SUFFIX = "Error"
DEFAULT_ROOT_EXCEPTION = f"{BUILTINS_MODULE}.Exception"

# Generation template
TEMPLATE_PLACEHOLDERS: Tuple[str, ...] = ("namespace", "class", "extends")
DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "resources" / "exception.tpl"

# Configuration
CONFIG_ENV_VAR = "EXCEPTION_FACTORY_CONFIG"

# Marker attribute set on generated classes and hooked module __getattr__ functions
GENERATED_MARKER_ATTR = "__lazy_generated__"
HOOK_REGISTRY_ATTR = "__lazy_registry__"
