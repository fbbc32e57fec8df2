"""
Catalog of built-in exception types available as lazy parents.

The catalog is discovered by scanning the ``builtins`` module once. Built-ins
whose name already carries the error marker map to themselves; built-ins named
``<Stem>Error`` are catalogued under their marker spelling so that a request
for ``acme.RuntimeException`` inherits from ``RuntimeError``.
"""

import builtins
import logging
from typing import Dict

from exception_factory.constants import DEFAULT_ERROR_MARKER
from exception_factory.constants.constants import BUILTIN_ERROR_SUFFIX

logger = logging.getLogger(__name__)


def scan_builtin_exceptions(error_marker: str = DEFAULT_ERROR_MARKER) -> Dict[str, str]:
    """
    Build the short-name -> built-in-name catalog.

    Args:
        error_marker: Substring identifying error-like names

    Returns:
        Mapping whose keys and values are both unique
    """
    catalog: Dict[str, str] = {}
    aliases: Dict[str, str] = {}

    for name, obj in sorted(vars(builtins).items()):
        if not isinstance(obj, type) or not issubclass(obj, BaseException):
            continue
        if error_marker in name:
            catalog[name] = name
        elif name.endswith(BUILTIN_ERROR_SUFFIX):
            stem = name[: -len(BUILTIN_ERROR_SUFFIX)]
            aliases[f"{stem}{error_marker}"] = name

    # Direct names win over derived aliases
    for alias, name in aliases.items():
        catalog.setdefault(alias, name)

    logger.debug(f"Scanned {len(catalog)} built-in exception parents")
    return catalog
