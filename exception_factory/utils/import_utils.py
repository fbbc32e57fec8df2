"""
Utility functions for importing objects by dotted name.

Parent types for generated exceptions are named as dotted paths
(``builtins.LookupError``, ``acme.errors.AcmeException``). These helpers turn
such a path into the object it names, importing the owning module on demand.
"""
import importlib
import logging
from typing import Any, Tuple

logger = logging.getLogger(__name__)


def split_qualified_name(qualified_name: str) -> Tuple[str, str]:
    """
    Split a dotted name into its namespace and short name.

    Args:
        qualified_name: Dotted name such as ``acme.data.NotFoundException``

    Returns:
        ``(namespace, short_name)``; the namespace is empty for undotted names
    """
    namespace, _, short_name = qualified_name.rpartition(".")
    return namespace, short_name


def import_object(qualified_name: str) -> Any:
    """
    Import the object named by a dotted path.

    Segments are resolved left to right: an attribute of the current object is
    preferred, and a submodule is imported only when the attribute is missing.
    Attribute access goes through module ``__getattr__`` hooks, so a parent
    that is itself lazily generated resolves too.

    Args:
        qualified_name: Dotted path to the object

    Returns:
        The named object

    Raises:
        ImportError: If the leading module or a needed submodule cannot be imported
        AttributeError: If the final attribute is missing
    """
    parts = qualified_name.split(".")
    if not all(parts):
        raise ImportError(f"Invalid dotted name: {qualified_name!r}")

    obj = importlib.import_module(parts[0])
    for index, part in enumerate(parts[1:], start=1):
        try:
            obj = getattr(obj, part)
            continue
        except AttributeError:
            if index == len(parts) - 1:
                raise
        # Missing intermediate attribute: it must be a submodule
        obj = importlib.import_module(".".join(parts[: index + 1]))

    logger.debug(f"Imported {qualified_name}")
    return obj
