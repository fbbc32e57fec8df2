"""
Configuration dataclasses for exception_factory.

This module defines the configuration object used to seed an ExceptionRegistry:
the allowed package prefixes, explicit parent overrides, the naming-convention
marker and the location of the generation template. Configuration is intended
to be immutable; it can be provided as a Python object or loaded from YAML.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from exception_factory.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_ERROR_MARKER,
    DEFAULT_PACKAGE_PREFIX,
    DEFAULT_PACKAGE_PREFIXES,
    DEFAULT_TEMPLATE_PATH,
)
from exception_factory.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for a lazy exception registry."""

    package_prefixes: Tuple[str, ...] = DEFAULT_PACKAGE_PREFIXES
    """Top-level packages the registry may synthesize exception types for."""

    parent_overrides: Dict[str, str] = field(default_factory=dict)
    """Short exception name -> fully-qualified parent name. Wins over the built-in catalog."""

    error_marker: str = DEFAULT_ERROR_MARKER
    """Substring a short name must contain before a type is synthesized for it."""

    template_path: Path = DEFAULT_TEMPLATE_PATH
    """Text template rendered into the docstring of every generated type."""


def _coerce_prefixes(value: Any, source: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) and v.isidentifier() for v in value):
        raise ConfigurationError(f"{source}: 'package_prefixes' must be a list of top-level package names")
    # The default prefix is always kept so the allow-list is never empty
    prefixes = [DEFAULT_PACKAGE_PREFIX]
    for prefix in value:
        if prefix not in prefixes:
            prefixes.append(prefix)
    return tuple(prefixes)


def _coerce_overrides(value: Any, source: str) -> Dict[str, str]:
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ConfigurationError(f"{source}: 'parent_overrides' must map short names to parent names")
    return dict(value)


def config_from_mapping(data: Dict[str, Any], source: str = "<mapping>") -> RegistryConfig:
    """
    Build a RegistryConfig from a plain mapping (typically parsed YAML).

    Args:
        data: Mapping with any of the RegistryConfig field names as keys
        source: Description of where the mapping came from, used in error messages

    Returns:
        A RegistryConfig with defaults for every key not present

    Raises:
        ConfigurationError: If the mapping has unknown keys or wrongly typed values
    """
    known = {f.name for f in fields(RegistryConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"{source}: unknown configuration keys {unknown}")

    kwargs: Dict[str, Any] = {}
    if "package_prefixes" in data:
        kwargs["package_prefixes"] = _coerce_prefixes(data["package_prefixes"], source)
    if "parent_overrides" in data:
        kwargs["parent_overrides"] = _coerce_overrides(data["parent_overrides"], source)
    if "error_marker" in data:
        marker = data["error_marker"]
        if not isinstance(marker, str) or not marker:
            raise ConfigurationError(f"{source}: 'error_marker' must be a non-empty string")
        kwargs["error_marker"] = marker
    if "template_path" in data:
        template_path = data["template_path"]
        if not isinstance(template_path, str) or not template_path:
            raise ConfigurationError(f"{source}: 'template_path' must be a path string")
        kwargs["template_path"] = Path(template_path).expanduser()
    return RegistryConfig(**kwargs)


def load_config(config_file: Optional[Union[str, Path]] = None) -> RegistryConfig:
    """
    Load registry configuration from a YAML file.

    The file defaults to the path named by the EXCEPTION_FACTORY_CONFIG environment
    variable. When neither is given the default configuration is returned.

    Args:
        config_file: Optional path to a YAML configuration file

    Returns:
        The loaded RegistryConfig

    Raises:
        ConfigurationError: If the file is missing, unparsable or malformed
    """
    if config_file is None:
        config_file = os.getenv(CONFIG_ENV_VAR) or None
    if config_file is None:
        logger.debug("No registry config file given, using defaults")
        return RegistryConfig()

    path = Path(config_file).expanduser()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded_data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read registry config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML from {path}: {e}") from e

    if loaded_data is None:
        logger.info(f"Registry config {path} is empty, using defaults")
        return RegistryConfig()
    if not isinstance(loaded_data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")

    config = config_from_mapping(loaded_data, source=str(path))
    logger.info(f"Loaded registry config from {path}")
    return config
