from exception_factory.constants.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_ERROR_MARKER,
    DEFAULT_PACKAGE_PREFIX,
    DEFAULT_PACKAGE_PREFIXES,
    DEFAULT_ROOT_EXCEPTION,
    DEFAULT_TEMPLATE_PATH,
    NAMESPACE_SEPARATOR,
)

__all__ = [
    'CONFIG_ENV_VAR',
    'DEFAULT_ERROR_MARKER',
    'DEFAULT_PACKAGE_PREFIX',
    'DEFAULT_PACKAGE_PREFIXES',
    'DEFAULT_ROOT_EXCEPTION',
    'DEFAULT_TEMPLATE_PATH',
    'NAMESPACE_SEPARATOR',
]
