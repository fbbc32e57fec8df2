"""Core module for exception_factory."""

# These imports are re-exported through __all__
from exception_factory.core.registry import ExceptionRegistry
from exception_factory.core.config import RegistryConfig

__all__ = [
    'ExceptionRegistry',
    'RegistryConfig',
]
