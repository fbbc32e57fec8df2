"""
Custom exceptions for the exception_factory core system.
Errors are specific and fail loudly; gating declines are not errors.
"""

class ExceptionFactoryError(Exception):
    """Base class for all exception_factory custom exceptions."""
    pass

class TemplateLoadError(ExceptionFactoryError, RuntimeError):
    """Raised when the generation template is missing or unreadable."""
    pass

class ParentTypeNotFoundError(ExceptionFactoryError, LookupError):
    """Raised when a resolved parent name does not import to an exception type."""
    pass

class ExceptionTypeNotFoundError(ExceptionFactoryError, LookupError):
    """Raised by explicit lookups when a name fails a gating precondition."""
    pass

class ConfigurationError(ExceptionFactoryError, ValueError):
    """Raised when a registry configuration file is malformed."""
    pass
