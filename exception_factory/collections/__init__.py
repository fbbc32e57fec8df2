"""Collections whose error types are generated by the default exception registry."""

from exception_factory.collections.queue import Queue

__all__ = ['Queue']
