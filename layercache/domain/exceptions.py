"""Exceptions raised by layercache.

Absence of a key is never an error; these cover caller misuse and bad
configuration only.
"""


class LayerCacheError(Exception):
    """Base class for all layercache errors."""


class InvalidCacheArgumentError(LayerCacheError, ValueError):
    """Raised when a cache operation receives a None key or value."""

    def __init__(self, argument: str, operation: str):
        self.argument = argument
        self.operation = operation
        super().__init__(f"Cache {operation}() does not accept a None {argument}.")


class CacheConfigurationError(LayerCacheError, ValueError):
    """Raised when a cache layer or builder is configured with invalid values."""
