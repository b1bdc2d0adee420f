"""Exception hierarchy for the generation cache.

A cache miss is not an error: lookups return ``None`` for it. Every
exception below means the caller must not silently recompute as if the
entry were absent.
"""


class GenerationCacheError(Exception):
    """Base class for all generation cache errors."""


class ConfigurationError(GenerationCacheError):
    """Connection or cache configuration is invalid. Fatal, not retried."""


class StoreUnavailableError(GenerationCacheError):
    """The Redis store could not be reached or timed out."""


class CacheCorruptionError(GenerationCacheError):
    """A stored value could not be decoded.

    Attributes:
        key: The Redis key holding the unreadable value, if known
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
