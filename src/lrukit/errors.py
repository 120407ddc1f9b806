"""Exceptions raised by lrukit.

A cache miss is not an error: `LRUCache.get` returns a default instead of
raising. These classes cover invalid construction and invalid keys.
"""


class LRUCacheError(Exception):
    """Base class for all lrukit errors."""


class InvalidCapacityError(LRUCacheError, ValueError):
    """Raised when a cache is constructed with a non-positive or non-integer capacity."""

    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"Cache capacity must be a positive integer, got {capacity!r}")


class InvalidKeyError(LRUCacheError, TypeError):
    """Raised by `put` when the key is None or cannot be hashed."""

    def __init__(self, key, reason: str):
        self.key = key
        super().__init__(f"Invalid cache key {key!r}: {reason}")
