"""
A module providing a bounded LRU (Least Recently Used) cache implementation.

The cache pairs a dict index (key -> entry) with an intrusive doubly linked
list that keeps entries in recency order. Two sentinel nodes anchor the list so
linking and unlinking never need boundary checks. Both `get` and `put` count as
a use and move the touched entry to the most-recently-used end; when an
insertion pushes the cache past its capacity, the entry at the least-recently-used
end is evicted. Every operation on a single key is O(1).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from .errors import InvalidCapacityError, InvalidKeyError

K = TypeVar("K")
V = TypeVar("V")

log = logging.getLogger(__name__)

# Pass as `get`'s default to tell a miss apart from a stored None.
MISSING: Any = object()


class _Entry:
    """One key/value pair, linked into the recency list."""

    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key: Any, value: Any):
        self.key = key
        self.value = value
        self.prev: Optional["_Entry"] = None
        self.next: Optional["_Entry"] = None


class _RecencyList:
    """
    Doubly linked list of entries ordered from most to least recently used.

    `head` and `tail` are sentinels. They never hold data and are never unlinked,
    so `head.next` is the MRU entry and `tail.prev` is the LRU entry (or the other
    sentinel when the list is empty).
    """

    __slots__ = ("head", "tail")

    def __init__(self):
        self.head = _Entry(None, None)
        self.tail = _Entry(None, None)
        self.head.next = self.tail
        self.tail.prev = self.head

    def push_front(self, entry: _Entry) -> None:
        first = self.head.next
        entry.prev = self.head
        entry.next = first
        first.prev = entry
        self.head.next = entry

    def unlink(self, entry: _Entry) -> None:
        entry.prev.next = entry.next
        entry.next.prev = entry.prev
        entry.prev = None
        entry.next = None

    def move_to_front(self, entry: _Entry) -> None:
        self.unlink(entry)
        self.push_front(entry)

    def front(self) -> Optional[_Entry]:
        entry = self.head.next
        return None if entry is self.tail else entry

    def back(self) -> Optional[_Entry]:
        entry = self.tail.prev
        return None if entry is self.head else entry

    def reset(self) -> None:
        # Break the chain so dropped entries don't keep each other alive.
        entry = self.head.next
        while entry is not self.tail:
            nxt = entry.next
            entry.prev = entry.next = None
            entry = nxt
        self.head.next = self.tail
        self.tail.prev = self.head


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters for an LRUCache."""

    hits: int
    misses: int
    evictions: int
    size: int
    capacity: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class LRUCache(Generic[K, V]):
    """
    A fixed-capacity Least Recently Used (LRU) cache.

    Items are considered "used" when they are added with `put` or read with `get`.
    When an insertion takes the cache past `capacity`, exactly one entry (the least
    recently used one) is evicted. Updating an existing key never evicts.

    A cache miss is a normal outcome, not an error: `get` returns `default` on a
    miss, and `cache[key]` raises KeyError for callers that prefer the mapping
    protocol. `peek`, `in` and iteration read the cache without changing recency.

    This class does no locking. Share it between threads through
    `lrukit.synchronized.SynchronizedLRUCache`.

    Args:
        capacity: Maximum number of entries. Must be a positive integer.
        on_evict: Optional callback invoked with `(key, value)` after an entry is
            evicted for capacity. Not called for `pop` or `clear`.

    Raises:
        InvalidCapacityError: If capacity is not a positive integer.
    """

    def __init__(self, capacity: int, on_evict: Optional[Callable[[K, V], None]] = None):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError(capacity)

        self._capacity = capacity
        self._on_evict = on_evict
        self._index: dict = {}
        self._list = _RecencyList()
        # Bumped on every structural or ordering change; iterators compare against it.
        self._version = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        log.debug(f"Created LRU cache with capacity {capacity}")

    @property
    def capacity(self) -> int:
        return self._capacity

    def size(self) -> int:
        """Returns the number of live entries."""
        return len(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """
        Retrieves a value from the cache.
        If the key exists, the entry is marked as most recently used.

        Args:
            key: The key to look up.
            default: Value returned when the key is not present.

        Returns:
            The cached value, or `default` on a miss. A miss leaves the cache untouched.
        """
        entry = self._index.get(key)
        if entry is None:
            self._misses += 1
            return default

        self._hits += 1
        self._promote(entry)
        return entry.value

    def __getitem__(self, key: K) -> V:
        entry = self._index.get(key)
        if entry is None:
            self._misses += 1
            raise KeyError(key)

        self._hits += 1
        self._promote(entry)
        return entry.value

    def put(self, key: K, value: V) -> None:
        """
        Stores a value in the cache.
        If the key already exists, the value is updated in place and marked as most
        recently used; the size does not change. Otherwise a new entry is added, and
        if that takes the cache over capacity the least recently used entry is evicted.

        Args:
            key: The key to store. Must be hashable and not None.
            value: The value to store.

        Raises:
            InvalidKeyError: If the key is None or unhashable.
        """
        if key is None:
            raise InvalidKeyError(key, "None is not allowed as a cache key")
        try:
            entry = self._index.get(key)
        except TypeError as e:
            raise InvalidKeyError(key, "key is not hashable") from e

        if entry is not None:
            entry.value = value
            self._promote(entry)
            return

        entry = _Entry(key, value)
        self._list.push_front(entry)
        self._index[key] = entry
        self._version += 1

        if len(self._index) > self._capacity:
            self._evict()

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Returns the value for `key` without marking it as used."""
        entry = self._index.get(key)
        return default if entry is None else entry.value

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def pop(self, key: K, default: Any = MISSING) -> Any:
        """
        Removes `key` and returns its value. The eviction callback is not called.

        Raises:
            KeyError: If the key is missing and no default was given.
        """
        entry = self._index.pop(key, None)
        if entry is None:
            if default is MISSING:
                raise KeyError(key)
            return default

        self._list.unlink(entry)
        self._version += 1
        return entry.value

    def clear(self) -> None:
        """Removes all items from the cache. Stats are kept."""
        self._index.clear()
        self._list.reset()
        self._version += 1

    def mru_key(self) -> Optional[K]:
        """Returns the most recently used key, or None if the cache is empty."""
        entry = self._list.front()
        return None if entry is None else entry.key

    def lru_key(self) -> Optional[K]:
        """Returns the key that the next over-capacity insertion would evict."""
        entry = self._list.back()
        return None if entry is None else entry.key

    def _entries(self) -> Iterator[_Entry]:
        version = self._version
        entry = self._list.head.next
        tail = self._list.tail
        while entry is not tail:
            yield entry
            if self._version != version:
                raise RuntimeError("LRUCache changed during iteration")
            entry = entry.next

    def __iter__(self) -> Iterator[K]:
        return (entry.key for entry in self._entries())

    def keys(self) -> Iterator[K]:
        """Iterates keys from most to least recently used."""
        return iter(self)

    def values(self) -> Iterator[V]:
        return (entry.value for entry in self._entries())

    def items(self) -> Iterator[Tuple[K, V]]:
        return ((entry.key, entry.value) for entry in self._entries())

    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            size=len(self._index),
            capacity=self._capacity,
        )

    def __repr__(self) -> str:
        body: List[str] = [f"{k!r}: {v!r}" for k, v in self.items()]
        return f"{type(self).__name__}(capacity={self._capacity}, {{{', '.join(body)}}})"

    def _promote(self, entry: _Entry) -> None:
        if self._list.head.next is not entry:
            self._list.move_to_front(entry)
            self._version += 1

    def _evict(self) -> None:
        victim = self._list.back()
        self._list.unlink(victim)
        del self._index[victim.key]
        self._evictions += 1
        log.debug(f"Evicted least recently used key {victim.key!r} (capacity {self._capacity})")

        if self._on_evict is not None:
            try:
                self._on_evict(victim.key, victim.value)
            except Exception as e:
                log.warning(f"Eviction callback failed for key {victim.key!r}: {e}")
                raise
