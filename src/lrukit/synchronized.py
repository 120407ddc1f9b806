import threading
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from .lru_cache import MISSING, CacheStats, LRUCache

K = TypeVar("K")
V = TypeVar("V")


class SynchronizedLRUCache(Generic[K, V]):
    """
    A thread-safe wrapper around LRUCache.

    A single lock guards every call, reads included: `get` reorders the recency
    list, so there is no such thing as a read-only lookup. Iteration methods return
    lists built while holding the lock rather than live iterators.

    The lock is reentrant. An `on_evict` callback runs while it is held and may
    call back into the same wrapper (for example `size()`).
    """

    def __init__(self, cache: LRUCache[K, V]):
        self._cache = cache
        self._mutex = threading.RLock()

    @classmethod
    def from_capacity(
        cls, capacity: int, on_evict: Optional[Callable[[K, V], None]] = None
    ) -> "SynchronizedLRUCache[K, V]":
        return cls(LRUCache(capacity, on_evict=on_evict))

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._mutex:
            return self._cache.get(key, default)

    def __getitem__(self, key: K) -> V:
        with self._mutex:
            return self._cache[key]

    def put(self, key: K, value: V) -> None:
        with self._mutex:
            self._cache.put(key, value)

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def get_or_put(self, key: K, factory: Callable[[], V]) -> V:
        """
        Returns the cached value for `key`, computing and storing it with `factory`
        on a miss. The lookup and the insertion happen under one lock acquisition, so
        concurrent callers never compute the same missing key twice.
        """
        with self._mutex:
            value = self._cache.get(key, MISSING)
            if value is MISSING:
                value = factory()
                self._cache.put(key, value)
            return value

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        with self._mutex:
            return self._cache.peek(key, default)

    def __contains__(self, key: object) -> bool:
        with self._mutex:
            return key in self._cache

    def pop(self, key: K, default: Any = MISSING) -> Any:
        with self._mutex:
            return self._cache.pop(key, default)

    def clear(self) -> None:
        with self._mutex:
            self._cache.clear()

    def size(self) -> int:
        with self._mutex:
            return self._cache.size()

    def __len__(self) -> int:
        return self.size()

    def mru_key(self) -> Optional[K]:
        with self._mutex:
            return self._cache.mru_key()

    def lru_key(self) -> Optional[K]:
        with self._mutex:
            return self._cache.lru_key()

    def keys(self) -> List[K]:
        with self._mutex:
            return list(self._cache.keys())

    def values(self) -> List[V]:
        with self._mutex:
            return list(self._cache.values())

    def items(self) -> List[Tuple[K, V]]:
        with self._mutex:
            return list(self._cache.items())

    def stats(self) -> CacheStats:
        with self._mutex:
            return self._cache.stats()

    def __repr__(self) -> str:
        with self._mutex:
            return f"{type(self).__name__}({self._cache!r})"
