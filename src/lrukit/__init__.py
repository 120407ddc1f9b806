"""
A bounded least-recently-used (LRU) cache with O(1) `get` and `put`.

### Quickstart

Install the library with pip.

```bash
pip install lrukit
```

Then use the cache like a small mapping:

```python
from lrukit import LRUCache

cache = LRUCache[int, str](capacity=2)
cache.put(1, "one")
cache.put(2, "two")
cache.get(1)            # "one", and 1 is now the most recently used key
cache.put(3, "three")   # evicts 2, the least recently used key
cache.get(2)            # None: a miss is not an error
```

`get` and `put` both count as a use. To share a cache between threads, wrap it in
`SynchronizedLRUCache`.

### API Reference
"""

from .config import Config, load_env
from .errors import InvalidCapacityError, InvalidKeyError, LRUCacheError
from .lru_cache import CacheStats, LRUCache
from .synchronized import SynchronizedLRUCache
from .trace import TraceError
from .version import VERSION

__all__ = [
    "CacheStats",
    "Config",
    "InvalidCapacityError",
    "InvalidKeyError",
    "LRUCache",
    "LRUCacheError",
    "SynchronizedLRUCache",
    "TraceError",
    "VERSION",
    "load_env",
]
