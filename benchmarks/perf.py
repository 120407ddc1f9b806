import time

from lrukit import LRUCache, SynchronizedLRUCache

LOOPS = 200_000
CAPACITY = 1_000
KEYS = 2_000


def run(cache, label):
    t = time.time()
    for i in range(LOOPS):
        key = i % KEYS
        if cache.get(key) is None:
            cache.put(key, i)
    elapsed = time.time() - t
    stats = cache.stats()
    print(f"ran {LOOPS} in {elapsed:.3f}s ({label}, hit rate {stats.hit_rate:.1%})")


def main():
    run(LRUCache(CAPACITY), "unsynchronized")
    run(SynchronizedLRUCache.from_capacity(CAPACITY), "synchronized")


if __name__ == "__main__":
    main()
