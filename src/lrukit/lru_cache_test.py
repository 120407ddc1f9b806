import random
import unittest

from .errors import InvalidCapacityError, InvalidKeyError, LRUCacheError
from .lru_cache import CacheStats, LRUCache


class TestLRUCache(unittest.TestCase):
    def test_store_and_retrieve_values(self):
        """Test storing and retrieving values."""
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        self.assertEqual(cache.get("a"), 1)
        self.assertEqual(cache.size(), 1)

    def test_missing_keys(self):
        """Test that a miss returns the default instead of raising."""
        cache = LRUCache[str, int](capacity=2)
        self.assertIsNone(cache.get("missing"))
        self.assertEqual(cache.get("missing", -1), -1)
        with self.assertRaises(KeyError):
            cache["missing"]

    def test_none_values_are_distinguishable(self):
        cache = LRUCache[str, None](capacity=2)
        cache.put("a", None)
        marker = object()
        self.assertIsNone(cache.get("a", marker))
        self.assertIs(cache.get("b", marker), marker)
        self.assertIsNone(cache["a"])

    def test_respect_capacity(self):
        """Test respecting capacity."""
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)
        self.assertIsNone(cache.get("a"))
        self.assertEqual(cache.get("b"), 2)
        self.assertEqual(cache.get("c"), 3)
        self.assertEqual(len(cache), 2)

    def test_refresh_items_on_get(self):
        """Test refreshing items on get."""
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")  # refresh "a"
        cache.put("c", 3)
        self.assertEqual(cache.get("a"), 1)
        self.assertIsNone(cache.get("b"))
        self.assertEqual(cache.get("c"), 3)

    def test_update_existing_keys(self):
        """Test updating existing keys."""
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("a", 10)
        self.assertEqual(cache.size(), 2)
        self.assertEqual(cache.stats().evictions, 0)
        # The update refreshed "a", so "b" goes first.
        cache.put("c", 3)
        self.assertEqual(cache.get("a"), 10)
        self.assertIsNone(cache.get("b"))

    def test_two_slot_sequence(self):
        cache = LRUCache[int, int](capacity=2)
        cache.put(1, 1)
        cache.put(2, 2)
        self.assertEqual(cache.get(1), 1)
        cache.put(3, 3)  # evicts 2
        self.assertIsNone(cache.get(2))
        cache.put(4, 4)  # evicts 1
        self.assertIsNone(cache.get(1))
        self.assertEqual(cache.get(3), 3)
        self.assertEqual(cache.get(4), 4)

    def test_single_slot(self):
        cache = LRUCache[int, int](capacity=1)
        cache.put(1, 1)
        cache.put(2, 2)
        self.assertIsNone(cache.get(1))
        self.assertEqual(cache.get(2), 2)

    def test_three_slot_promotion(self):
        cache = LRUCache[int, int](capacity=3)
        cache.put(1, 1)
        cache.put(2, 2)
        cache.put(3, 3)
        self.assertEqual(cache.get(1), 1)
        cache.put(4, 4)  # 2 is now the least recently used
        self.assertIsNone(cache.get(2))
        self.assertEqual(cache.get(1), 1)
        self.assertEqual(cache.get(3), 3)
        self.assertEqual(cache.get(4), 4)

    def test_invalid_capacity(self):
        for capacity in [0, -1, -100, 1.5, "2", None, True]:
            with self.subTest(capacity=capacity):
                with self.assertRaises(InvalidCapacityError) as cm:
                    LRUCache(capacity)
                self.assertEqual(cm.exception.capacity, capacity)

    def test_invalid_capacity_is_a_value_error(self):
        with self.assertRaises(ValueError):
            LRUCache(0)
        with self.assertRaises(LRUCacheError):
            LRUCache(-5)

    def test_new_cache_is_empty(self):
        for capacity in [1, 2, 1000, 10**9]:
            cache = LRUCache(capacity)
            self.assertEqual(cache.size(), 0)
            self.assertEqual(cache.capacity, capacity)
            self.assertIsNone(cache.lru_key())
            self.assertIsNone(cache.mru_key())
            self.assertEqual(list(cache), [])

    def test_none_key_rejected_on_put(self):
        cache = LRUCache[object, int](capacity=2)
        with self.assertRaises(InvalidKeyError):
            cache.put(None, 1)
        self.assertEqual(cache.size(), 0)
        # A lookup on None is just a miss.
        self.assertIsNone(cache.get(None))
        self.assertEqual(cache.stats().misses, 1)

    def test_unhashable_key_rejected_on_put(self):
        cache = LRUCache[object, int](capacity=2)
        with self.assertRaises(InvalidKeyError) as cm:
            cache.put(["a"], 1)
        self.assertIsInstance(cm.exception.__cause__, TypeError)
        self.assertIsInstance(cm.exception, TypeError)
        self.assertEqual(cache.size(), 0)

    def test_recency_order(self):
        cache = LRUCache[str, int](capacity=3)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)
        self.assertEqual(list(cache.keys()), ["c", "b", "a"])
        cache.get("a")
        self.assertEqual(list(cache.keys()), ["a", "c", "b"])
        cache.put("b", 20)
        self.assertEqual(list(cache.items()), [("b", 20), ("a", 1), ("c", 3)])
        self.assertEqual(list(cache.values()), [20, 1, 3])
        self.assertEqual(cache.mru_key(), "b")
        self.assertEqual(cache.lru_key(), "c")

    def test_peek_and_contains_do_not_promote(self):
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        cache.put("b", 2)
        self.assertEqual(cache.peek("a"), 1)
        self.assertTrue("a" in cache)
        self.assertIsNone(cache.peek("zzz"))
        self.assertFalse("zzz" in cache)
        cache.put("c", 3)
        self.assertNotIn("a", cache)
        self.assertIn("b", cache)
        stats = cache.stats()
        self.assertEqual((stats.hits, stats.misses), (0, 0))

    def test_pop(self):
        evicted = []
        cache = LRUCache[str, int](capacity=2, on_evict=lambda k, v: evicted.append(k))
        cache.put("a", 1)
        cache.put("b", 2)
        self.assertEqual(cache.pop("a"), 1)
        self.assertEqual(cache.size(), 1)
        self.assertEqual(cache.pop("a", None), None)
        with self.assertRaises(KeyError):
            cache.pop("a")
        cache.put("c", 3)
        self.assertEqual(list(cache), ["c", "b"])
        self.assertEqual(evicted, [])

    def test_clear_all_items(self):
        """Test clearing all items."""
        cache = LRUCache[str, int](capacity=2)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.clear()
        self.assertEqual(cache.size(), 0)
        self.assertIsNone(cache.get("a"))
        self.assertIsNone(cache.get("b"))
        self.assertEqual(cache.stats().hits, 1)
        cache.put("c", 3)
        self.assertEqual(list(cache), ["c"])

    def test_on_evict_receives_evicted_entry(self):
        evicted = []
        cache = LRUCache[str, int](capacity=2, on_evict=lambda k, v: evicted.append((k, v)))
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("a", 11)
        cache.put("c", 3)
        cache.put("d", 4)
        self.assertEqual(evicted, [("b", 2), ("a", 11)])

    def test_on_evict_error_propagates_after_eviction(self):
        def boom(key, value):
            raise RuntimeError("boom")

        cache = LRUCache[str, int](capacity=1, on_evict=boom)
        cache.put("a", 1)
        with self.assertLogs("lrukit.lru_cache", level="WARNING"):
            with self.assertRaises(RuntimeError):
                cache.put("b", 2)
        # The cache itself is consistent: "b" is in, "a" is out.
        self.assertEqual(list(cache.items()), [("b", 2)])
        self.assertEqual(cache.size(), 1)

    def test_stats(self):
        cache = LRUCache[str, int](capacity=1)
        cache.put("a", 1)
        cache.get("a")
        cache.get("b")
        cache.put("b", 2)
        self.assertEqual(cache.stats(), CacheStats(hits=1, misses=1, evictions=1, size=1, capacity=1))
        self.assertEqual(cache.stats().hit_rate, 0.5)
        self.assertEqual(LRUCache(3).stats().hit_rate, 0.0)

    def test_mutation_during_iteration(self):
        cache = LRUCache[str, int](capacity=3)
        cache.put("a", 1)
        cache.put("b", 2)
        with self.assertRaises(RuntimeError):
            for key in cache:
                cache.put("z", 0)
        with self.assertRaises(RuntimeError):
            for key in cache.keys():
                cache.get("a")

    def test_repr(self):
        cache = LRUCache[int, str](capacity=2)
        self.assertEqual(repr(cache), "LRUCache(capacity=2, {})")
        cache.put(1, "one")
        cache.put(2, "two")
        self.assertEqual(repr(cache), "LRUCache(capacity=2, {2: 'two', 1: 'one'})")

    def test_setitem_alias(self):
        cache = LRUCache[str, int](capacity=1)
        cache["a"] = 1
        cache["b"] = 2
        self.assertEqual(cache["b"], 2)
        self.assertNotIn("a", cache)

    def test_matches_reference_model(self):
        """Random get/put sequences agree with a simple list-based model."""
        rng = random.Random(1234)
        for capacity in [1, 2, 3, 7]:
            cache = LRUCache[int, int](capacity)
            model = []  # (key, value), most recent first
            for i in range(2000):
                key = rng.randrange(10)
                if rng.random() < 0.5:
                    match = [kv for kv in model if kv[0] == key]
                    expected = match[0][1] if match else None
                    if match:
                        model.remove(match[0])
                        model.insert(0, match[0])
                    self.assertEqual(cache.get(key), expected)
                else:
                    model = [kv for kv in model if kv[0] != key]
                    model.insert(0, (key, i))
                    del model[capacity:]
                    cache.put(key, i)
                self.assertLessEqual(cache.size(), capacity)
                self.assertEqual(list(cache.items()), model)


if __name__ == "__main__":
    unittest.main()
