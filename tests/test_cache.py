"""
Unit tests for the tagged read-through cache.
"""
import threading

import pytest

from bookapi.utils.cache import (
    TaggedCache,
    AUTHORS_TAG,
    BOOKS_TAG,
    list_key,
    detail_key,
)


class Counter:
    """compute() stub that records how often it ran."""

    def __init__(self, value="payload"):
        self.calls = 0
        self.value = value

    def __call__(self):
        self.calls += 1
        return f"{self.value}-{self.calls}"


class FakeTimer:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestKeys:
    def test_list_key(self):
        assert list_key("Author", 1, 3) == "Author-1-3"
        assert list_key("Author", 2, 3) == "Author-2-3"

    def test_detail_key(self):
        assert detail_key("Book", 7) == "Book-7"


class TestTaggedCache:
    @pytest.fixture
    def cache(self):
        return TaggedCache(maxsize=64, ttl=300)

    def test_miss_computes_then_hits(self, cache):
        compute = Counter()

        first = cache.remember(AUTHORS_TAG, "Author-1-3", compute)
        second = cache.remember(AUTHORS_TAG, "Author-1-3", compute)

        assert first == second == "payload-1"
        assert compute.calls == 1

    def test_distinct_keys_are_distinct_entries(self, cache):
        compute = Counter()

        cache.remember(AUTHORS_TAG, "Author-1-3", compute)
        cache.remember(AUTHORS_TAG, "Author-2-3", compute)

        assert compute.calls == 2
        assert len(cache) == 2

    def test_invalidate_drops_every_entry_of_the_tag(self, cache):
        compute = Counter()
        keys = ["Author-1-3", "Author-2-3", "Author-5"]
        for key in keys:
            cache.remember(AUTHORS_TAG, key, compute)

        cache.invalidate(AUTHORS_TAG)

        assert len(cache) == 0
        for key in keys:
            cache.remember(AUTHORS_TAG, key, compute)
        assert compute.calls == 6

    def test_invalidate_leaves_other_tags_alone(self, cache):
        books = Counter("books")
        cache.remember(BOOKS_TAG, "Book-1-20", books)

        cache.invalidate(AUTHORS_TAG)

        assert cache.remember(BOOKS_TAG, "Book-1-20", books) == "books-1"
        assert books.calls == 1

    def test_invalidate_several_tags(self, cache):
        authors, books = Counter("authors"), Counter("books")
        cache.remember(AUTHORS_TAG, "Author-1", authors)
        cache.remember(BOOKS_TAG, "Book-1-20", books)

        cache.invalidate(AUTHORS_TAG, BOOKS_TAG)

        assert cache.remember(AUTHORS_TAG, "Author-1", authors) == "authors-2"
        assert cache.remember(BOOKS_TAG, "Book-1-20", books) == "books-2"

    def test_computation_racing_an_invalidation_is_never_served(self, cache):
        # A value computed while a mutation commits and invalidates must not outlive it
        def stale_compute():
            cache.invalidate(AUTHORS_TAG)
            return "stale"

        assert cache.remember(AUTHORS_TAG, "Author-1-3", stale_compute) == "stale"
        assert cache.remember(AUTHORS_TAG, "Author-1-3", lambda: "fresh") == "fresh"

    def test_entries_expire_after_ttl(self):
        timer = FakeTimer()
        cache = TaggedCache(maxsize=8, ttl=10, timer=timer)
        compute = Counter()

        cache.remember(AUTHORS_TAG, "Author-1", compute)
        timer.now = 11

        assert cache.remember(AUTHORS_TAG, "Author-1", compute) == "payload-2"

    def test_concurrent_lookups_agree(self, cache):
        results = []

        def worker():
            results.append(cache.remember(BOOKS_TAG, "Book-1-20", lambda: "same"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["same"] * 8
