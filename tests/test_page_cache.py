from __future__ import annotations

import pytest

from searchkit.services.page_cache import CacheEntry, PageCache


def test_merged_items_follow_offset_order():
    entry = CacheEntry()
    entry.store_page(10, ["k", "l"])
    entry.store_page(0, ["a", "b", "c", "d", "e"])
    entry.store_page(5, ["f", "g", "h", "i", "j"])

    assert entry.merged_items() == list("abcdefghijkl")


@pytest.mark.parametrize(
    "total, merged, has_more",
    [
        (12, 10, True),
        (12, 12, False),
        (None, 0, True),
        (None, 50, True),
    ],
)
def test_progress_has_more(total, merged, has_more):
    entry = CacheEntry(total=total)
    if merged:
        entry.store_page(0, list(range(merged)))

    progress = entry.progress()

    assert progress.has_more is has_more
    assert progress.total == total
    assert len(progress.items) == merged


def test_store_page_never_clears_known_total():
    entry = CacheEntry()
    entry.store_page(0, [1, 2], total=7)
    entry.store_page(2, [3, 4])
    assert entry.total == 7

    entry.store_page(4, [5], total=5)
    assert entry.total == 5


def test_eviction_keeps_cache_bounded():
    cache = PageCache(max_queries=3)
    for key in ("a|10", "b|10", "c|10", "d|10"):
        cache.ensure(key)

    assert len(cache) == 3
    assert "a|10" not in cache
    assert cache.keys() == ["b|10", "c|10", "d|10"]


def test_eviction_follows_insertion_order_not_access():
    cache = PageCache(max_queries=2)
    first = cache.ensure("a|10")
    cache.ensure("b|10")

    assert cache.ensure("a|10") is first
    assert cache.get("a|10") is first

    cache.ensure("c|10")

    assert "a|10" not in cache
    assert "b|10" in cache and "c|10" in cache


def test_get_does_not_create_entries():
    cache = PageCache(max_queries=2)
    assert cache.get("missing|10") is None
    assert len(cache) == 0


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        PageCache(max_queries=0)
