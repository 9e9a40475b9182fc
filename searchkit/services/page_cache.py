"""Bounded in-memory cache of paginated search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator

from searchkit.domain.models import SearchProgress
from searchkit.logging import logger


@dataclass(slots=True)
class CacheEntry:
    """Pages fetched so far for one SearchKey."""

    pages: dict[int, list[Any]] = field(default_factory=dict)
    total: int | float | None = None
    # Advisory only: eviction follows insertion order.
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_page(self, offset: int) -> bool:
        return offset in self.pages

    def store_page(self, offset: int, items: list[Any], total: int | float | None = None) -> None:
        self.pages[offset] = items
        if total is not None:
            self.total = total

    def merged_items(self) -> list[Any]:
        merged: list[Any] = []
        for offset in sorted(self.pages):
            merged.extend(self.pages[offset])
        return merged

    def progress(self) -> SearchProgress:
        items = self.merged_items()
        has_more = True if self.total is None else len(items) < self.total
        return SearchProgress(items=items, total=self.total, has_more=has_more)


class PageCache:
    """FIFO-bounded mapping from SearchKey to :class:`CacheEntry`.

    When creating an entry pushes the cache above ``max_queries`` the entry
    inserted earliest is dropped with all of its pages. Reads never refresh
    an entry's position.
    """

    def __init__(self, max_queries: int = 200) -> None:
        if max_queries < 1:
            raise ValueError("max_queries must be at least 1")
        self.max_queries = max_queries
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def ensure(self, key: str) -> CacheEntry:
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        entry = CacheEntry()
        self._entries[key] = entry
        while len(self._entries) > self.max_queries:
            evicted = next(iter(self._entries))
            del self._entries[evicted]
            logger.debug("search_cache_evicted", key=evicted, size=len(self._entries))
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


__all__ = ["CacheEntry", "PageCache"]
