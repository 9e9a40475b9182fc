"""Search request coordination: caching, coalescing and debouncing page fetches."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Protocol

from pydantic import ValidationError

from searchkit.config import CoordinatorOptions, get_settings
from searchkit.domain.models import FetchResult, SearchProgress
from searchkit.logging import logger
from searchkit.services.debounce import DebounceGate
from searchkit.services.dedup import RequestDeduplicator
from searchkit.services.exceptions import ConfigurationError, ContractViolationError
from searchkit.services.keys import key_base, page_key
from searchkit.services.page_cache import CacheEntry, PageCache


class Fetcher(Protocol):
    def __call__(
        self,
        query: str,
        limit: int,
        offset: int,
        signal: asyncio.Event,
    ) -> Awaitable[Any]: ...


class SearchCoordinator:
    """Fetches, merges and caches paginated results from an async fetcher.

    ``fetcher(query, limit, offset, signal)`` must resolve to a mapping (or an
    object) with an ``items`` list and an optional numeric ``total``. The
    ``signal`` is an :class:`asyncio.Event` the fetcher may watch; the
    coordinator only sets it on :meth:`aclose`, never when a newer query
    supersedes an older one.

    All state belongs to the instance and is meant to be used from a single
    event loop.
    """

    def __init__(
        self,
        fetcher: Fetcher | Callable[..., Awaitable[Any]],
        options: CoordinatorOptions | None = None,
    ) -> None:
        if not callable(fetcher):
            raise ConfigurationError("fetcher must be callable")
        self._fetcher = fetcher
        self.options = options or get_settings().coordinator
        self._cache = PageCache(self.options.max_queries)
        self._requests: RequestDeduplicator[SearchProgress] = RequestDeduplicator()
        self._debounce: DebounceGate[SearchProgress] = DebounceGate(
            self._fetch_first_page,
            delay=self.options.debounce_seconds,
            policy=self.options.debounce_policy,
        )

    @property
    def pending_count(self) -> int:
        return len(self._requests)

    @property
    def cached_queries(self) -> list[str]:
        return self._cache.keys()

    async def search(self, query: str, limit: int | None = None) -> SearchProgress:
        """Debounced fetch of the first page of ``query``."""

        limit = self._resolve_limit(limit)
        base = key_base(query, limit)
        entry = self._cache.get(base)
        if entry is not None and entry.has_page(0):
            logger.debug("search_cache_hit", key=base, offset=0)
            return entry.progress()
        return await self._debounce.submit(base, query, limit)

    async def load_more(self, query: str, limit: int | None = None) -> SearchProgress:
        """Fetch the page that starts right after the items merged so far."""

        limit = self._resolve_limit(limit)
        entry = self._cache.ensure(key_base(query, limit))
        count = len(entry.merged_items())
        if entry.total is not None and count >= entry.total:
            return SearchProgress(items=entry.merged_items(), total=entry.total, has_more=False)
        return await self.fetch_page(query, limit, count)

    async def fetch_page(self, query: str, limit: int, offset: int) -> SearchProgress:
        base = key_base(query, limit)
        key = page_key(base, offset)

        pending = self._requests.get(key)
        if pending is not None:
            logger.debug("search_fetch_coalesced", key=key)
            return await asyncio.shield(pending)

        entry = self._cache.ensure(base)
        if entry.has_page(offset):
            logger.debug("search_cache_hit", key=base, offset=offset)
            return entry.progress()

        task = self._requests.start(
            key,
            lambda signal: self._load_page(entry, key, query, limit, offset, signal),
        )
        return await asyncio.shield(task)

    def peek(self, query: str, limit: int | None = None) -> SearchProgress | None:
        """Current merged progress for a cached query, without fetching."""

        entry = self._cache.get(key_base(query, self._resolve_limit(limit)))
        if entry is None:
            return None
        return entry.progress()

    async def aclose(self) -> None:
        windows = self._debounce.cancel_all()
        signalled = self._requests.cancel_all()
        self._cache.clear()
        logger.debug("search_coordinator_closed", debounce_windows=windows, signalled=signalled)

    async def __aenter__(self) -> "SearchCoordinator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _fetch_first_page(self, query: Any, limit: Any) -> SearchProgress:
        return await self.fetch_page(query, limit, 0)

    async def _load_page(
        self,
        entry: CacheEntry,
        key: str,
        query: str,
        limit: int,
        offset: int,
        signal: asyncio.Event,
    ) -> SearchProgress:
        logger.debug("search_fetch_started", key=key)
        try:
            raw = await self._fetcher(query, limit, offset, signal)
        except Exception as exc:
            logger.warning("search_fetch_failed", key=key, error=str(exc))
            raise

        try:
            result = FetchResult.model_validate(raw)
        except ValidationError as exc:
            logger.warning("search_contract_violation", key=key, result_type=type(raw).__name__)
            raise ContractViolationError(
                "fetcher must resolve to {'items': [...], 'total': number}"
            ) from exc

        entry.store_page(offset, result.items, result.total)
        return entry.progress()

    def _resolve_limit(self, limit: int | None) -> int:
        return self.options.default_limit if limit is None else limit


__all__ = ["Fetcher", "SearchCoordinator"]
