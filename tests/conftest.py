"""Shared fixtures: a scriptable fake fetch capability."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from searchkit.config import CoordinatorOptions, DebouncePolicy
from searchkit.services.coordinator import SearchCoordinator


def numbered_page(query: str, limit: int, offset: int, total: int | None = None) -> dict[str, Any]:
    end = offset + limit if total is None else min(offset + limit, total)
    return {"items": [f"{query}-{index}" for index in range(offset, end)], "total": total}


class RecordingFetcher:
    """Fake fetcher that records every call and answers via ``responder``.

    ``responder`` may return a result or an exception instance to raise.
    Setting ``gate`` holds every call until the event is set.
    """

    def __init__(
        self,
        responder: Callable[[str, int, int], Any] | None = None,
        *,
        delays: dict[int, float] | None = None,
    ) -> None:
        self.calls: list[tuple[str, int, int]] = []
        self.signals: list[asyncio.Event] = []
        self.responder = responder or numbered_page
        self.delays = delays or {}
        self.gate: asyncio.Event | None = None

    async def __call__(self, query: str, limit: int, offset: int, signal: asyncio.Event) -> Any:
        self.calls.append((query, limit, offset))
        self.signals.append(signal)
        if self.gate is not None:
            await self.gate.wait()
        delay = self.delays.get(offset)
        if delay:
            await asyncio.sleep(delay)
        result = self.responder(query, limit, offset)
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def options() -> CoordinatorOptions:
    return CoordinatorOptions(debounce_time_ms=50, max_queries=20, default_limit=10)


@pytest.fixture
def coordinator(fetcher: RecordingFetcher, options: CoordinatorOptions) -> SearchCoordinator:
    return SearchCoordinator(fetcher, options=options)


@pytest.fixture
def global_coordinator(fetcher: RecordingFetcher) -> SearchCoordinator:
    options = CoordinatorOptions(debounce_time_ms=50, debounce_policy=DebouncePolicy.GLOBAL)
    return SearchCoordinator(fetcher, options=options)
