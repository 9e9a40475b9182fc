"""Single-flight bookkeeping for page fetches.

Concurrent requests for the same PageKey share one upstream call. The
pending task is registered synchronously in :meth:`RequestDeduplicator.start`,
before the event loop gets a chance to run it, so any caller that arrives
while the fetch is outstanding finds it via :meth:`RequestDeduplicator.get`.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")
PageFactory = Callable[[asyncio.Event], Awaitable[T]]


def mark_outcome_retrieved(future: asyncio.Future) -> None:
    """Done-callback marking a shared outcome as read.

    Waiters await through :func:`asyncio.shield`; once all of them are
    cancelled nobody reads a failure and asyncio reports it as never retrieved.
    Waiters still left receive the exception as usual.
    """

    if not future.cancelled():
        future.exception()


class RequestDeduplicator(Generic[T]):
    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Task[T]] = {}
        self._signals: dict[str, asyncio.Event] = {}

    def get(self, key: str) -> asyncio.Task[T] | None:
        return self._pending.get(key)

    def signal(self, key: str) -> asyncio.Event | None:
        """Cancellation handle handed to the fetch for ``key``, if in flight."""

        return self._signals.get(key)

    def start(self, key: str, factory: PageFactory[T]) -> asyncio.Task[T]:
        existing = self._pending.get(key)
        if existing is not None:
            return existing

        signal = asyncio.Event()
        task = asyncio.create_task(self._run(key, factory, signal))
        self._signals[key] = signal
        self._pending[key] = task
        # Covers tasks cancelled before their first step, where _run never executes.
        task.add_done_callback(lambda done: self._forget(key, done))
        task.add_done_callback(mark_outcome_retrieved)
        return task

    def cancel_all(self) -> int:
        """Set every outstanding cancellation signal; returns how many were set."""

        signals = list(self._signals.values())
        for signal in signals:
            signal.set()
        return len(signals)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    async def _run(self, key: str, factory: PageFactory[T], signal: asyncio.Event) -> T:
        try:
            return await factory(signal)
        finally:
            self._forget(key, asyncio.current_task())

    def _forget(self, key: str, task: asyncio.Task | None) -> None:
        if task is not None and self._pending.get(key) is task:
            del self._pending[key]
            self._signals.pop(key, None)


__all__ = ["PageFactory", "RequestDeduplicator", "mark_outcome_retrieved"]
