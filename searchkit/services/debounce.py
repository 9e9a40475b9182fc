"""Debounce windows collapsing bursts of ``search`` calls into one fetch."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from searchkit.config import DebouncePolicy
from searchkit.logging import logger
from searchkit.services.dedup import mark_outcome_retrieved

T = TypeVar("T")
Trigger = Callable[[Any, Any], Awaitable[T]]

_GLOBAL_SCOPE = "*"


@dataclass(slots=True, eq=False)
class _Window:
    key: str
    query: Any
    limit: Any
    future: asyncio.Future[Any]
    task: asyncio.Task[None] | None = None
    fired: bool = False


class DebounceGate(Generic[T]):
    """Delays a trigger until a window of ``delay`` seconds has elapsed.

    A window opens on the first call and is not extended by later ones. When
    it elapses the trigger runs once for the latest ``(query, limit)``
    recorded in the window and every caller that joined receives the same
    outcome. The window stays open until the trigger settles; calls for the
    same key in the meantime join it, calls after that open a new window.

    With :attr:`DebouncePolicy.PER_KEY` each SearchKey gets its own window.
    With :attr:`DebouncePolicy.GLOBAL` all keys share one window and only the
    most recently requested query is fetched.
    """

    def __init__(
        self,
        trigger: Trigger[T],
        *,
        delay: float,
        policy: DebouncePolicy = DebouncePolicy.PER_KEY,
    ) -> None:
        self._trigger = trigger
        self.delay = delay
        self.policy = DebouncePolicy(policy)
        self._windows: dict[str, _Window] = {}

    async def submit(self, key: str, query: Any, limit: Any) -> T:
        scope = key if self.policy is DebouncePolicy.PER_KEY else _GLOBAL_SCOPE
        window = self._windows.get(scope)

        if window is not None and window.fired and window.key != key:
            # Only possible under the global policy: the fetch already left
            # for another query, so this one needs a window of its own.
            window = None

        if window is None:
            window = self._open(scope, key, query, limit)
        elif not window.fired:
            if window.key != key:
                logger.debug("search_debounce_superseded", previous=window.key, key=key)
            window.key, window.query, window.limit = key, query, limit

        return await asyncio.shield(window.future)

    def cancel_all(self) -> int:
        windows = list(self._windows.values())
        self._windows.clear()
        for window in windows:
            if window.task is not None:
                window.task.cancel()
            window.future.cancel()
        return len(windows)

    def __len__(self) -> int:
        return len(self._windows)

    def _open(self, scope: str, key: str, query: Any, limit: Any) -> _Window:
        loop = asyncio.get_running_loop()
        window: _Window = _Window(key=key, query=query, limit=limit, future=loop.create_future())
        window.future.add_done_callback(mark_outcome_retrieved)
        self._windows[scope] = window
        window.task = asyncio.create_task(self._fire(scope, window))
        logger.debug("search_debounce_opened", key=key, delay=self.delay, policy=self.policy.value)
        return window

    async def _fire(self, scope: str, window: _Window) -> None:
        try:
            await asyncio.sleep(self.delay)
            window.fired = True
            logger.debug("search_debounce_fired", key=window.key)
            result = await self._trigger(window.query, window.limit)
        except asyncio.CancelledError:
            window.future.cancel()
            raise
        except Exception as exc:
            if not window.future.done():
                window.future.set_exception(exc)
        else:
            if not window.future.done():
                window.future.set_result(result)
        finally:
            if self._windows.get(scope) is window:
                del self._windows[scope]


__all__ = ["DebounceGate", "Trigger"]
