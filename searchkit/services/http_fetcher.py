"""Fetch capability backed by a JSON search endpoint over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from searchkit.config import HttpFetcherSettings
from searchkit.logging import logger
from searchkit.services.exceptions import FetchError
from searchkit.utils.retry import retry_async


class _RetryableStatus(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


class HttpSearchFetcher:
    """Async callable usable as a :class:`SearchCoordinator` fetcher.

    Transport errors and 5xx/429 responses are retried with linear backoff;
    other HTTP errors fail immediately. A set cancellation signal stops
    further attempts.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: HttpFetcherSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or HttpFetcherSettings()

    async def __call__(
        self,
        query: str,
        limit: int,
        offset: int,
        signal: asyncio.Event | None = None,
    ) -> dict[str, Any]:
        if self._settings.base_url is None:
            raise FetchError("Search endpoint base_url is not configured.")

        params = {
            self._settings.query_param: query,
            self._settings.limit_param: limit,
            self._settings.offset_param: offset,
        }

        async def _request() -> httpx.Response:
            if signal is not None and signal.is_set():
                raise FetchError("Search request was cancelled.")
            logger.debug("http_fetcher_request", query=query, limit=limit, offset=offset)
            response = await self._client.get(
                str(self._settings.base_url),
                params=params,
                headers=self._headers(),
                timeout=self._settings.request_timeout_seconds,
            )
            if response.status_code == 429 or response.status_code >= 500:
                raise _RetryableStatus(response)
            response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.max_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.RequestError, _RetryableStatus),
                logger=logger,
                operation_name="search_fetch",
            )
        except _RetryableStatus as exc:
            raise FetchError(
                f"Search request failed ({exc.response.status_code}): {exc.response.text[:500]}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise FetchError(f"Search request failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            raise FetchError(f"Search request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError("Search endpoint returned invalid JSON.") from exc
        if not isinstance(data, dict):
            raise FetchError("Search endpoint returned an unexpected payload.")

        # Passed through untouched; the coordinator validates the shape.
        return {
            "items": data.get(self._settings.items_field),
            "total": data.get(self._settings.total_field),
        }

    def _headers(self) -> dict[str, str]:
        api_key = self._settings.api_key
        if api_key is None:
            return {}
        return {"Authorization": f"Bearer {api_key.get_secret_value()}"}


__all__ = ["HttpSearchFetcher"]
