"""Command-line entrypoint: page through a remote search endpoint."""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Sequence

import httpx

from searchkit.config import get_settings
from searchkit.domain.models import SearchProgress
from searchkit.logging import configure_logging, logger
from searchkit.services.coordinator import SearchCoordinator
from searchkit.services.http_fetcher import HttpSearchFetcher


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="searchkit", description=__doc__)
    parser.add_argument("query")
    parser.add_argument("--limit", type=int, default=None, help="page size")
    parser.add_argument("--pages", type=int, default=1, help="maximum pages to load")
    return parser.parse_args(argv)


async def run(query: str, *, limit: int | None, pages: int, coordinator: SearchCoordinator) -> SearchProgress:
    progress = await coordinator.search(query, limit)
    loaded = 1
    while progress.has_more and loaded < pages:
        before = len(progress.items)
        progress = await coordinator.load_more(query, limit)
        loaded += 1
        if len(progress.items) == before:
            # Endpoint stopped returning items without reporting a total.
            break
    return progress


async def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.environment != "dev")

    async with httpx.AsyncClient() as client:
        fetcher = HttpSearchFetcher(client, settings=settings.http)
        async with SearchCoordinator(fetcher, options=settings.coordinator) as coordinator:
            logger.info("search_cli_starting", query=args.query, pages=args.pages)
            progress = await run(args.query, limit=args.limit, pages=args.pages, coordinator=coordinator)

    print(json.dumps(progress.model_dump(by_alias=True), ensure_ascii=False, indent=2, default=str))


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
