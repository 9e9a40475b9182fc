from __future__ import annotations

import pytest

from searchkit import main as main_module
from searchkit.config import CoordinatorOptions
from searchkit.services.coordinator import SearchCoordinator

from conftest import RecordingFetcher, numbered_page


def test_parse_args_defaults():
    args = main_module._parse_args(["python"])

    assert args.query == "python"
    assert args.limit is None
    assert args.pages == 1


@pytest.mark.asyncio
async def test_run_loads_requested_pages():
    fetcher = RecordingFetcher(lambda q, limit, offset: numbered_page(q, limit, offset, total=100))
    coordinator = SearchCoordinator(fetcher, options=CoordinatorOptions(debounce_time_ms=0))

    progress = await main_module.run("q", limit=5, pages=3, coordinator=coordinator)

    assert len(progress.items) == 15
    assert [call[2] for call in fetcher.calls] == [0, 5, 10]


@pytest.mark.asyncio
async def test_run_stops_when_endpoint_runs_dry():
    fetcher = RecordingFetcher(lambda q, limit, offset: {"items": [] if offset else ["only"]})
    coordinator = SearchCoordinator(fetcher, options=CoordinatorOptions(debounce_time_ms=0))

    progress = await main_module.run("q", limit=5, pages=10, coordinator=coordinator)

    assert progress.items == ["only"]
    assert progress.has_more is True
    assert len(fetcher.calls) == 2
