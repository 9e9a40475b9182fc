from __future__ import annotations

import pytest
from pydantic import ValidationError

from searchkit import config as config_module
from searchkit.config import CoordinatorOptions, DebouncePolicy, HttpFetcherSettings, SearchSettings
from searchkit.services.coordinator import SearchCoordinator

from conftest import RecordingFetcher


@pytest.fixture
def clean_settings_cache():
    config_module.get_settings.cache_clear()
    yield
    config_module.get_settings.cache_clear()


def test_coordinator_defaults():
    options = CoordinatorOptions()

    assert options.debounce_time_ms == 400
    assert options.max_queries == 200
    assert options.default_limit == 10
    assert options.debounce_policy is DebouncePolicy.PER_KEY
    assert options.debounce_seconds == pytest.approx(0.4)


def test_invalid_options_rejected():
    with pytest.raises(ValidationError):
        CoordinatorOptions(max_queries=0)
    with pytest.raises(ValidationError):
        CoordinatorOptions(debounce_time_ms=-1)


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("SEARCH_COORDINATOR__MAX_QUERIES", "5")
    monkeypatch.setenv("SEARCH_COORDINATOR__DEBOUNCE_POLICY", "global")
    monkeypatch.setenv("SEARCH_HTTP__BASE_URL", "https://search.example/api")

    settings = SearchSettings()

    assert settings.coordinator.max_queries == 5
    assert settings.coordinator.debounce_policy is DebouncePolicy.GLOBAL
    assert str(settings.http.base_url).startswith("https://search.example/api")


def test_blank_http_values_become_none():
    settings = HttpFetcherSettings(base_url="  ", api_key="")

    assert settings.base_url is None
    assert settings.api_key is None


def test_coordinator_falls_back_to_environment_settings(monkeypatch, clean_settings_cache):
    monkeypatch.setenv("SEARCH_COORDINATOR__DEFAULT_LIMIT", "25")

    coordinator = SearchCoordinator(RecordingFetcher())

    assert coordinator.options.default_limit == 25
