from searchkit.services.coordinator import Fetcher, SearchCoordinator
from searchkit.services.exceptions import (
    ConfigurationError,
    ContractViolationError,
    FetchError,
    SearchError,
)
from searchkit.services.http_fetcher import HttpSearchFetcher

__all__ = [
    "ConfigurationError",
    "ContractViolationError",
    "FetchError",
    "Fetcher",
    "HttpSearchFetcher",
    "SearchCoordinator",
    "SearchError",
]
