"""Client-side search request coordination."""

from searchkit.config import CoordinatorOptions, DebouncePolicy
from searchkit.domain.models import FetchResult, SearchProgress
from searchkit.services import (
    ConfigurationError,
    ContractViolationError,
    FetchError,
    HttpSearchFetcher,
    SearchCoordinator,
    SearchError,
)

__all__ = [
    "ConfigurationError",
    "ContractViolationError",
    "CoordinatorOptions",
    "DebouncePolicy",
    "FetchError",
    "FetchResult",
    "HttpSearchFetcher",
    "SearchCoordinator",
    "SearchError",
    "SearchProgress",
]
