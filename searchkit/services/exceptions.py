"""Errors raised by the search coordinator and its fetch adapters."""


class SearchError(Exception):
    pass


class ConfigurationError(SearchError):
    """The coordinator was built with an unusable fetch capability."""


class ContractViolationError(SearchError):
    """The fetch capability resolved with a malformed result."""


class FetchError(SearchError):
    """Raised when an HTTP-backed fetch fails or is misconfigured."""
