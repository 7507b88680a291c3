"""Exceptions raised by the typeahead engine."""


class TypeaheadError(Exception):
    """Base exception for this project."""


class ConfigurationError(TypeaheadError):
    """Raised synchronously when the control is used with an invalid configuration."""


class MissingSourceError(ConfigurationError):
    """Raised when a remote dispatch is requested but no fetcher is configured."""


class MissingDisplayStrategyError(ConfigurationError):
    """Raised when local filtering runs without ``display_item`` or ``display_item_fn``."""


class DisplayResolutionError(ConfigurationError):
    """Raised when a display path is malformed or a candidate lacks the expected shape."""


class FetchError(TypeaheadError):
    """A remote fetch failed. Recorded on the query state rather than raised to the caller."""

    def __init__(self, message: str, query: str | None = None) -> None:
        super().__init__(message)
        self.query = query
