"""
Typeahead domain layer - value types, protocols, events and errors.

Nothing in this package depends on the application, infrastructure or
presentation layers.
"""

from typeahead.domain.errors import (
    ConfigurationError,
    DisplayResolutionError,
    FetchError,
    MissingDisplayStrategyError,
    MissingSourceError,
    TypeaheadError,
)
from typeahead.domain.types import CandidateSource, LocalSource, QueryState, RemoteSource, ValueKind

__all__ = [
    "CandidateSource",
    "ConfigurationError",
    "DisplayResolutionError",
    "FetchError",
    "LocalSource",
    "MissingDisplayStrategyError",
    "MissingSourceError",
    "QueryState",
    "RemoteSource",
    "TypeaheadError",
    "ValueKind",
]
