"""
Source resolution: decide whether candidates come from a remote fetcher or a
local collection.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from typeahead.domain.errors import ConfigurationError
from typeahead.domain.protocols import is_candidate_fetcher
from typeahead.domain.types import CandidateSource, LocalSource, RemoteSource
from typeahead.logger import get_logger

logger = get_logger("source_resolver")


def resolve_source(value: Any) -> CandidateSource:
    """
    Classify a ``source`` input into a tagged candidate source.

    Args:
        value: A ``RemoteSource``/``LocalSource``, an object exposing an async
            ``fetch(params)`` capability, or an iterable of candidates

    Returns:
        ``RemoteSource`` for fetchers, ``LocalSource`` holding a copy of the
        items for collections

    Raises:
        ConfigurationError: If the value is neither a fetcher nor a collection
    """
    if isinstance(value, (RemoteSource, LocalSource)):
        return value

    if is_candidate_fetcher(value):
        logger.debug(f"Resolved remote source {type(value).__name__}")
        return RemoteSource(fetcher=value)

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        items = list(value)
        logger.debug(f"Resolved local source with {len(items)} candidates")
        return LocalSource(items=items)

    raise ConfigurationError(
        f"source must be a candidate fetcher or a collection of candidates, got {type(value).__name__}"
    )
