"""Remote candidate source protocol."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

__all__ = ["CandidateFetcher", "is_candidate_fetcher"]


@runtime_checkable
class CandidateFetcher(Protocol):
    """Collaborator that looks up candidates for a parameter bag.

    The parameter bag always carries a ``query`` key when invoked from the
    query paths and may carry any additional keys configured through
    ``service_params``. A prefetch sends only the configured parameters.
    """

    async def fetch(self, params: Mapping[str, Any]) -> Sequence[Any]:
        """Return the raw candidate list for ``params``."""
        ...


def is_candidate_fetcher(value: object) -> bool:
    """Check the fetch capability explicitly: the attribute must exist and be callable."""
    if value is None or isinstance(value, (str, bytes)):
        return False
    return isinstance(value, CandidateFetcher) and callable(getattr(value, "fetch", None))
