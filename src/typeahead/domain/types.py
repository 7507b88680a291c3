"""Core value types shared by the typeahead layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from typeahead.domain.errors import FetchError
    from typeahead.domain.protocols import CandidateFetcher


class ValueKind(Enum):
    """Coarse runtime kind of a candidate or model value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"

    @classmethod
    def of(cls, value: Any) -> Optional["ValueKind"]:
        """Classify ``value``; ``None`` has no kind."""
        if value is None:
            return None
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (int, float)):
            return cls.NUMBER
        return cls.OBJECT


@dataclass(frozen=True, slots=True)
class RemoteSource:
    """Candidates come from a fetch-capable collaborator."""

    fetcher: "CandidateFetcher"


@dataclass(slots=True)
class LocalSource:
    """Candidates come from an in-memory collection owned by the control."""

    items: list[Any] = field(default_factory=list)


CandidateSource = Union[RemoteSource, LocalSource]


@dataclass
class QueryState:
    """Mutable state of the query coordinator.

    Attributes:
        query: Raw input text read at the last dispatch
        candidates: Current candidate list (``None`` until the first dispatch)
        outstanding_requests: Remote fetches dispatched but not yet completed
        no_suggestions: Last completed fetch/filter returned nothing for a query
        last_error: Failure of the most recent unsuccessful fetch, if any
    """

    query: str = ""
    candidates: Optional[list[Any]] = None
    outstanding_requests: int = 0
    no_suggestions: bool = False
    last_error: Optional["FetchError"] = None

    @property
    def is_loading(self) -> bool:
        return self.outstanding_requests > 0
