"""Event types published by the typeahead component.

``ModelChanged``, ``OptionSelected`` and ``CreateNewRequested`` are the
component outputs. ``CandidatesUpdated`` and ``FetchFailed`` let the
presentation layer refresh after asynchronous completions.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class ModelChanged(Event):
    """Published when the model is assigned a kind-consistent value (or ``None``)."""

    model: Any
    """The new model value."""


@dataclass
class OptionSelected(Event):
    """Published when the user picks a non-null candidate."""

    option: Any
    """The selected candidate."""


@dataclass
class CreateNewRequested(Event):
    """Published when the host invokes the create-new affordance."""

    model: Any
    """Current model at the time of the request."""


@dataclass
class CandidatesUpdated(Event):
    """Published whenever a fetch completion or a local filter replaces the candidate list.

    Attributes:
        query: Query the candidates were produced for
        candidates: The new candidate list
        no_suggestions: Whether the result counts as "no suggestions"
    """

    query: str
    candidates: list[Any]
    no_suggestions: bool


@dataclass
class FetchFailed(Event):
    """Published when the remote fetcher raises for a dispatched query."""

    query: Optional[str]
    """Query of the failed request (``None`` for a prefetch)."""
    error: BaseException
    """The exception raised by the fetcher."""
