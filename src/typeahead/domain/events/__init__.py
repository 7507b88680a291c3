"""Event system carrying the typeahead outputs.

Example:
    ```python
    from typeahead.domain.events import EventBus, ModelChanged

    bus = EventBus()
    bus.subscribe(ModelChanged, lambda event: print("model is now", event.model))
    ```
"""

from .bus import EventBus
from .types import (
    CandidatesUpdated,
    CreateNewRequested,
    Event,
    FetchFailed,
    ModelChanged,
    OptionSelected,
)

__all__ = [
    "EventBus",
    "Event",
    "CandidatesUpdated",
    "CreateNewRequested",
    "FetchFailed",
    "ModelChanged",
    "OptionSelected",
]
