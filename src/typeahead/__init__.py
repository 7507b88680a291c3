"""
typeahead - query-dispatch and state-coordination engine for type-ahead inputs.
"""

from typeahead.application import Typeahead, TypeaheadConfig
from typeahead.domain.events import (
    CandidatesUpdated,
    CreateNewRequested,
    EventBus,
    FetchFailed,
    ModelChanged,
    OptionSelected,
)

__version__ = "0.1.0"

__all__ = [
    "CandidatesUpdated",
    "CreateNewRequested",
    "EventBus",
    "FetchFailed",
    "ModelChanged",
    "OptionSelected",
    "Typeahead",
    "TypeaheadConfig",
]
