"""Domain protocols - structural contracts for the typeahead collaborators.

Using protocols keeps the engine independent from any concrete widget
toolkit or transport, and lets tests substitute simple fakes.
"""

from typeahead.domain.protocols.form import FormControl, InputTarget, TextBuffer
from typeahead.domain.protocols.source import CandidateFetcher, is_candidate_fetcher

__all__ = [
    "CandidateFetcher",
    "is_candidate_fetcher",
    "FormControl",
    "InputTarget",
    "TextBuffer",
]
