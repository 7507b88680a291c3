"""
Typeahead infrastructure layer - candidate sources backed by HTTP and files.
"""

from typeahead.infrastructure.sources import HttpCandidateSource, load_candidates

__all__ = ["HttpCandidateSource", "load_candidates"]
