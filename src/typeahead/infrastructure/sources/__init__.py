"""Concrete candidate sources."""

from .files import load_candidates
from .http import HttpCandidateSource

__all__ = ["HttpCandidateSource", "load_candidates"]
