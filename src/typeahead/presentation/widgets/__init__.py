"""Textual widgets for the typeahead control."""

from .dropdown import TypeaheadDropdown
from .typeahead_field import TypeaheadField, status_text
from .typeahead_input import TypeaheadInput

__all__ = ["TypeaheadDropdown", "TypeaheadField", "TypeaheadInput", "status_text"]
