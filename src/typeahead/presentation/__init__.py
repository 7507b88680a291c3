"""
Typeahead presentation layer - Textual widgets rendering the engine state.

Completely separated from the engine: widgets read ``Typeahead.state`` and
listen on the event bus.
"""

from .tui import TypeaheadDemoApp
from .widgets import TypeaheadDropdown, TypeaheadField, TypeaheadInput

__all__ = ["TypeaheadDemoApp", "TypeaheadDropdown", "TypeaheadField", "TypeaheadInput"]
