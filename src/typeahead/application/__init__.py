"""
Typeahead application layer - the query-dispatch and state-coordination engine.
"""

from typeahead.application.config import TypeaheadConfig, identity
from typeahead.application.coordinator import QueryCoordinator
from typeahead.application.display import DisplayResolver, PropertyPath
from typeahead.application.model_bridge import FormValueAccessor, ModelBridge
from typeahead.application.source_resolver import resolve_source
from typeahead.application.typeahead import NAVIGATION_KEYS, Typeahead

__all__ = [
    "DisplayResolver",
    "FormValueAccessor",
    "ModelBridge",
    "NAVIGATION_KEYS",
    "PropertyPath",
    "QueryCoordinator",
    "Typeahead",
    "TypeaheadConfig",
    "identity",
    "resolve_source",
]
