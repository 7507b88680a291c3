"""Configuration for the typeahead component."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from typeahead.domain.errors import ConfigurationError


def identity(items: Any) -> Any:
    """Default ``filter_callback``: return the raw fetch result unchanged."""
    return items


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TypeaheadConfig:
    """Inputs of the typeahead control (everything except ``source``)."""

    name: str = ""
    placeholder: str = "Search"

    # Dispatch gating
    min_chars: int = 2
    do_prefetch: bool = False  # one remote request on start, local filtering afterwards
    service_params: Optional[Mapping[str, Any]] = None  # merged into every remote query
    filter_callback: Callable[[Any], Any] = identity  # raw fetch result -> candidate list

    # Display resolution
    display_item: Optional[str] = None  # dotted property path, e.g. "item.name"
    display_item_fn: Optional[Callable[[Any], str]] = None
    display_template: Any = None  # opaque to the engine

    # Selection behaviour
    clear_after_search: bool = False
    can_create_new: bool = False
    add_new_text: str = "Add new"

    # Presentation hints
    focus_on: bool = False
    has_search_button: bool = False
    has_progress_bar: bool = False
    validation_errors: list[str] = field(default_factory=list)

    # Discard completions of requests superseded by a newer dispatch
    supersede_stale_results: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.min_chars, bool) or not isinstance(self.min_chars, int):
            raise ConfigurationError(f"min_chars must be an integer, got {self.min_chars!r}")
        if self.min_chars < 0:
            raise ConfigurationError(f"min_chars must be >= 0, got {self.min_chars}")
        if not callable(self.filter_callback):
            raise ConfigurationError("filter_callback must be callable")
        if self.display_item_fn is not None and not callable(self.display_item_fn):
            raise ConfigurationError("display_item_fn must be callable")

    @classmethod
    def from_env(cls, prefix: str = "TYPEAHEAD_", **overrides: Any) -> "TypeaheadConfig":
        """Build a config from ``<prefix><FIELD>`` environment variables.

        Only scalar fields (str, int, bool) are read from the environment;
        callables and mappings must be passed as ``overrides``, which also
        take precedence over the environment.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            default = f.default
            if isinstance(default, bool):
                values[f.name] = _env_bool(raw)
            elif isinstance(default, int):
                try:
                    values[f.name] = int(raw)
                except ValueError as e:
                    raise ConfigurationError(f"{prefix}{f.name.upper()} must be an integer, got {raw!r}") from e
            elif isinstance(default, str) or f.name == "display_item":
                values[f.name] = raw
        values.update(overrides)
        return cls(**values)
