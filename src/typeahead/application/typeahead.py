"""
Typeahead component: the headless control a widget (or a test) drives.

The component glues the Query Coordinator and the Model Bridge together and
translates input events (key, focus, blur, selection) into dispatches and
model updates. Rendering is left to the presentation layer, which reads
``state`` and listens on ``event_bus``.

Example:
    ```python
    bus = EventBus()
    field = Typeahead(TypeaheadConfig(display_item="item.name"), source=fruits, event_bus=bus)
    field.input.value = "ap"
    field.on_input()
    field.state.candidates  # [{"name": "Apple"}, {"name": "Apricot"}]
    ```
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from typeahead.application.config import TypeaheadConfig
from typeahead.application.coordinator import QueryCoordinator
from typeahead.application.display import DisplayResolver
from typeahead.application.model_bridge import ModelBridge
from typeahead.domain.events import EventBus, OptionSelected
from typeahead.domain.protocols import FormControl, InputTarget, TextBuffer
from typeahead.domain.types import CandidateSource, QueryState
from typeahead.logger import get_logger

logger = get_logger("typeahead")

# Keys that move through the dropdown instead of editing the query
NAVIGATION_KEYS = frozenset({"left", "up", "right", "down"})


class Typeahead:
    """Headless type-ahead control.

    Args:
        config: Control inputs; defaults to ``TypeaheadConfig()``
        source: Candidate fetcher or collection (may be assigned later)
        input_target: Visible text field; a ``TextBuffer`` when omitted
        event_bus: Bus for the outputs; a private bus when omitted
        form_control: Optional host form control reset on clear
    """

    def __init__(
        self,
        config: Optional[TypeaheadConfig] = None,
        source: Any = None,
        input_target: Optional[InputTarget] = None,
        event_bus: Optional[EventBus] = None,
        form_control: Optional[FormControl] = None,
    ) -> None:
        self.config = config or TypeaheadConfig()
        self.input: InputTarget = input_target if input_target is not None else TextBuffer()
        self.event_bus = event_bus or EventBus()
        self.display = DisplayResolver(
            display_item_fn=self.config.display_item_fn,
            display_item=self.config.display_item,
            display_template=self.config.display_template,
        )
        self.coordinator = QueryCoordinator(self.config, self.display, self.input, self.event_bus)
        self.bridge = ModelBridge(
            self.display,
            self.input,
            self.event_bus,
            observed_kind=lambda: self.coordinator.observed_kind,
            form_control=form_control,
        )
        # Focus target of the search-trigger affordance, set by the widget
        self.search_button: Any = None

        if source is not None:
            self.source = source

    # ------------------------------------------------------------------ #
    # Inputs
    # ------------------------------------------------------------------ #
    @property
    def source(self) -> Optional[CandidateSource]:
        return self.coordinator.source

    @source.setter
    def source(self, value: Any) -> None:
        self.coordinator.set_source(value)

    @property
    def state(self) -> QueryState:
        return self.coordinator.state

    @property
    def model(self) -> Any:
        return self.bridge.model

    @model.setter
    def model(self, value: Any) -> None:
        self.bridge.model = value

    @property
    def value(self) -> Any:
        return self.bridge.value

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def start(self) -> Optional[asyncio.Task]:
        """Initialise the control; prefetches when ``do_prefetch`` is set."""
        if self.config.do_prefetch:
            return self.coordinator.prefetch()
        return None

    def close(self) -> None:
        self.coordinator.close()

    async def wait_idle(self) -> None:
        await self.coordinator.wait_idle()

    # ------------------------------------------------------------------ #
    # Input events
    # ------------------------------------------------------------------ #
    def dispatch(self, force: bool = False) -> Optional[asyncio.Task]:
        return self.coordinator.dispatch(force=force)

    def on_key(self, key: str) -> Optional[asyncio.Task]:
        """Handle a key press; navigation keys never dispatch."""
        if key in NAVIGATION_KEYS:
            return None
        return self.on_input()

    def on_input(self) -> Optional[asyncio.Task]:
        """The text changed: drop the model when it was emptied, then dispatch."""
        if self.input.value == "":
            self.bridge.clear_value()
        return self.dispatch()

    def on_focus(self) -> Optional[asyncio.Task]:
        """Re-show candidates for the current text."""
        return self.dispatch(force=True)

    def on_blur(self, related_target: Any = None) -> None:
        """Restore the model's text when the field is left empty.

        Args:
            related_target: Whatever received focus; moving to the search
                button keeps the field empty so the search can run
        """
        self.bridge.mark_touched()
        moved_to_search = self.search_button is not None and related_target is self.search_button
        if self.config.has_search_button and self.input.value == "" and not moved_to_search:
            self.input.value = self.bridge.model_text()

    # ------------------------------------------------------------------ #
    # Selection
    # ------------------------------------------------------------------ #
    def select(self, option: Any) -> None:
        """Apply a candidate picked from the presented list."""
        self.state.query = self.input.value
        self.bridge.value = option
        self.bridge.model = option

        if option is not None:
            logger.info(f"Option selected: {self.display.option_label(option)!r}")
            self.event_bus.publish(OptionSelected(option=option))

        if self.config.clear_after_search:
            self.bridge.clear_value()

    def clear_value(self) -> None:
        self.bridge.clear_value()

    def create_new(self) -> None:
        self.bridge.create_new()

    def option_label(self, item: Any) -> str:
        return self.display.option_label(item)
