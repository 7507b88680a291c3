"""
TypeaheadInput - Textual Input driving a headless Typeahead control.

The widget is the control's input target: the engine reads and writes
``self.value`` directly. Textual only reports value changes (never pure
cursor movement), so ``Input.Changed`` maps to the engine's non-navigation
key path.
"""

from typing import Any, Optional

from textual import events
from textual.widgets import Input

from typeahead.application import Typeahead, TypeaheadConfig
from typeahead.domain.events import EventBus
from typeahead.logger import get_logger

logger = get_logger("typeahead_input")


class TypeaheadInput(Input):
    """Input field bound to a :class:`Typeahead` engine."""

    def __init__(
        self,
        config: Optional[TypeaheadConfig] = None,
        source: Any = None,
        event_bus: Optional[EventBus] = None,
        **kwargs,
    ):
        config = config or TypeaheadConfig()
        super().__init__(placeholder=config.placeholder, name=config.name or None, **kwargs)
        self.typeahead = Typeahead(config, source=source, input_target=self, event_bus=event_bus)

    def on_mount(self) -> None:
        self.typeahead.start()
        if self.typeahead.config.focus_on:
            self.call_after_refresh(self.focus)

    def on_unmount(self) -> None:
        self.typeahead.close()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self:
            return
        self.typeahead.on_input()

    def on_focus(self, _event: events.Focus) -> None:
        self.typeahead.on_focus()

    def on_blur(self, _event: events.Blur) -> None:
        # focus has already moved when the Blur message is handled
        self.typeahead.on_blur(related_target=self.screen.focused)
