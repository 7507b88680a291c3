"""
TypeaheadDemoApp - a single typeahead field plus a log of its outputs.
"""

from typing import Any, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, RichLog

from typeahead.application import TypeaheadConfig
from typeahead.domain.events import CreateNewRequested, EventBus, ModelChanged, OptionSelected
from typeahead.logger import get_logger
from typeahead.presentation.widgets import TypeaheadField

logger = get_logger("demo_app")


class TypeaheadDemoApp(App):
    """Interactive playground for a typeahead configuration."""

    TITLE = "typeahead"

    CSS = """
    TypeaheadField {
        margin: 1 2;
    }
    #events {
        height: 1fr;
        margin: 0 2;
        border: round $primary;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+l", "clear_log", "Clear log"),
    ]

    def __init__(self, config: TypeaheadConfig, source: Any, event_bus: Optional[EventBus] = None) -> None:
        super().__init__()
        self.config = config
        self.source = source
        self.event_bus = event_bus or EventBus()
        self.event_bus.subscribe(ModelChanged, self._log_model_changed)
        self.event_bus.subscribe(OptionSelected, self._log_option_selected)
        self.event_bus.subscribe(CreateNewRequested, self._log_create_new)

    def compose(self) -> ComposeResult:
        yield Header()
        yield TypeaheadField(self.config, source=self.source, event_bus=self.event_bus, id="field")
        yield RichLog(id="events", markup=False, wrap=True)
        yield Footer()

    def on_mount(self) -> None:
        logger.info(f"Demo app mounted (min_chars={self.config.min_chars}, prefetch={self.config.do_prefetch})")

    def _write(self, line: str) -> None:
        if self.is_running:
            self.query_one("#events", RichLog).write(line)

    def _log_model_changed(self, event: ModelChanged) -> None:
        self._write(f"modelChange  {event.model!r}")

    def _log_option_selected(self, event: OptionSelected) -> None:
        self._write(f"optionSelected  {event.option!r}")

    def _log_create_new(self, event: CreateNewRequested) -> None:
        self._write(f"createNew  {event.model!r}")

    def action_clear_log(self) -> None:
        self.query_one("#events", RichLog).clear()
