"""
TypeaheadField - composite form field around a TypeaheadInput.

Layout:
┌──────────────────────────────────────────┬────────┬───┐
│ TypeaheadInput                           │ Search │ ✕ │
├──────────────────────────────────────────┴────────┴───┤
│ status: loading / no suggestions / fetch error        │
│ [Add new]          (can_create_new + no suggestions)  │
│ validation errors                                     │
└───────────────────────────────────────────────────────┘
"""

from typing import Any, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Static

from typeahead.application import Typeahead, TypeaheadConfig
from typeahead.domain.events import CandidatesUpdated, EventBus, FetchFailed
from typeahead.logger import get_logger
from typeahead.presentation.widgets.dropdown import TypeaheadDropdown
from typeahead.presentation.widgets.typeahead_input import TypeaheadInput

logger = get_logger("typeahead_field")


def status_text(typeahead: Typeahead) -> str:
    """Status line for the current engine state."""
    state = typeahead.state
    if state.is_loading and typeahead.config.has_progress_bar:
        return f"Loading… ({state.outstanding_requests} pending)"
    if state.last_error is not None:
        return str(state.last_error)
    if state.no_suggestions:
        return "No suggestions"
    return ""


class TypeaheadField(Vertical):
    """Form field combining the input, its buttons, status line and dropdown."""

    DEFAULT_CSS = """
    TypeaheadField {
        height: auto;
    }
    TypeaheadField Horizontal {
        height: auto;
    }
    TypeaheadField TypeaheadInput {
        width: 1fr;
    }
    TypeaheadField .typeahead-status, TypeaheadField .typeahead-errors {
        height: auto;
        padding: 0 1;
    }
    TypeaheadField .typeahead-errors {
        color: $error;
    }
    """

    def __init__(
        self,
        config: Optional[TypeaheadConfig] = None,
        source: Any = None,
        event_bus: Optional[EventBus] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config or TypeaheadConfig()
        self.event_bus = event_bus or EventBus()
        self.input_widget = TypeaheadInput(self.config, source=source, event_bus=self.event_bus)
        self.search_button: Optional[Button] = (
            Button("Search", id="typeahead-search") if self.config.has_search_button else None
        )
        self.typeahead.search_button = self.search_button
        self.status_line = ""
        self._unsubscribers: list = []

    @property
    def typeahead(self) -> Typeahead:
        return self.input_widget.typeahead

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield self.input_widget
            if self.search_button is not None:
                yield self.search_button
            yield Button("✕", id="typeahead-clear")
        yield Static("", classes="typeahead-status", markup=False)
        create = Button(self.config.add_new_text, id="typeahead-create")
        create.display = False
        yield create
        yield Static("\n".join(self.config.validation_errors), classes="typeahead-errors", markup=False)
        yield TypeaheadDropdown(self.input_widget)

    def on_mount(self) -> None:
        self._unsubscribers = [
            self.event_bus.subscribe(CandidatesUpdated, self._on_candidates_updated),
            self.event_bus.subscribe(FetchFailed, self._on_fetch_failed),
        ]
        self.refresh_status()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_candidates_updated(self, event: CandidatesUpdated) -> None:
        self.query_one(TypeaheadDropdown).refresh_candidates()
        self.refresh_status()

    def _on_fetch_failed(self, event: FetchFailed) -> None:
        logger.debug(f"Showing fetch failure for query={event.query!r}")
        self.refresh_status()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.refresh_status()

    def refresh_status(self) -> None:
        self.status_line = status_text(self.typeahead)
        self.query_one(".typeahead-status", Static).update(self.status_line)
        show_create = self.config.can_create_new and self.typeahead.state.no_suggestions
        self.query_one("#typeahead-create", Button).display = show_create

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "typeahead-search":
            self.typeahead.dispatch(force=True)
        elif button_id == "typeahead-clear":
            self.typeahead.clear_value()
        elif button_id == "typeahead-create":
            self.typeahead.create_new()
        else:
            return
        event.stop()
        self.refresh_status()
