"""
Selection/model bridge and form binding.

``FormValueAccessor`` implements the read/write/notify contract a host form
system expects from an input: external writes through ``write_value``,
user-driven changes reported through the registered on-change callback, and
``reset`` clearing both the value and the visible text.

``ModelBridge`` adds the externally bound *model*: assignments always update
local state, but a ``ModelChanged`` event is only published for ``None`` or
for values whose kind matches the kind observed in fetched candidates.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from typeahead.application.display import DisplayResolver
from typeahead.domain.events import CreateNewRequested, EventBus, ModelChanged
from typeahead.domain.protocols import FormControl, InputTarget
from typeahead.domain.types import ValueKind
from typeahead.logger import get_logger

logger = get_logger("model_bridge")


def _noop(*_args: Any) -> None:
    return None


def same_value(a: Any, b: Any) -> bool:
    """Identity for objects, equality for scalars."""
    if a is b:
        return True
    if ValueKind.of(a) in (None, ValueKind.OBJECT) or ValueKind.of(b) in (None, ValueKind.OBJECT):
        return False
    return ValueKind.of(a) == ValueKind.of(b) and a == b


class FormValueAccessor:
    """Value accessor bridging the control to a host form system."""

    def __init__(self, input_target: InputTarget, form_control: Optional[FormControl] = None) -> None:
        self.input = input_target
        self.form_control = form_control
        self.disabled = False
        self._value: Any = ""
        self._on_change: Callable[[Any], None] = _noop
        self._on_touched: Callable[[], None] = _noop

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        """User-driven change: store and notify the form."""
        if same_value(value, self._value):
            return
        self._value = value
        self._on_change(value)

    def write_value(self, value: Any) -> None:
        """External write from the form; never echoed back through on-change."""
        self._value = value

    def register_on_change(self, fn: Callable[[Any], None]) -> None:
        self._on_change = fn

    def register_on_touched(self, fn: Callable[[], None]) -> None:
        self._on_touched = fn

    def mark_touched(self) -> None:
        self._on_touched()

    def set_disabled_state(self, disabled: bool) -> None:
        self.disabled = disabled

    def reset(self) -> None:
        """Clear the internal value and the visible text."""
        self._value = ""
        self.input.value = ""


class ModelBridge(FormValueAccessor):
    """Keeps the bound model consistent with selections and the visible text.

    Args:
        display: Resolver used to render the model into the input
        input_target: The visible text field
        event_bus: Bus receiving ``ModelChanged`` and ``CreateNewRequested``
        observed_kind: Callable returning the kind observed in candidates
        form_control: Optional host form control reset on clear
    """

    def __init__(
        self,
        display: DisplayResolver,
        input_target: InputTarget,
        event_bus: EventBus,
        observed_kind: Callable[[], Optional[ValueKind]],
        form_control: Optional[FormControl] = None,
    ) -> None:
        super().__init__(input_target, form_control)
        self.display = display
        self.event_bus = event_bus
        self._observed_kind = observed_kind
        self._model: Any = None

    @property
    def model(self) -> Any:
        return self._model

    @model.setter
    def model(self, value: Any) -> None:
        if same_value(value, self._model):
            return
        self._model = value
        if value is None or ValueKind.of(value) == self._observed_kind():
            self.event_bus.publish(ModelChanged(model=value))
        else:
            logger.debug(
                f"Model set to {ValueKind.of(value)} value while candidates are "
                f"{self._observed_kind()}; change notification suppressed"
            )

    def model_matches_kind(self) -> bool:
        return self._model is not None and ValueKind.of(self._model) == self._observed_kind()

    def clear_value(self) -> None:
        """Reset the bound form control, the model, the value and the visible text."""
        if self.form_control is not None:
            self.form_control.reset()
        self.model = None
        self.value = ""
        self.input.value = ""

    def model_text(self) -> str:
        """Display string for the current model, empty without one."""
        return self.display.option_label(self._model) if self._model else ""

    def create_new(self) -> None:
        """Publish ``CreateNewRequested`` with the current model, syncing the input first."""
        if self._model:
            if self.model_matches_kind():
                self.input.value = self.display.view_item(self._model)
            else:
                self.input.value = str(self._model)
        logger.info(f"Create-new requested (model={self._model!r})")
        self.event_bus.publish(CreateNewRequested(model=self._model))
