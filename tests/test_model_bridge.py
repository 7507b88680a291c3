"""Tests for the model bridge and the form value accessor."""

import pytest

from typeahead.application import DisplayResolver, FormValueAccessor, ModelBridge
from typeahead.application.model_bridge import same_value
from typeahead.domain.events import CreateNewRequested, ModelChanged
from typeahead.domain.protocols import TextBuffer
from typeahead.domain.types import ValueKind

from conftest import EventRecorder


class FakeFormControl:
    def __init__(self):
        self.resets = 0

    def reset(self):
        self.resets += 1


@pytest.fixture
def recorder(bus):
    return EventRecorder(bus).listen(ModelChanged, CreateNewRequested)


def make_bridge(bus, kind=ValueKind.OBJECT, form_control=None, display_item="item.name"):
    return ModelBridge(
        DisplayResolver(display_item=display_item),
        TextBuffer(),
        bus,
        observed_kind=lambda: kind,
        form_control=form_control,
    )


class TestSameValue:
    def test_objects_compare_by_identity(self):
        item = {"name": "Apple"}

        assert same_value(item, item)
        assert not same_value(item, {"name": "Apple"})

    def test_scalars_compare_by_kind_and_value(self):
        assert same_value("a", "a")
        assert same_value(1, 1.0)
        assert not same_value(1, True)
        assert not same_value("", None)


class TestFormValueAccessor:
    def test_user_changes_notify(self):
        accessor = FormValueAccessor(TextBuffer())
        changes = []
        accessor.register_on_change(changes.append)

        accessor.value = "apple"
        accessor.value = "apple"

        assert changes == ["apple"]

    def test_write_value_is_not_echoed(self):
        accessor = FormValueAccessor(TextBuffer())
        changes = []
        accessor.register_on_change(changes.append)

        accessor.write_value("from form")

        assert accessor.value == "from form"
        assert changes == []

    def test_touched_and_disabled(self):
        accessor = FormValueAccessor(TextBuffer())
        touched = []
        accessor.register_on_touched(lambda: touched.append(True))

        accessor.mark_touched()
        accessor.set_disabled_state(True)

        assert touched == [True]
        assert accessor.disabled

    def test_reset_clears_value_and_text(self):
        text = TextBuffer("apple")
        accessor = FormValueAccessor(text)
        accessor.write_value("apple")

        accessor.reset()

        assert accessor.value == ""
        assert text.value == ""


class TestModelBridge:
    def test_matching_kind_publishes(self, bus, recorder):
        bridge = make_bridge(bus)
        apple = {"name": "Apple"}

        bridge.model = apple

        assert bridge.model is apple
        assert [event.model for event in recorder.of(ModelChanged)] == [apple]

    def test_mismatched_kind_updates_silently(self, bus, recorder):
        bridge = make_bridge(bus)

        bridge.model = "Apple"

        assert bridge.model == "Apple"
        assert recorder.of(ModelChanged) == []

    def test_nothing_observed_yet_suppresses(self, bus, recorder):
        bridge = make_bridge(bus, kind=None)

        bridge.model = {"name": "Apple"}

        assert recorder.of(ModelChanged) == []

    def test_none_always_publishes(self, bus, recorder):
        bridge = make_bridge(bus, kind=ValueKind.STRING)
        bridge.model = "Apple"

        bridge.model = None

        assert [event.model for event in recorder.of(ModelChanged)] == ["Apple", None]

    def test_same_value_is_not_republished(self, bus, recorder):
        bridge = make_bridge(bus)
        apple = {"name": "Apple"}

        bridge.model = apple
        bridge.model = apple

        assert len(recorder.of(ModelChanged)) == 1

    def test_clear_value(self, bus, recorder):
        form = FakeFormControl()
        bridge = make_bridge(bus, form_control=form)
        bridge.model = {"name": "Apple"}
        bridge.value = {"name": "Apple"}
        bridge.input.value = "Apple"

        bridge.clear_value()

        assert form.resets == 1
        assert bridge.model is None
        assert bridge.value == ""
        assert bridge.input.value == ""
        assert recorder.of(ModelChanged)[-1].model is None

    def test_model_text(self, bus):
        bridge = make_bridge(bus)
        assert bridge.model_text() == ""

        bridge.model = {"name": "Apple"}
        assert bridge.model_text() == "Apple"

    def test_create_new_renders_matching_model(self, bus, recorder):
        bridge = make_bridge(bus)
        apple = {"name": "Apple"}
        bridge.model = apple

        bridge.create_new()

        assert bridge.input.value == "Apple"
        [event] = recorder.of(CreateNewRequested)
        assert event.model is apple

    def test_create_new_with_free_text_model(self, bus, recorder):
        bridge = make_bridge(bus)
        bridge.model = "Dragonfruit"

        bridge.create_new()

        assert bridge.input.value == "Dragonfruit"
        assert recorder.of(CreateNewRequested)[0].model == "Dragonfruit"

    def test_create_new_without_model(self, bus, recorder):
        bridge = make_bridge(bus)
        bridge.input.value = "typed"

        bridge.create_new()

        assert bridge.input.value == "typed"
        assert recorder.of(CreateNewRequested)[0].model is None
