"""Tests for the headless Typeahead control."""

import pytest

from typeahead.domain.events import CreateNewRequested, ModelChanged, OptionSelected
from typeahead.domain.protocols import TextBuffer

from conftest import EventRecorder, StaticFetcher


@pytest.fixture
def recorder(bus):
    return EventRecorder(bus).listen(ModelChanged, OptionSelected)


class TestInputEvents:
    def test_typing_filters_local_source(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name")
        control.input.value = "Ap"

        control.on_input()

        assert control.state.candidates == [{"name": "Apple"}, {"name": "Apricot"}]

    @pytest.mark.parametrize("key", ["left", "up", "right", "down"])
    def test_navigation_keys_do_not_dispatch(self, make_typeahead, fruits, key):
        control = make_typeahead(fruits, display_item="item.name")
        control.input.value = "Ap"

        assert control.on_key(key) is None
        assert control.state.candidates is None

    def test_other_keys_dispatch(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name")
        control.input.value = "Ban"

        control.on_key("n")

        assert control.state.candidates == [{"name": "Banana"}]

    def test_emptying_the_input_clears_the_model(self, make_typeahead, fruits, recorder):
        control = make_typeahead(fruits, display_item="item.name")
        control.input.value = "Ap"
        control.on_input()
        control.select(fruits[0])

        control.input.value = ""
        control.on_input()

        assert control.model is None
        assert recorder.of(ModelChanged)[-1].model is None

    def test_source_can_be_assigned_later(self, make_typeahead, fruits):
        control = make_typeahead(display_item="item.name")
        assert control.source is None

        control.source = fruits
        control.input.value = "ban"
        control.on_input()

        assert control.state.candidates == [{"name": "Banana"}]


@pytest.mark.asyncio
class TestRemoteControl:
    async def test_focus_forces_dispatch_below_min_chars(self, make_typeahead):
        fetcher = StaticFetcher(default=["Apple"])
        control = make_typeahead(fetcher, min_chars=3)
        control.input.value = "a"

        await control.on_focus()

        assert fetcher.calls == [{"query": "a"}]
        assert control.state.candidates == ["Apple"]

    async def test_typing_below_min_chars_does_not_fetch(self, make_typeahead):
        fetcher = StaticFetcher()
        control = make_typeahead(fetcher, min_chars=3)
        control.input.value = "ap"

        assert control.on_input() is None
        assert fetcher.calls == []

    async def test_start_prefetches(self, make_typeahead, fruits):
        fetcher = StaticFetcher(generator=lambda params: fruits)
        control = make_typeahead(fetcher, do_prefetch=True, display_item="item.name")

        await control.start()
        control.input.value = "apr"
        control.on_input()

        assert control.state.candidates == [{"name": "Apricot"}]
        assert len(fetcher.calls) == 1

    async def test_start_without_prefetch(self, make_typeahead):
        control = make_typeahead(StaticFetcher())

        assert control.start() is None

    async def test_close_then_wait_idle(self, make_typeahead):
        control = make_typeahead(StaticFetcher())
        control.input.value = "apple"
        control.on_input()

        control.close()
        await control.wait_idle()

        assert control.state.outstanding_requests == 0


class TestSelection:
    def test_select_updates_model_and_publishes(self, make_typeahead, fruits, recorder):
        control = make_typeahead(fruits, display_item="item.name")
        control.input.value = "Apple"
        changes = []
        control.bridge.register_on_change(changes.append)

        control.select(fruits[0])

        assert control.model is fruits[0]
        assert control.value is fruits[0]
        assert control.state.query == "Apple"
        assert changes == [fruits[0]]
        assert [event.option for event in recorder.of(OptionSelected)] == [fruits[0]]
        assert [event.model for event in recorder.of(ModelChanged)] == [fruits[0]]

    def test_selecting_none_does_not_publish_selection(self, make_typeahead, fruits, recorder):
        control = make_typeahead(fruits, display_item="item.name")

        control.select(None)

        assert recorder.of(OptionSelected) == []
        assert control.model is None

    def test_clear_after_search(self, make_typeahead, fruits, recorder):
        control = make_typeahead(fruits, display_item="item.name", clear_after_search=True)
        control.input.value = "Apple"

        control.select(fruits[0])

        assert control.model is None
        assert control.value == ""
        assert control.input.value == ""
        assert recorder.of(OptionSelected)[0].option is fruits[0]
        assert [event.model for event in recorder.of(ModelChanged)] == [fruits[0], None]

    def test_option_label(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name")

        assert control.option_label(fruits[1]) == "Apricot"


class TestBlur:
    def test_blur_restores_model_text_with_search_button(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name", has_search_button=True)
        control.select(fruits[0])
        control.input.value = ""

        control.on_blur(related_target=object())

        assert control.input.value == "Apple"

    def test_blur_towards_search_button_keeps_input_empty(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name", has_search_button=True)
        control.search_button = object()
        control.select(fruits[0])
        control.input.value = ""

        control.on_blur(related_target=control.search_button)

        assert control.input.value == ""

    def test_blur_without_search_button_leaves_input(self, make_typeahead, fruits):
        control = make_typeahead(fruits, display_item="item.name")
        control.select(fruits[0])
        control.input.value = ""

        control.on_blur()

        assert control.input.value == ""

    def test_blur_marks_touched(self, make_typeahead):
        control = make_typeahead()
        touched = []
        control.bridge.register_on_touched(lambda: touched.append(True))

        control.on_blur()

        assert touched == [True]


class TestCreateNew:
    def test_create_new_publishes_current_model(self, make_typeahead, fruits, bus):
        requests = EventRecorder(bus).listen(CreateNewRequested)
        control = make_typeahead(fruits, display_item="item.name", can_create_new=True)
        control.select(fruits[2])
        control.input.value = "Ban"

        control.create_new()

        assert control.input.value == "Banana"
        assert requests.of(CreateNewRequested)[0].model is fruits[2]


def test_headless_control_uses_text_buffer(make_typeahead):
    control = make_typeahead()

    assert isinstance(control.input, TextBuffer)
