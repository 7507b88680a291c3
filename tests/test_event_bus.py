"""Tests for the EventBus."""

import pytest

from typeahead.domain.events import EventBus, ModelChanged, OptionSelected


def test_publish_reaches_subscribers_of_that_type():
    bus = EventBus()
    models, options = [], []
    bus.subscribe(ModelChanged, models.append)
    bus.subscribe(OptionSelected, options.append)

    bus.publish(ModelChanged(model="Apple"))

    assert [event.model for event in models] == ["Apple"]
    assert options == []


def test_duplicate_subscription_is_ignored():
    bus = EventBus()
    received = []
    bus.subscribe(ModelChanged, received.append)
    bus.subscribe(ModelChanged, received.append)

    bus.publish(ModelChanged(model=None))

    assert len(received) == 1


def test_unsubscribe_callable():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(ModelChanged, received.append)

    unsubscribe()
    bus.publish(ModelChanged(model=None))

    assert received == []
    assert not bus.has_subscribers(ModelChanged)


def test_unsubscribe_unknown_handler_is_ignored():
    bus = EventBus()

    bus.unsubscribe(ModelChanged, print)


def test_failing_handler_does_not_stop_delivery():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler bug")

    bus.subscribe(OptionSelected, broken)
    bus.subscribe(OptionSelected, received.append)

    bus.publish(OptionSelected(option="Apple"))

    assert [event.option for event in received] == ["Apple"]


def test_coroutine_handlers_are_rejected():
    bus = EventBus()

    async def handler(event):
        pass

    with pytest.raises(TypeError):
        bus.subscribe(ModelChanged, handler)


def test_clear():
    bus = EventBus()
    bus.subscribe(ModelChanged, print)

    bus.clear()

    assert not bus.has_subscribers(ModelChanged)


def test_events_are_timestamped():
    assert ModelChanged(model=None).timestamp > 0
