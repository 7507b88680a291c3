"""Shared fixtures and fakes for typeahead tests."""

import asyncio
from typing import Any, Callable, Mapping, Optional

import pytest

from typeahead.application import Typeahead, TypeaheadConfig
from typeahead.domain.events import EventBus, Event


FRUITS = [{"name": "Apple"}, {"name": "Apricot"}, {"name": "Banana"}]


class StaticFetcher:
    """Fetcher answering from a canned mapping (or a generator function)."""

    def __init__(
        self,
        results: Optional[Mapping[str, list]] = None,
        default: Optional[list] = None,
        generator: Optional[Callable[[Mapping[str, Any]], Any]] = None,
        error: Optional[Exception] = None,
    ):
        self.results = dict(results or {})
        self.default = default if default is not None else []
        self.generator = generator
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def fetch(self, params: Mapping[str, Any]) -> Any:
        self.calls.append(dict(params))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if self.generator is not None:
            return self.generator(params)
        return self.results.get(params.get("query"), self.default)


class ControlledFetcher:
    """Fetcher whose calls stay pending until the test resolves them."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []
        self.futures: list[asyncio.Future] = []

    async def fetch(self, params: Mapping[str, Any]) -> Any:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(dict(params))
        self.futures.append(future)
        return await future

    def resolve(self, index: int, result: Any) -> None:
        self.futures[index].set_result(result)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)


class EventRecorder:
    """Collects published events by type."""

    def __init__(self, bus: EventBus):
        self.bus = bus
        self.events: list[Event] = []

    def listen(self, *event_types: type) -> "EventRecorder":
        for event_type in event_types:
            self.bus.subscribe(event_type, self.events.append)
        return self

    def of(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def fruits() -> list[dict]:
    return [dict(item) for item in FRUITS]


@pytest.fixture
def make_typeahead(bus):
    """Factory building a headless control on the shared bus."""

    def factory(source: Any = None, **config: Any) -> Typeahead:
        return Typeahead(TypeaheadConfig(**config), source=source, event_bus=bus)

    return factory


async def settle() -> None:
    """Let already-scheduled callbacks run."""
    for _ in range(3):
        await asyncio.sleep(0)
