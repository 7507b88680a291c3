"""Protocols for the visible text field and the host form system."""

from typing import Protocol

__all__ = ["InputTarget", "FormControl", "TextBuffer"]


class InputTarget(Protocol):
    """The visible text field. A Textual ``Input`` satisfies this protocol."""

    value: str


class FormControl(Protocol):
    """Host form control bound to the typeahead (reset on clear)."""

    def reset(self) -> None:
        ...


class TextBuffer:
    """Headless input target used when no widget is attached."""

    def __init__(self, value: str = "") -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"TextBuffer({self.value!r})"
