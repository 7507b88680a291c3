"""
Display-string resolution for arbitrary candidate values.

Strategies, in priority order:

1. ``display_item_fn`` - an explicit candidate -> str function
2. ``display_template`` - rendered by the presentation layer only; local
   filtering still needs one of the other two strategies
3. ``display_item`` - a JMESPath expression, ``name`` by default

A leading ``item`` names the candidate itself, so ``item.name`` and ``name``
are the same path. Mapping and list candidates are searched with JMESPath
(``item.owner.email``, ``tags[0]``, ``join(' ', [first, last])``). Plain
objects only support dotted attribute paths. Nothing is ever evaluated as
Python code.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Optional

import jmespath
from jmespath.exceptions import JMESPathError

from typeahead.domain.errors import DisplayResolutionError

_DOTTED = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")

DEFAULT_DISPLAY_PATH = "name"
ROOT_NAME = "item"


def _strip_root(expression: str) -> str:
    if expression == ROOT_NAME:
        return "@"
    for separator in (".", "["):
        if expression.startswith(ROOT_NAME + separator):
            rest = expression[len(ROOT_NAME) :]
            return rest[1:] if separator == "." else rest
    return expression


@dataclass(frozen=True)
class PropertyPath:
    """A compiled display path such as ``item.owner.name``."""

    expression: str
    compiled: Any = field(repr=False, compare=False)

    @classmethod
    def parse(cls, expression: str) -> "PropertyPath":
        """
        Compile ``expression``, dropping a leading ``item`` root.

        Raises:
            DisplayResolutionError: If the expression is empty or not valid JMESPath
        """
        if not isinstance(expression, str) or not expression.strip():
            raise DisplayResolutionError(f"Display path must be a non-empty string, got {expression!r}")
        try:
            compiled = jmespath.compile(_strip_root(expression.strip()))
        except JMESPathError as e:
            raise DisplayResolutionError(
                f"Display path {expression!r} is not a valid JMESPath expression: {e}; use display_item_fn "
                f"for anything else"
            ) from e
        return cls(expression=expression, compiled=compiled)

    @property
    def query(self) -> str:
        """The JMESPath expression actually searched."""
        return self.compiled.expression

    @property
    def is_dotted(self) -> bool:
        return bool(_DOTTED.match(self.query))

    def resolve(self, target: Any) -> Any:
        """Value at this path in ``target``; ``None`` when a step is missing."""
        if target is None:
            return None
        if isinstance(target, (Mapping, list)):
            try:
                value = self.compiled.search(target)
            except JMESPathError as e:
                raise DisplayResolutionError(f"Cannot evaluate {self.expression!r}: {e}") from e
            # mappings may hold plain objects further down the path
            if value is not None or not self.is_dotted:
                return value
        elif self.query == "@":
            return target
        elif not self.is_dotted:
            raise DisplayResolutionError(
                f"{type(target).__name__} candidates only support dotted attribute paths, got {self.expression!r}"
            )
        return self._walk(target)

    def _walk(self, target: Any) -> Any:
        current = target
        for segment in self.query.split("."):
            if isinstance(current, Mapping):
                current = current.get(segment)
            else:
                current = getattr(current, segment, None)
            if current is None:
                return None
        return current


class DisplayResolver:
    """Turns candidates into display strings using the configured strategy."""

    def __init__(
        self,
        display_item_fn: Optional[Callable[[Any], str]] = None,
        display_item: Optional[str] = None,
        display_template: Any = None,
    ) -> None:
        self.display_item_fn = display_item_fn
        self.display_item = display_item
        self.display_template = display_template

    @cached_property
    def _path(self) -> PropertyPath:
        return PropertyPath.parse(self.display_item or DEFAULT_DISPLAY_PATH)

    @property
    def can_filter(self) -> bool:
        """Local filtering needs a display path or a display function."""
        return bool(self.display_item or self.display_item_fn)

    def view_item(self, item: Any) -> str:
        """Resolve the display string of ``item``."""
        if self.display_item_fn is not None:
            return self.display_item_fn(item)
        value = self._path.resolve(item)
        return value if isinstance(value, str) else ("" if value is None else str(value))

    def filter_text(self, item: Any) -> str:
        """Lower-cased display string used for matching; empty strings are rejected."""
        text = self.view_item(item)
        if not text:
            raise DisplayResolutionError(
                f"Display resolution produced an empty string for {item!r}; check display_item or use "
                f"display_item_fn"
            )
        return text.lower()

    def option_label(self, item: Any) -> str:
        """Label shown for a dropdown option or for the model in the input."""
        if self.display_item_fn is not None:
            return self.display_item_fn(item)
        if not item:
            return "" if item is None else str(item)
        return self.view_item(item)
