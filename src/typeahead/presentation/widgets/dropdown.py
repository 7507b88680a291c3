"""
Dropdown overlay listing the engine's current candidates.

Options mirror ``typeahead.state.candidates`` one to one, so a picked option
is mapped back to its candidate by position. Distinct candidates sharing a
display string stay separate options.
"""

from __future__ import annotations

from typing import Any, Optional

from textual.widgets import Input
from textual_autocomplete import AutoComplete, DropdownItem, TargetState

from typeahead.logger import get_logger
from typeahead.presentation.widgets.typeahead_input import TypeaheadInput

logger = get_logger("dropdown")


class TypeaheadDropdown(AutoComplete):
    """Shows ``typeahead.state.candidates`` as-is; matching already happened in the engine."""

    def __init__(self, input_widget: TypeaheadInput, **kwargs) -> None:
        self.input_widget = input_widget
        self._candidates: list[Any] = []
        self._completed_index: Optional[int] = None
        super().__init__(target=input_widget, candidates=self._collect_candidates, **kwargs)

    def _collect_candidates(self, state: TargetState) -> list[DropdownItem]:
        typeahead = self.input_widget.typeahead
        self._candidates = list(typeahead.state.candidates or [])
        items = [
            DropdownItem(main=typeahead.option_label(candidate), id=f"candidate-{index}")
            for index, candidate in enumerate(self._candidates)
        ]
        logger.debug(f"Collected {len(items)} dropdown options")
        return items

    def candidate_at(self, index: Optional[int]) -> Any:
        if index is None or not 0 <= index < len(self._candidates):
            return None
        return self._candidates[index]

    def get_search_string(self, target_state: TargetState) -> str:
        return target_state.text

    def get_matches(
        self,
        target_state: TargetState,
        candidates: list[DropdownItem],
        search_string: str,
    ) -> list[DropdownItem]:
        return candidates

    def should_show_dropdown(self, search_string: str) -> bool:
        return bool(search_string) and self.option_list.option_count > 0

    def _complete(self, option_index: int) -> None:
        # apply_completion only receives the label
        self._completed_index = option_index
        try:
            super()._complete(option_index)
        finally:
            self._completed_index = None

    def apply_completion(self, value: str, state: TargetState) -> None:
        candidate = self.candidate_at(self._completed_index)
        with self.input_widget.prevent(Input.Changed):
            self.input_widget.value = value
            self.input_widget.cursor_position = len(value)
        self.input_widget.typeahead.select(candidate)

    def refresh_candidates(self) -> None:
        """Rebuild the options after an asynchronous candidate update."""
        self._target_state = self._get_target_state()
        search_string = self.get_search_string(self._target_state)
        self._rebuild_options(self._target_state, search_string)
