"""Frequency-exclusive selection over grouped search results.

Selections may span any number of items, but only inside one frequency group
at a time: the add-to-table operation does not accept mixed frequencies.
Every state change goes through :func:`apply_selection`.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

from IndicatorFilter.core.models import SearchResultSet

SINGLE_FREQUENCY_TITLE = "Select options from a single frequency"
SINGLE_FREQUENCY_DETAIL = "Please deselect items from the other frequency first."


class SelectionValidationError(ValueError):
    """Raised when a selection is submitted with nothing selected."""


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Per-frequency selection flags plus the frequency holding the lock.

    Attributes:
        selected: Frequency label -> flags aligned with that group's items.
        active_frequency: Frequency that currently owns selections, or None
            when nothing is selected.
    """

    selected: Mapping[str, tuple[bool, ...]]
    active_frequency: str | None = None

    def __post_init__(self) -> None:
        frozen = {label: tuple(flags) for label, flags in self.selected.items()}
        object.__setattr__(self, "selected", MappingProxyType(frozen))

    @classmethod
    def empty_for(cls, results: SearchResultSet) -> SelectionState:
        return cls(selected={label: (False,) * len(items) for label, items in results.groups.items()})

    @property
    def is_locked(self) -> bool:
        return self.active_frequency is not None

    def count(self) -> int:
        return sum(sum(flags) for flags in self.selected.values())

    def all_selected(self, frequency: str) -> bool:
        flags = self.selected.get(frequency)
        return bool(flags) and all(flags)


@dataclass(frozen=True, slots=True)
class ToggleItem:
    frequency: str
    index: int


@dataclass(frozen=True, slots=True)
class ToggleAll:
    frequency: str


SelectionAction = Union[ToggleItem, ToggleAll]


@dataclass(frozen=True, slots=True)
class SelectionNotice:
    """User-facing explanation of a rejected selection change."""

    title: str
    description: str


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    """Result of one transition.

    Attributes:
        state: State after the action (the input state when rejected).
        notice: Set when the action was rejected by the single-frequency rule.
    """

    state: SelectionState
    notice: SelectionNotice | None = None

    @property
    def rejected(self) -> bool:
        return self.notice is not None


def apply_selection(state: SelectionState, action: SelectionAction) -> SelectionOutcome:
    """Apply one selection action.

    While locked to a frequency, any action on another frequency is rejected
    and leaves the state untouched. Toggling an item flips it; toggling all
    selects every item unless every item is already selected, in which case
    it clears them. The lock follows whether the frequency still has any
    selected item. Unknown frequencies and out-of-range indexes are ignored.
    """
    if state.active_frequency is not None and state.active_frequency != action.frequency:
        return SelectionOutcome(
            state=state,
            notice=SelectionNotice(title=SINGLE_FREQUENCY_TITLE, description=SINGLE_FREQUENCY_DETAIL),
        )

    flags = state.selected.get(action.frequency)
    if flags is None:
        return SelectionOutcome(state=state)

    if isinstance(action, ToggleItem):
        if not 0 <= action.index < len(flags):
            return SelectionOutcome(state=state)
        updated = tuple(not flag if idx == action.index else flag for idx, flag in enumerate(flags))
    elif isinstance(action, ToggleAll):
        target = not all(flags)
        updated = (target,) * len(flags)
    else:
        raise TypeError(f"Unsupported selection action: {action!r}")

    selected = dict(state.selected)
    selected[action.frequency] = updated
    active = action.frequency if any(updated) else None
    return SelectionOutcome(state=SelectionState(selected=selected, active_frequency=active))


def selected_ids(state: SelectionState, results: SearchResultSet) -> list[int]:
    """Map selected flags back to indicator ids, in result order."""
    ids: list[int] = []
    for frequency, flags in state.selected.items():
        items = results.items_for(frequency)
        for index, is_selected in enumerate(flags):
            if is_selected and index < len(items):
                ids.append(items[index].id)
    return ids


def require_selection(state: SelectionState, results: SearchResultSet) -> list[int]:
    """Return selected ids, refusing an empty selection.

    Raises:
        SelectionValidationError: If no item is selected.
    """
    ids = selected_ids(state, results)
    if not ids:
        raise SelectionValidationError("Please select at least one indicator to add to the table.")
    return ids
