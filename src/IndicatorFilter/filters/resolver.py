"""Value-input resolution for filter fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from IndicatorFilter.core.models import FieldKind, FilterItem
from IndicatorFilter.filters.catalog import FieldCatalog, kind_for_field

BOOLEAN_CHOICES: Final[tuple[FilterItem, ...]] = (
    FilterItem(id="true", label="True"),
    FilterItem(id="false", label="False"),
)


class InputKind(str, Enum):
    TEXT = "text"
    CHOICE = "choice"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ValueInput:
    """Input affordance for a clause value.

    Attributes:
        kind: Free text, closed choice, or nothing to render.
        options: Legal values for ``CHOICE``; empty otherwise.
        placeholder: Hint text for the input.
    """

    kind: InputKind
    options: tuple[FilterItem, ...] = ()
    placeholder: str = ""

    def accepts(self, value: str) -> bool:
        if self.kind is InputKind.TEXT:
            return bool(value)
        if self.kind is InputKind.CHOICE:
            return any(option.id == value for option in self.options)
        return False


_NO_INPUT = ValueInput(kind=InputKind.NONE)


def resolve_value_input(field_key: str | None, catalog: FieldCatalog) -> ValueInput:
    """Choose the value input for a field.

    Text fields get free text, boolean fields get exactly "true"/"false", and
    category fields get their group's items. Nothing is rendered when no field
    is selected, or when a category field is missing from the catalog or has
    no items.
    """
    if not field_key:
        return _NO_INPUT

    group = catalog.get(field_key)
    kind = group.kind if group is not None else kind_for_field(field_key)

    if kind is FieldKind.TEXT:
        return ValueInput(kind=InputKind.TEXT, placeholder=f"Enter {field_key}")
    if kind is FieldKind.BOOLEAN:
        return ValueInput(kind=InputKind.CHOICE, options=BOOLEAN_CHOICES, placeholder="Select true or false")
    if group is None or not group.items:
        return _NO_INPUT
    return ValueInput(kind=InputKind.CHOICE, options=group.items, placeholder="Select an item")
