from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence


class FieldKind(str, Enum):
    """How a filterable field takes its value."""

    TEXT = "text"
    BOOLEAN = "boolean"
    CATEGORY = "category"


@dataclass(frozen=True, slots=True)
class FilterItem:
    """A legal value for an enumerable field.

    Attributes:
        id: Value sent to the search endpoint.
        label: Display text. Equal to ``id`` for metadata-derived items.
    """

    id: str
    label: str


@dataclass(frozen=True, slots=True)
class FilterGroup:
    """One searchable field and, for categories, its legal values.

    Attributes:
        group: Unique field key (e.g. "source", "seasonally_adjusted").
        kind: Value input kind, fixed when the catalog is built.
        items: Legal values; empty for free-text and boolean fields.
    """

    group: str
    kind: FieldKind = FieldKind.CATEGORY
    items: tuple[FilterItem, ...] = ()


@dataclass(frozen=True, slots=True)
class MetadataSet:
    """Distinct metadata values reported by the indicators endpoint.

    Every attribute is a tuple of stringified values with nulls removed.
    """

    category: tuple[str, ...] = ()
    base_year: tuple[str, ...] = ()
    region: tuple[str, ...] = ()
    country: tuple[str, ...] = ()
    source: tuple[str, ...] = ()
    frequency: tuple[str, ...] = ()
    unit: tuple[str, ...] = ()
    code: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class IndicatorItem:
    """A single search hit.

    Attributes:
        id: Numeric indicator id.
        name: Indicator name.
        code: Indicator code.
    """

    id: int
    name: str
    code: str


@dataclass(frozen=True, slots=True)
class SearchResultSet:
    """Search hits grouped by frequency label.

    Group order follows the response. Produced fresh for every successful
    search and never mutated.
    """

    groups: Mapping[str, tuple[IndicatorItem, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {label: tuple(items) for label, items in self.groups.items()}
        object.__setattr__(self, "groups", MappingProxyType(frozen))

    @property
    def frequencies(self) -> tuple[str, ...]:
        return tuple(self.groups.keys())

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def is_empty(self) -> bool:
        """True when no frequency group holds any item."""
        return self.total == 0

    def items_for(self, frequency: str) -> Sequence[IndicatorItem]:
        return self.groups.get(frequency, ())

    def all_items(self) -> Iterator[IndicatorItem]:
        for items in self.groups.values():
            yield from items

    def to_payload(self) -> dict[str, list[dict[str, object]]]:
        """Return the result set in the wire shape used by the search endpoint."""
        return {
            label: [{"id": item.id, "name": item.name, "code": item.code} for item in items]
            for label, items in self.groups.items()
        }
