"""Filter field catalog derived from the indicators metadata set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator, Sequence

from IndicatorFilter.core.models import FieldKind, FilterGroup, FilterItem, MetadataSet

TEXT_FIELDS: Final[tuple[str, ...]] = ("name", "description", "code")
BOOLEAN_FIELDS: Final[tuple[str, ...]] = ("seasonally_adjusted", "is_custom", "currentPrices")
METADATA_CATEGORIES: Final[tuple[str, ...]] = (
    "category",
    "base_year",
    "region",
    "country",
    "frequency",
    "unit",
    "source",
)
PLACEHOLDER_FIELD: Final[str] = "default"


def kind_for_field(key: str) -> FieldKind:
    """Return the value-input kind for a field key."""
    if key in TEXT_FIELDS:
        return FieldKind.TEXT
    if key in BOOLEAN_FIELDS:
        return FieldKind.BOOLEAN
    return FieldKind.CATEGORY


@dataclass(frozen=True, slots=True)
class FieldCatalog:
    """Ordered, closed set of fields a filter expression may reference.

    Attributes:
        groups: Filter groups in display order. Never empty.
        loaded: False while the metadata set has not arrived yet.
    """

    groups: tuple[FilterGroup, ...]
    loaded: bool = True

    def __post_init__(self) -> None:
        if not self.groups:
            raise ValueError("FieldCatalog requires at least one group")
        keys = [group.group for group in self.groups]
        if len(set(keys)) != len(keys):
            raise ValueError(f"FieldCatalog has duplicate fields: {keys}")

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[FilterGroup]:
        return iter(self.groups)

    def __contains__(self, key: object) -> bool:
        return any(group.group == key for group in self.groups)

    @property
    def first_key(self) -> str:
        return self.groups[0].group

    def keys(self) -> tuple[str, ...]:
        return tuple(group.group for group in self.groups)

    def get(self, key: str | None) -> FilterGroup | None:
        if not key:
            return None
        for group in self.groups:
            if group.group == key:
                return group
        return None


def placeholder_catalog() -> FieldCatalog:
    """Return the single-group catalog shown until metadata has loaded."""
    return FieldCatalog(groups=(FilterGroup(PLACEHOLDER_FIELD, FieldKind.CATEGORY),), loaded=False)


def build_catalog(
    metadataset: MetadataSet,
    items: Sequence[FilterGroup] | None = None,
) -> FieldCatalog:
    """Build the field catalog.

    In full mode (``items is None``) the fixed text and boolean fields come
    first, followed by one category group per non-empty metadata category.
    In narrow mode, used when refining an existing result list, the caller's
    groups come first, followed by the text fields only; metadata categories
    are never appended. A caller group whose key repeats an earlier group or
    a text field keeps the first position only.

    Args:
        metadataset: Distinct metadata values from the indicators endpoint.
        items: Caller-supplied groups for narrow mode.

    Returns:
        Field catalog with ``6 + k`` groups in full mode, or
        ``len(items) + 3`` in narrow mode when the caller keys are distinct
        and none is a text field.
    """
    if items is not None:
        caller_groups: dict[str, FilterGroup] = {}
        for group in items:
            caller_groups.setdefault(group.group, _tag_group(group))
        text_keys = [key for key in TEXT_FIELDS if key not in caller_groups]
        return FieldCatalog(groups=tuple(caller_groups.values()) + _fixed_groups(text_keys))

    groups = _fixed_groups(TEXT_FIELDS) + _fixed_groups(BOOLEAN_FIELDS)
    for category in METADATA_CATEGORIES:
        group = create_filter_group(category, getattr(metadataset, category))
        if group is not None:
            groups += (group,)
    return FieldCatalog(groups=groups)


def create_filter_group(name: str, values: Iterable[object] | None) -> FilterGroup | None:
    """Build a category group from raw values.

    Null values are skipped; each remaining value is stringified into both the
    item id and label.

    Returns:
        The group, or None when no values remain.
    """
    if not values:
        return None
    filter_items = tuple(FilterItem(id=str(value), label=str(value)) for value in values if value is not None)
    if not filter_items:
        return None
    return FilterGroup(group=name, kind=kind_for_field(name), items=filter_items)


def _fixed_groups(keys: Sequence[str]) -> tuple[FilterGroup, ...]:
    return tuple(FilterGroup(group=key, kind=kind_for_field(key)) for key in keys)


def _tag_group(group: FilterGroup) -> FilterGroup:
    """Re-tag a caller group so its kind agrees with the field key."""
    kind = kind_for_field(group.group)
    if group.kind is kind:
        return group
    return FilterGroup(group=group.group, kind=kind, items=group.items)
