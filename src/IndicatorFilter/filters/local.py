"""Client-side filtering of indicator rows that were already fetched."""

from __future__ import annotations

from typing import Any, Final, Iterable, Mapping, Sequence

from IndicatorFilter.api.parser import coerce_id
from IndicatorFilter.core.frequency import is_frequency_compatible
from IndicatorFilter.core.models import FilterGroup, IndicatorItem, SearchResultSet
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.filters.builder import evaluate_left_to_right
from IndicatorFilter.filters.catalog import TEXT_FIELDS

Row = Mapping[str, Any]
UNKNOWN_FREQUENCY: Final[str] = "UNKNOWN"

# Filter field -> row keys that may carry its value, first present key wins.
_ROW_KEYS: Final[Mapping[str, tuple[str, ...]]] = {
    "seasonally_adjusted": ("seasonally_adjusted", "is_seasonally_adjusted"),
    "is_custom": ("is_custom", "custom_indicator"),
    "currentPrices": ("currentPrices", "current_prices"),
    "custom_indicator": ("custom_indicator", "is_custom"),
    "current_prices": ("current_prices", "currentPrices"),
    "region": ("region", "regions"),
    "regions": ("region", "regions"),
}


def text_search(rows: Sequence[Row], term: str) -> list[Row]:
    """Keep rows whose name, code or description contains ``term``.

    Matching is case-insensitive. A blank term keeps every row.
    """
    needle = term.strip().casefold()
    if not needle:
        return list(rows)
    return [
        row
        for row in rows
        if any(needle in str(row.get(key) or "").casefold() for key in ("name", "code", "description"))
    ]


def facet_filter(
    rows: Sequence[Row],
    selections: Mapping[str, Sequence[str]],
    groups: Sequence[FilterGroup],
) -> list[Row]:
    """Keep rows that match every group's selected values.

    A group without selected values matches everything. Within a group any
    selected value may match. "true"/"false" compare against booleans; other
    values compare against the stringified row value, or any element of a
    list-valued field.
    """
    kept: list[Row] = []
    for row in rows:
        if all(_matches_any(row, group.group, selections.get(group.group) or ()) for group in groups):
            kept.append(row)
    return kept


def narrow_to_results(rows: Sequence[Row], results: SearchResultSet) -> list[Row]:
    """Keep rows whose id appears in an advanced filter result.

    An empty result set keeps nothing.
    """
    wanted = {str(item.id) for item in results.all_items()}
    return [row for row in rows if str(row.get("id")) in wanted]


def evaluate_expression(rows: Sequence[Row], expression: FilterExpression) -> list[Row]:
    """Evaluate a filter expression locally over fetched rows.

    Text fields match by case-insensitive substring; every other field
    matches like a single-value facet. Clauses combine left to right with no
    precedence. Row order is preserved.
    """
    def matches(field_key: str, value: str) -> set[int]:
        return {idx for idx, row in enumerate(rows) if _clause_matches(row, field_key, value)}

    base = matches(expression.base.field, expression.base.value)
    chained = ((clause.boolean or "AND", matches(clause.field, clause.value)) for clause in expression.additional_fields)
    kept = evaluate_left_to_right(base, chained)
    return [row for idx, row in enumerate(rows) if idx in kept]


def filter_by_workflow_frequency(rows: Iterable[Row], workflow_frequency: str | None) -> list[Row]:
    """Keep rows whose frequency can feed a workflow of the given frequency."""
    return [row for row in rows if is_frequency_compatible(workflow_frequency, _as_str(row.get("frequency")))]


def group_by_frequency(rows: Iterable[Row]) -> SearchResultSet:
    """Group rows into a result set keyed by their frequency, in first-seen order.

    Rows without a frequency are grouped under ``UNKNOWN_FREQUENCY``.

    Raises:
        ValueError: If a row has no numeric id.
    """
    groups: dict[str, list[IndicatorItem]] = {}
    for row in rows:
        label = _as_str(row.get("frequency")) or UNKNOWN_FREQUENCY
        item = IndicatorItem(
            id=coerce_id(row.get("id")),
            name=str(row.get("name") or ""),
            code=str(row.get("code") or ""),
        )
        groups.setdefault(label, []).append(item)
    return SearchResultSet(groups=groups)


def _clause_matches(row: Row, field_key: str, value: str) -> bool:
    if field_key in TEXT_FIELDS:
        return value.casefold() in str(row.get(field_key) or "").casefold()
    return _matches_any(row, field_key, (value,))


def _matches_any(row: Row, field_key: str, selected: Iterable[str]) -> bool:
    selected = tuple(selected)
    if not selected:
        return True
    row_values = _row_values(row, field_key)
    for value in selected:
        if value in ("true", "false"):
            if (value == "true") in [v for v in row_values if isinstance(v, bool)]:
                return True
            continue
        if value in [str(v) for v in row_values]:
            return True
    return False


def _row_values(row: Row, field_key: str) -> list[Any]:
    for key in _ROW_KEYS.get(field_key, (field_key,)):
        if key in row:
            raw = row[key]
            if raw is None:
                return []
            if isinstance(raw, (list, tuple)):
                return list(raw)
            return [raw]
    return []


def _as_str(value: Any) -> str | None:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return None if value is None else str(value)
