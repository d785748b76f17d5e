"""Advanced indicator filter: field catalog, expression builder, value inputs,
frequency-exclusive selection, and local filtering of fetched rows."""

from __future__ import annotations

from IndicatorFilter.filters.builder import (
    ExpressionBuilder,
    ExpressionValidationError,
    evaluate_left_to_right,
)
from IndicatorFilter.filters.catalog import (
    BOOLEAN_FIELDS,
    TEXT_FIELDS,
    FieldCatalog,
    build_catalog,
    kind_for_field,
    placeholder_catalog,
)
from IndicatorFilter.filters.local import (
    evaluate_expression,
    facet_filter,
    filter_by_workflow_frequency,
    group_by_frequency,
    narrow_to_results,
    text_search,
)
from IndicatorFilter.filters.resolver import InputKind, ValueInput, resolve_value_input
from IndicatorFilter.filters.selection import (
    SelectionOutcome,
    SelectionState,
    SelectionValidationError,
    ToggleAll,
    ToggleItem,
    apply_selection,
    require_selection,
    selected_ids,
)

__all__ = [
    "BOOLEAN_FIELDS",
    "TEXT_FIELDS",
    "ExpressionBuilder",
    "ExpressionValidationError",
    "FieldCatalog",
    "InputKind",
    "SelectionOutcome",
    "SelectionState",
    "SelectionValidationError",
    "ToggleAll",
    "ToggleItem",
    "ValueInput",
    "apply_selection",
    "build_catalog",
    "evaluate_expression",
    "evaluate_left_to_right",
    "facet_filter",
    "filter_by_workflow_frequency",
    "group_by_frequency",
    "kind_for_field",
    "narrow_to_results",
    "placeholder_catalog",
    "require_selection",
    "resolve_value_input",
    "selected_ids",
    "text_search",
]
