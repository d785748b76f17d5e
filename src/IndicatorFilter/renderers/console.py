"""Console text renderers for the field catalog and search results."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from IndicatorFilter.core.frequency import frequency_display_name
from IndicatorFilter.core.models import FieldKind, SearchResultSet
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.filters.catalog import FieldCatalog
from IndicatorFilter.filters.selection import SelectionState
from IndicatorFilter.renderers.base import OutputWriter
from IndicatorFilter.utils.log import log

NO_MATCHES = "No indicators match the filter."
_MAX_LISTED_VALUES = 8


def render_expression(expression: FilterExpression) -> str:
    """Render an expression as ``field = "value" AND field = "value"``."""
    parts = [f'{expression.base.field} = "{expression.base.value}"']
    for clause in expression.additional_fields:
        parts.append(f'{clause.boolean} {clause.field} = "{clause.value}"')
    return " ".join(parts)


def render_catalog(catalog: FieldCatalog) -> str:
    """Render filterable fields with their input kind and sample values."""
    lines: list[str] = []
    for group in catalog:
        if group.kind is FieldKind.TEXT:
            lines.append(f"{group.group} (text)")
        elif group.kind is FieldKind.BOOLEAN:
            lines.append(f"{group.group} (true/false)")
        else:
            values = [item.label for item in group.items[:_MAX_LISTED_VALUES]]
            more = len(group.items) - len(values)
            suffix = f", ... +{more}" if more > 0 else ""
            lines.append(f"{group.group} ({len(group.items)} values): {', '.join(values)}{suffix}")
    return "\n".join(lines) + "\n"


def render_rows(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render fetched indicator rows, one per line."""
    if not rows:
        return NO_MATCHES + "\n"
    lines = [
        f"  {row.get('id')}. {row.get('name') or ''} [{row.get('code') or ''}] ({row.get('frequency') or '-'})"
        for row in rows
    ]
    return "\n".join(lines) + "\n"


def render_results(results: SearchResultSet, selection: SelectionState | None = None) -> str:
    """Render results grouped by frequency.

    Each line carries the item index within its frequency, which is what the
    ``add --pick`` option refers to. Selected items are marked with ``[x]``.
    """
    if results.is_empty:
        return NO_MATCHES + "\n"

    lines: list[str] = []
    for frequency, items in results.groups.items():
        if not items:
            continue
        lines.append(f"== {frequency_display_name(frequency)} ({len(items)}) ==")
        flags = selection.selected.get(frequency, ()) if selection else ()
        for idx, item in enumerate(items):
            mark = "[x] " if idx < len(flags) and flags[idx] else ""
            lines.append(f"  {idx:>3}. {mark}{item.name} [{item.code}] (id={item.id})")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_results(self, expression: FilterExpression, results: SearchResultSet) -> None:
        log.info("filter: %s", render_expression(expression))
        for line in render_results(results).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
