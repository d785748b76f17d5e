"""Command implementations for the IndicatorFilter CLI.

Each command works on an already-built search service and session, separated
from click option handling so it can be exercised with stubs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from IndicatorFilter.core.frequency import frequency_by_display_name
from IndicatorFilter.core.models import FilterGroup, MetadataSet, SearchResultSet
from IndicatorFilter.core.query import FilterExpression
from IndicatorFilter.filters.catalog import FieldCatalog, build_catalog
from IndicatorFilter.filters.local import (
    facet_filter,
    filter_by_workflow_frequency,
    narrow_to_results,
    text_search,
)
from IndicatorFilter.renderers.base import OutputWriter
from IndicatorFilter.renderers.console import render_catalog, render_expression, render_results, render_rows
from IndicatorFilter.services.search import IndicatorSearchService, SearchError
from IndicatorFilter.services.session import FilterSession
from IndicatorFilter.utils.log import log


@dataclass(slots=True)
class FieldsCommand:
    """List the fields a filter may use.

    With ``within`` set, the catalog is built in narrow mode from those
    metadata groups only.
    """

    service: IndicatorSearchService
    within: Sequence[str] = ()

    def execute(self) -> FieldCatalog:
        catalog = self.service.load_catalog()
        if self.within:
            groups = []
            for key in self.within:
                group = catalog.get(key)
                if group is None:
                    raise ValueError(f"Unknown field for --within: {key}")
                groups.append(group)
            catalog = build_catalog(MetadataSet(), groups)
        for line in render_catalog(catalog).splitlines():
            log.info(line)
        return catalog


@dataclass(slots=True)
class SearchCommand:
    """Run one filter expression and hand the results to the output writer."""

    session: FilterSession
    expression: FilterExpression
    output_writer: OutputWriter

    def execute(self) -> SearchResultSet:
        results = run_search(self.session, self.expression)
        self.output_writer.write_results(self.expression, results)
        return results


@dataclass(slots=True)
class AddCommand:
    """Search, select items inside one frequency group, and add them to a table."""

    session: FilterSession
    expression: FilterExpression
    table_id: str
    frequency: str
    picks: Sequence[int] = ()
    select_all: bool = False

    def execute(self) -> str:
        results = run_search(self.session, self.expression)
        if results.is_empty:
            raise SearchError("Search returned no indicators to add")

        frequency = resolve_frequency(results, self.frequency)
        if self.select_all:
            self.session.toggle_all(frequency)
        for index in dict.fromkeys(self.picks):
            if not 0 <= index < len(results.items_for(frequency)):
                raise ValueError(f"--pick {index} is out of range for {frequency}")
            self.session.toggle_item(frequency, index)

        for line in render_results(results, self.session.selection).splitlines():
            log.info(line)

        path = self.session.submit_selection(self.table_id)
        if path is None:
            raise SearchError(f"Failed to add indicators to table {self.table_id}")
        return path


@dataclass(slots=True)
class RefineCommand:
    """Narrow the indicator list to an advanced filter result, then refine it locally.

    The list is fetched once, cut down to the ids the search returned, and
    then filtered by text, facet values and workflow frequency.
    """

    session: FilterSession
    expression: FilterExpression
    text: str = ""
    facets: Mapping[str, Sequence[str]] | None = None
    workflow_frequency: str | None = None

    def execute(self) -> list[dict[str, Any]]:
        rows = self.session.service.load_rows()
        results = run_search(self.session, self.expression)
        kept = narrow_to_results(rows, results)
        kept = text_search(kept, self.text)
        if self.facets:
            groups = [FilterGroup(group=key) for key in self.facets]
            kept = facet_filter(kept, self.facets, groups)
        kept = filter_by_workflow_frequency(kept, self.workflow_frequency)
        log.info("Refined list: %d of %d indicators", len(kept), len(rows))
        for line in render_rows(kept).splitlines():
            log.info(line)
        return [dict(row) for row in kept]


def run_search(session: FilterSession, expression: FilterExpression) -> SearchResultSet:
    """Load the catalog, apply ``expression`` and search.

    Raises:
        SearchError: If the catalog or the search request fails.
        ExpressionValidationError: If the expression does not fit the catalog.
    """
    if not session.catalog.loaded and not session.load():
        raise SearchError("Field catalog could not be loaded")
    session.builder.load(expression)
    log.info("filter: %s", render_expression(expression))
    results = session.search()
    if results is None:
        raise SearchError("Search failed")
    return results


def resolve_frequency(results: SearchResultSet, requested: str) -> str:
    """Match a frequency label from the results by label, code, or display name.

    Raises:
        ValueError: If no group matches.
    """
    if requested in results.groups:
        return requested
    code = frequency_by_display_name(requested) or requested.upper()
    for label in results.frequencies:
        if label.upper() == code or frequency_by_display_name(label) == code:
            return label
    raise ValueError(f"No results for frequency {requested!r}; available: {list(results.frequencies)}")
